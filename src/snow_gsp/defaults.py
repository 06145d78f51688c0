# src/snow_gsp/defaults.py

import numpy as np
from typing import Optional
from scipy.sparse import csr_matrix, diags, triu

from .graph import Graph

def _is_symmetric(W: csr_matrix) -> bool:
    return (W != W.T).nnz == 0

def laplacian(W: csr_matrix, lap_type: str = "combinatorial") -> csr_matrix:
    d = np.asarray(W.sum(axis=1)).ravel()
    if lap_type == "combinatorial":
        return csr_matrix(diags(d) - W)
    if lap_type == "normalized":
        inv_sqrt = np.zeros_like(d)
        nz = d > 0
        inv_sqrt[nz] = 1.0 / np.sqrt(d[nz])
        Dm = diags(inv_sqrt)
        return csr_matrix(diags(nz.astype(np.float64)) - Dm @ W @ Dm)
    raise ValueError(f"Unknown laplacian type: {lap_type}")

def graph_default_parameters(G: Graph, lap_type: Optional[str] = None) -> Graph:
    """
    Return a copy of G with the derived fields filled in.

    Fields already set (sigma, Dist, idx_cholera, idx_pump, coords, type,
    lap_type) are left untouched, so the call is idempotent.
    """
    W = csr_matrix(G.W, dtype=np.float64, copy=True)
    W.eliminate_zeros()
    directed = not _is_symmetric(W)
    lap = G.lap_type or lap_type or "combinatorial"
    return G.with_fields(
        W=W,
        type=G.type if G.type is not None else "unknown",
        A=csr_matrix(W > 0),
        d=np.asarray(W.sum(axis=1)).ravel(),
        Ne=int(W.nnz if directed else triu(W).nnz),
        directed=directed,
        lap_type=lap,
        L=laplacian(W, lap),
    )
