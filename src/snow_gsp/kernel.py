# src/snow_gsp/kernel.py

import numpy as np
from scipy.sparse import csr_matrix, diags, triu

from .errors import DisconnectedInputError

def kernel_bandwidth(Dist: csr_matrix) -> float:
    """
    Mean squared edge length over the upper triangle of Dist (diagonal included).

    Computed on the full road graph so that the reduced graph keeps the
    distance scale of the original one.
    """
    U = triu(csr_matrix(Dist, dtype=np.float64)).tocsr()
    U.eliminate_zeros()
    if U.nnz == 0:
        raise DisconnectedInputError("Dist has no upper-triangular edge, kernel bandwidth is undefined")
    return float(np.sum(U.data ** 2) / U.nnz)

def gaussian_weights(Dist_red: csr_matrix, sigma: float) -> csr_matrix:
    """w = exp(-d^2 / sigma) on every stored finite distance, diagonal removed."""
    if not sigma > 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    W = csr_matrix(Dist_red, dtype=np.float64, copy=True)
    W.eliminate_zeros()
    finite = np.isfinite(W.data)
    W.data = np.where(finite, np.exp(-np.where(finite, W.data, 0.0) ** 2 / sigma), 0.0)
    W = csr_matrix(W - diags(W.diagonal()))
    W.eliminate_zeros()
    return W

def symmetrize(W: csr_matrix, method: str = "average") -> csr_matrix:
    W = csr_matrix(W); WT = W.T.tocsr()
    if method == "average":
        S = (W + WT) / 2
    elif method == "full":
        S = W + WT
    elif method == "maximum":
        S = W.maximum(WT)
    elif method == "minimum":
        S = W.minimum(WT)
    else:
        raise ValueError(f"Unknown symmetrization method: {method}")
    S = csr_matrix(S)
    S.eliminate_zeros()
    return S
