# src/snow_gsp/io.py

import os
import numpy as np
import pandas as pd
import scipy.io as sio
from typing import Tuple
from scipy.sparse import coo_matrix, csc_matrix

from .errors import InvalidInputError
from .graph import Graph

def load_mat(path: str, graph_var: str = "G", x_var: str = "x", b_var: str = "b") -> Tuple[Graph, np.ndarray, np.ndarray]:
    """
    Read a graph and its two signals from a MATLAB file (as written by snow_gis()).
    Index fields are stored 1-based on disk and returned 0-based.
    """
    mat = sio.loadmat(path, squeeze_me=True, struct_as_record=False)
    for var in (graph_var, x_var, b_var):
        if var not in mat:
            raise InvalidInputError(var, f"variable not found in {os.path.basename(path)}")
    G = Graph.from_mapping(mat[graph_var], one_based=True)
    x = np.atleast_1d(np.asarray(mat[x_var], dtype=np.float64)).ravel()
    b = np.atleast_1d(np.asarray(mat[b_var], dtype=np.float64)).ravel()
    return G, x, b

def save_mat(path: str, G: Graph, x, b) -> None:
    g = {
        "N": float(G.N),
        "W": csc_matrix(G.W),
        "Dist": csc_matrix(G.Dist),
        "idx_cholera": (G.idx_cholera + 1).astype(np.float64),
        "idx_pump": (G.idx_pump + 1).astype(np.float64),
        "coords": G.coords,
    }
    if G.sigma is not None: g["sigma"] = float(G.sigma)
    if G.type is not None: g["type"] = G.type
    if G.d is not None: g["d"] = G.d
    if G.L is not None: g["L"] = csc_matrix(G.L)
    if G.Ne is not None: g["Ne"] = float(G.Ne)
    if G.lap_type is not None: g["lap_type"] = G.lap_type
    sio.savemat(path, {"G": g, "x": np.asarray(x, dtype=np.float64), "b": np.asarray(b, dtype=np.float64)},
                do_compression=True)

def _sparse_parts(prefix: str, M) -> dict:
    C = coo_matrix(M)
    return {f"{prefix}_data": C.data, f"{prefix}_row": C.row, f"{prefix}_col": C.col}

def _sparse_from(arch, prefix: str, n: int):
    return coo_matrix((arch[f"{prefix}_data"], (arch[f"{prefix}_row"], arch[f"{prefix}_col"])), shape=(n, n)).tocsr()

def save_npz(path: str, G: Graph, x, b) -> None:
    np.savez_compressed(
        path,
        N=np.int64(G.N),
        idx_cholera=G.idx_cholera, idx_pump=G.idx_pump, coords=G.coords,
        sigma=np.float64(np.nan if G.sigma is None else G.sigma),
        type=np.str_(G.type or ""),
        x=np.asarray(x), b=np.asarray(b),
        **_sparse_parts("W", G.W), **_sparse_parts("Dist", G.Dist),
    )

def load_npz(path: str) -> Tuple[Graph, np.ndarray, np.ndarray]:
    with np.load(path, allow_pickle=False) as arch:
        missing = [k for k in ("N", "W_data", "Dist_data", "idx_cholera", "idx_pump", "coords", "x", "b") if k not in arch.files]
        if missing:
            raise InvalidInputError(missing[0], f"array not found in {os.path.basename(path)}")
        n = int(arch["N"])
        sigma = float(arch["sigma"]) if "sigma" in arch.files else np.nan
        gtype = str(arch["type"]) if "type" in arch.files else ""
        G = Graph.from_mapping({
            "N": n,
            "W": _sparse_from(arch, "W", n),
            "Dist": _sparse_from(arch, "Dist", n),
            "idx_cholera": arch["idx_cholera"],
            "idx_pump": arch["idx_pump"],
            "coords": arch["coords"],
            "sigma": None if np.isnan(sigma) else sigma,
            "type": gtype or None,
        })
        return G, arch["x"].copy(), arch["b"].copy()

def load_graph(path: str, **kwargs) -> Tuple[Graph, np.ndarray, np.ndarray]:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".mat": return load_mat(path, **kwargs)
    if ext == ".npz": return load_npz(path)
    raise InvalidInputError("path", f"unsupported graph file type '{ext}' (expected .mat or .npz)")

def save_graph(path: str, G: Graph, x, b) -> None:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".mat": return save_mat(path, G, x, b)
    if ext == ".npz": return save_npz(path, G, x, b)
    raise InvalidInputError("path", f"unsupported graph file type '{ext}' (expected .mat or .npz)")

def node_table(G: Graph, x, b) -> pd.DataFrame:
    role = np.full(G.N, "road", dtype=object)
    role[G.idx_cholera] = "cholera"
    role[G.idx_pump] = "pump"
    df = pd.DataFrame({"node": np.arange(G.N), "role": role,
                       "x": np.asarray(x).ravel(), "b": np.asarray(b).ravel()})
    if G.coords.shape[1] >= 2:
        df["lon"] = G.coords[:, 0]; df["lat"] = G.coords[:, 1]
    return df
