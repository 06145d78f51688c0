# src/snow_gsp/graph.py

import numpy as np
from enum import IntEnum
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple, Union
from scipy.sparse import csr_matrix, issparse

from .errors import InvalidInputError

REQUIRED_FIELDS = ("N", "W", "Dist", "idx_cholera", "idx_pump", "coords")
REDUCED_GRAPH_TYPE = "nearest neighbors"

class Role(IntEnum):
    CHOLERA = 0
    PUMP = 1

@dataclass(frozen=True, eq=False)
class Graph:
    """
    Graph over the Soho nodes (roads, cholera deaths, pumps).

    W is the symmetric weight matrix, Dist the (possibly asymmetric) edge
    lengths used for shortest paths: Dist[i, j] is the length of edge i -> j,
    zero meaning no edge. Indices are 0-based.
    The trailing fields are derived by graph_default_parameters().
    """
    N: int
    W: csr_matrix
    Dist: csr_matrix
    idx_cholera: np.ndarray
    idx_pump: np.ndarray
    coords: np.ndarray
    sigma: Optional[float] = None
    type: Optional[str] = None
    A: Optional[csr_matrix] = None
    d: Optional[np.ndarray] = None
    Ne: Optional[int] = None
    directed: Optional[bool] = None
    lap_type: Optional[str] = None
    L: Optional[csr_matrix] = None

    def __post_init__(self):
        object.__setattr__(self, "N", _as_count(self.N))
        object.__setattr__(self, "W", _as_csr(self.W))
        object.__setattr__(self, "Dist", _as_csr(self.Dist))
        object.__setattr__(self, "idx_cholera", _as_index(self.idx_cholera, "idx_cholera"))
        object.__setattr__(self, "idx_pump", _as_index(self.idx_pump, "idx_pump"))
        object.__setattr__(self, "coords", np.atleast_2d(np.asarray(self.coords, dtype=np.float64)))

    @classmethod
    def from_mapping(cls, G: Union[Mapping[str, Any], Any], one_based: bool = False) -> "Graph":
        """Build a Graph from a dict or an attribute record (e.g. a scipy mat_struct)."""
        if isinstance(G, Graph):
            return G
        get = G.get if isinstance(G, Mapping) else (lambda k: getattr(G, k, None))
        values = {}
        for k in REQUIRED_FIELDS:
            v = get(k)
            if v is None:
                raise InvalidInputError(k, "G does not have the required field")
            values[k] = v
        offset = 1 if one_based else 0
        extra = {}
        sigma = get("sigma")
        if sigma is not None and np.size(sigma) == 1:
            extra["sigma"] = float(np.asarray(sigma).ravel()[0])
        gtype = get("type")
        if isinstance(gtype, str):
            extra["type"] = gtype
        return cls(N=_as_count(values["N"]),
                   W=_as_csr(values["W"]),
                   Dist=_as_csr(values["Dist"]),
                   idx_cholera=_as_index(values["idx_cholera"], "idx_cholera") - offset,
                   idx_pump=_as_index(values["idx_pump"], "idx_pump") - offset,
                   coords=np.atleast_2d(np.asarray(values["coords"], dtype=np.float64)),
                   **extra)

    def kept_nodes(self) -> np.ndarray:
        """Cholera nodes first, then pumps."""
        return np.concatenate([self.idx_cholera, self.idx_pump]).astype(np.int64)

    def kept_roles(self) -> np.ndarray:
        return np.concatenate([np.full(len(self.idx_cholera), Role.CHOLERA, dtype=np.int8),
                               np.full(len(self.idx_pump), Role.PUMP, dtype=np.int8)])

    def with_fields(self, **changes) -> "Graph":
        return replace(self, **changes)

def _as_count(v) -> int:
    arr = np.asarray(v).ravel()
    if arr.size != 1:
        raise InvalidInputError("N", "must be a scalar")
    n = arr[0]
    if not np.isfinite(n) or int(n) != n or int(n) <= 0:
        raise InvalidInputError("N", f"must be a positive integer, got {n!r}")
    return int(n)

def _as_csr(M) -> csr_matrix:
    if isinstance(M, csr_matrix) and M.dtype == np.float64:
        return M
    if issparse(M):
        return csr_matrix(M, dtype=np.float64)
    return csr_matrix(np.atleast_2d(np.asarray(M, dtype=np.float64)))

def _as_index(v, name: str) -> np.ndarray:
    if isinstance(v, np.ndarray) and v.ndim == 1 and v.dtype == np.int64:
        return v
    arr = np.asarray(v).ravel()
    if arr.size == 0:
        return np.array([], dtype=np.int64)
    if np.any(arr != np.round(arr)):
        raise InvalidInputError(name, "node indices must be integers")
    return arr.astype(np.int64)

def validate_graph(G: Graph) -> None:
    """Check shapes, W symmetry and the index sets; raise InvalidInputError naming the field."""
    N = G.N
    for name in ("W", "Dist"):
        M = getattr(G, name)
        if M.shape != (N, N):
            raise InvalidInputError(name, f"must be {N}x{N}, got {M.shape[0]}x{M.shape[1]}")
        if M.nnz and M.data.min() < 0:
            raise InvalidInputError(name, "must be non-negative")
    if (G.W != G.W.T).nnz:
        raise InvalidInputError("W", "must be symmetric")
    if np.any(G.W.diagonal() != 0):
        raise InvalidInputError("W", "must have a zero diagonal")
    if G.coords.shape[0] != N:
        raise InvalidInputError("coords", f"must have {N} rows, got {G.coords.shape[0]}")
    for name in ("idx_cholera", "idx_pump"):
        idx = getattr(G, name)
        if idx.size and (idx.min() < 0 or idx.max() >= N):
            raise InvalidInputError(name, f"indices must lie in [0, {N})")
        if np.unique(idx).size != idx.size:
            raise InvalidInputError(name, "indices must be unique")
    if np.intersect1d(G.idx_cholera, G.idx_pump).size:
        raise InvalidInputError("idx_pump", "a node cannot be both a cholera and a pump node")

def validate_signals(G: Graph, x, b) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x).ravel(); b = np.asarray(b).ravel()
    if x.shape[0] != G.N:
        raise InvalidInputError("x", f"must be of length G.N={G.N}, got {x.shape[0]}")
    if b.shape[0] != G.N:
        raise InvalidInputError("b", f"must be of length G.N={G.N}, got {b.shape[0]}")
    return x, b
