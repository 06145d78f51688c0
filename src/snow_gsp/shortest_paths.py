# src/snow_gsp/shortest_paths.py

import numpy as np
from contextlib import nullcontext
from joblib import Parallel, delayed
from tqdm import tqdm
from tqdm_joblib import tqdm_joblib
from scipy.sparse import coo_matrix, csr_matrix
from scipy.sparse.csgraph import dijkstra

def _edges_only(Dist: csr_matrix) -> csr_matrix:
    # csgraph reads stored zeros as zero-length edges
    D = csr_matrix(Dist, dtype=np.float64, copy=True)
    D.eliminate_zeros()
    return D

def single_source_distances(Dist: csr_matrix, source: int) -> np.ndarray:
    """Distances from `source` along directed edges i -> j of Dist; np.inf where unreachable."""
    return dijkstra(_edges_only(Dist), directed=True, indices=int(source))

def kept_node_distances(Dist: csr_matrix, kept: np.ndarray, n_jobs: int = 1, progress: bool = False) -> np.ndarray:
    """
    Shortest-path distances between the kept nodes, one single-source run per kept node.

    Returns a dense (len(kept), len(kept)) array D with D[p, q] the distance
    from kept[q] to kept[p] (column q holds the run sourced at kept[q]).
    Unreachable pairs are np.inf. The result does not depend on n_jobs.
    """
    kept = np.asarray(kept, dtype=np.int64)
    n_red = kept.shape[0]
    if n_red == 0:
        return np.zeros((0, 0), dtype=np.float64)
    D = _edges_only(Dist)
    if n_jobs == 1 and not progress:
        rows = np.atleast_2d(dijkstra(D, directed=True, indices=kept))
    else:
        ctx = tqdm_joblib(tqdm(total=n_red, desc="shortest paths")) if progress else nullcontext()
        with ctx:
            rows = Parallel(n_jobs=n_jobs)(delayed(dijkstra)(D, directed=True, indices=int(s)) for s in kept)
        rows = np.vstack(rows)
    # rows[q] is sourced at kept[q]; restrict to kept targets and put sources in columns
    return rows[:, kept].T.copy()

def finite_sparse(D: np.ndarray) -> csr_matrix:
    """Sparse copy of D keeping only finite non-zero entries."""
    D = np.asarray(D, dtype=np.float64)
    mask = np.isfinite(D) & (D != 0)
    r, c = np.nonzero(mask)
    return coo_matrix((D[r, c], (r, c)), shape=D.shape).tocsr()
