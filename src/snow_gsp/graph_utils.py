
import numpy as np
from typing import List, Tuple
from scipy.sparse import csr_matrix, csgraph

def connected_subgraphs(M: csr_matrix) -> List[Tuple[csr_matrix, np.ndarray]]:
    """
    Split the undirected graph M > 0 into its connected components.

    Returns (induced submatrix, increasing node ids) pairs ordered by
    non-increasing size; among equal sizes the component holding the
    smallest node id comes first.
    """
    n = M.shape[0]
    if n == 0: return []
    graph = (M > 0).astype(int)
    n_components, labels = csgraph.connected_components(graph, directed=False)
    counts = np.bincount(labels, minlength=n_components)
    # labels are numbered in order of first node, so a stable sort keeps that order on ties
    order = np.argsort(-counts, kind="stable")
    out = []
    for comp_id in order:
        idx = np.where(labels == comp_id)[0]
        out.append((subgraph_by_nodes(M, idx), idx))
    return out

def largest_connected_component(M: csr_matrix):
    n = M.shape[0]
    if n == 0: return M, np.array([], dtype=int)
    return connected_subgraphs(M)[0]

def subgraph_by_nodes(M: csr_matrix, idx: np.ndarray) -> csr_matrix:
    return csr_matrix(M[idx][:, idx])
