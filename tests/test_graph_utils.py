# tests/test_graph_utils.py
"""Tests for connected component extraction."""

from __future__ import annotations

import numpy as np
from scipy.sparse import coo_matrix

from snow_gsp.graph_utils import connected_subgraphs, largest_connected_component, subgraph_by_nodes


def _sym(n, pairs):
    rows = np.array([i for i, _ in pairs]); cols = np.array([j for _, j in pairs])
    M = coo_matrix((np.ones(len(pairs)), (rows, cols)), shape=(n, n)).tocsr()
    return (M + M.T).tocsr()


def test_components_are_ordered_by_size() -> None:
    M = _sym(7, [(0, 1), (2, 3), (4, 5), (5, 6)])
    comps = connected_subgraphs(M)
    assert [c[1].tolist() for c in comps] == [[4, 5, 6], [0, 1], [2, 3]]
    assert comps[0][0].shape == (3, 3)


def test_tie_goes_to_component_with_smallest_node() -> None:
    M = _sym(4, [(2, 3), (0, 1)])
    sub, idx = largest_connected_component(M)
    np.testing.assert_array_equal(idx, [0, 1])
    assert sub.shape == (2, 2)


def test_isolated_nodes_are_components() -> None:
    M = _sym(3, [(1, 2)])
    comps = connected_subgraphs(M)
    assert [c[1].tolist() for c in comps] == [[1, 2], [0]]


def test_empty_graph() -> None:
    M = coo_matrix((0, 0)).tocsr()
    assert connected_subgraphs(M) == []
    sub, idx = largest_connected_component(M)
    assert idx.size == 0


def test_subgraph_by_nodes_keeps_induced_weights() -> None:
    M = _sym(4, [(0, 1), (1, 2), (2, 3)])
    sub = subgraph_by_nodes(M, np.array([1, 2]))
    np.testing.assert_array_equal(sub.toarray(), [[0, 1], [1, 0]])
