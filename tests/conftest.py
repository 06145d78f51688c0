# tests/conftest.py
"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, Tuple

import numpy as np
import pytest
from scipy.sparse import coo_matrix

from snow_gsp.graph import Graph

Edge = Tuple[int, int, float]


def _make_graph(
    n: int,
    edges: Iterable[Edge],
    idx_cholera: Sequence[int],
    idx_pump: Sequence[int],
    directed: bool = False,
) -> Graph:
    edges = list(edges)
    rows = np.asarray([i for i, _, _ in edges], dtype=np.int64)
    cols = np.asarray([j for _, j, _ in edges], dtype=np.int64)
    data = np.asarray([w for _, _, w in edges], dtype=np.float64)
    Dist = coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()
    if not directed:
        Dist = (Dist + Dist.T).tocsr()
    W = ((Dist + Dist.T) > 0).astype(np.float64).tocsr()
    coords = np.column_stack([np.arange(n, dtype=np.float64), np.zeros(n)])
    return Graph(
        N=n,
        W=W,
        Dist=Dist,
        idx_cholera=np.asarray(idx_cholera, dtype=np.int64),
        idx_pump=np.asarray(idx_pump, dtype=np.int64),
        coords=coords,
    )


@pytest.fixture
def graph_factory() -> Callable[..., Graph]:
    """Builds a Graph from an edge list (i, j, length)."""
    return _make_graph


@pytest.fixture
def soho_graph() -> Graph:
    """
    Roads 0-1-2, cholera 3 on road 0, cholera 4 on road 2, pump 5 on road 1.

    Kept-node distances: 3-4 = 5, 3-5 = 3, 4-5 = 4. sigma = 8 / 5.
    """
    edges = [(0, 1, 1.0), (1, 2, 1.0), (0, 3, 1.0), (2, 4, 2.0), (1, 5, 1.0)]
    return _make_graph(6, edges, idx_cholera=[3, 4], idx_pump=[5])


@pytest.fixture
def soho_graph_with_fragment() -> Graph:
    """soho_graph plus a detached road 6 carrying pump 7."""
    edges = [(0, 1, 1.0), (1, 2, 1.0), (0, 3, 1.0), (2, 4, 2.0), (1, 5, 1.0), (6, 7, 1.0)]
    return _make_graph(8, edges, idx_cholera=[3, 4], idx_pump=[5, 7])
