# src/snow_gsp/reduce.py
"""
Reduction of the Soho graph to its cholera and pump nodes.

Road nodes are discarded; the distance between two kept nodes becomes the
shortest-path length between them in the full graph, turned into a
similarity with a Gaussian kernel whose bandwidth comes from the full graph.
Only the largest connected component of the result is retained.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from .errors import DisconnectedInputError, EmptySelectionError
from .graph import Graph, Role, REDUCED_GRAPH_TYPE, validate_graph, validate_signals
from .graph_utils import connected_subgraphs, subgraph_by_nodes
from .kernel import gaussian_weights, kernel_bandwidth, symmetrize
from .defaults import graph_default_parameters
from .shortest_paths import finite_sparse, kept_node_distances
from .logger import get_logger

log = get_logger("snow_gsp.reduce")

@dataclass
class ReductionReport:
    n_original: int
    n_kept: int
    n_components: int
    nodes: np.ndarray     # retained ids in the cholera+pump ordering
    kept: np.ndarray      # retained ids in the original graph, final order
    dropped: np.ndarray   # original ids of kept nodes cut by the component filter
    sigma: float

def reduce_graph_with_report(G: Union[Graph, Mapping[str, Any]], x, b,
                             n_jobs: int = 1, progress: bool = False
                             ) -> Tuple[Graph, np.ndarray, np.ndarray, ReductionReport]:
    G = Graph.from_mapping(G)
    validate_graph(G)
    x, b = validate_signals(G, x, b)

    kept = G.kept_nodes()
    roles = G.kept_roles()
    n_red = kept.shape[0]
    if n_red == 0:
        raise EmptySelectionError("idx_cholera and idx_pump are both empty, nothing to keep")
    log.debug(f"keeping {len(G.idx_cholera)} cholera + {len(G.idx_pump)} pump nodes out of {G.N}")

    Dist_red = kept_node_distances(G.Dist, kept, n_jobs=n_jobs, progress=progress)
    sigma = kernel_bandwidth(G.Dist)
    W = symmetrize(gaussian_weights(Dist_red, sigma), "average")
    if n_red > 1 and W.nnz == 0:
        raise DisconnectedInputError(f"no non-zero weight between any of the {n_red} kept nodes")
    log.debug(f"sigma={sigma:.6g}, {W.nnz // 2} weighted edges")

    components = connected_subgraphs(W)
    W_cc, nodes = components[0]
    M = nodes.shape[0]
    dropped = np.setdiff1d(np.arange(n_red), nodes)
    if dropped.size:
        log.warning(f"dropping {dropped.size} node(s) outside the largest component "
                    f"({len(components)} components, largest has {M})")

    surviving = roles[nodes]
    G_red = Graph(
        N=M,
        W=W_cc,
        Dist=subgraph_by_nodes(finite_sparse(Dist_red), nodes),
        idx_cholera=np.flatnonzero(surviving == Role.CHOLERA),
        idx_pump=np.flatnonzero(surviving == Role.PUMP),
        coords=G.coords[kept][nodes].copy(),
        sigma=sigma,
        type=REDUCED_GRAPH_TYPE,
    )
    G_red = graph_default_parameters(G_red)

    x_red = x[kept][nodes]
    b_red = b[kept][nodes]

    report = ReductionReport(n_original=G.N, n_kept=n_red, n_components=len(components),
                             nodes=nodes, kept=kept[nodes], dropped=kept[dropped], sigma=sigma)
    log.info(f"reduced graph: {G.N} -> {M} nodes ({len(G_red.idx_cholera)} cholera, {len(G_red.idx_pump)} pumps)")
    return G_red, x_red, b_red, report

def reduce_graph(G: Union[Graph, Mapping[str, Any]], x, b,
                 n_jobs: int = 1, progress: bool = False) -> Tuple[Graph, np.ndarray, np.ndarray]:
    """
    Restrict G and the signals x, b to the cholera and pump nodes.

    Returns (G_red, x_red, b_red). In G_red the surviving cholera nodes come
    first (idx_cholera = 0..k-1) and the surviving pumps after them
    (idx_pump = k..M-1); x_red and b_red follow the same order.

    Raises InvalidInputError on malformed input, EmptySelectionError when
    there is no cholera or pump node and DisconnectedInputError when no two
    kept nodes end up with a non-zero weight between them.
    """
    G_red, x_red, b_red, _ = reduce_graph_with_report(G, x, b, n_jobs=n_jobs, progress=progress)
    return G_red, x_red, b_red
