from .errors import SnowGraphError, InvalidInputError, EmptySelectionError, DisconnectedInputError
from .graph import Graph, Role, REQUIRED_FIELDS, REDUCED_GRAPH_TYPE, validate_graph, validate_signals
from .graph_utils import connected_subgraphs, largest_connected_component, subgraph_by_nodes
from .shortest_paths import single_source_distances, kept_node_distances, finite_sparse
from .kernel import kernel_bandwidth, gaussian_weights, symmetrize
from .defaults import graph_default_parameters, laplacian
from .reduce import reduce_graph, reduce_graph_with_report, ReductionReport
from .io import load_mat, save_mat, load_npz, save_npz, load_graph, save_graph, node_table

__version__ = "0.1.0"
