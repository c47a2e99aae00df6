"""
chronograph: how file-level dependencies evolve across commits.

The four entry points of the engine:

    build_tree(edges)                      -> ProjectTree
    set_state(node_id, state, nodes)       -> nodes'
    to_compound_graph(edges, nodes)        -> CompoundGraph
    diff_edges(edges_a, edges_b)           -> DependencyDiff
"""

from .analysis.diff import diff_edges
from .core.types import DependencyEdge, InclusionState
from .graph.compound import to_compound_graph
from .tree.builder import build_tree
from .tree.state import set_state

__version__ = "0.1.0"

__all__ = [
    "DependencyEdge", "InclusionState",
    "build_tree", "set_state", "to_compound_graph", "diff_edges",
]
