"""
Project tree: path cleanup, root detection, construction and inclusion states.
"""

from .builder import build_tree
from .paths import PathSet, PathStats, analyze_paths, collect_paths, normalize_path
from .root import FixedRootStrategy, LayoutAwareRootStrategy, RootStrategy
from .state import TreeSelection, find_inconsistencies, partition_by_state, set_state, set_states

__all__ = [
    "build_tree",
    "PathSet", "PathStats", "analyze_paths", "collect_paths", "normalize_path",
    "FixedRootStrategy", "LayoutAwareRootStrategy", "RootStrategy",
    "TreeSelection", "find_inconsistencies", "partition_by_state", "set_state", "set_states",
]
