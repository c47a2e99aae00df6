"""
Analysis over dependency edge lists: commit diffs and view-root scoping.
"""

from .diff import (
    DependencyDiff, DiffSummary, dependency_status, diff_edges,
    diff_snapshots, summarize_diff,
)
from .scope import ScopeResult, filter_for_view_root, folder_at_level, is_path_within_folder

__all__ = [
    "DependencyDiff", "DiffSummary", "dependency_status", "diff_edges",
    "diff_snapshots", "summarize_diff",
    "ScopeResult", "filter_for_view_root", "folder_at_level", "is_path_within_folder",
]
