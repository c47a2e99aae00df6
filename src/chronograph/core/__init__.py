"""
Core modules for chronograph.

This package contains the fundamental building blocks:
- types: Data structures (DependencyEdge, TreeNode, CompoundGraph, etc.)
- trace: Event hooks for observing the engine
- errors: Input boundary exceptions
"""

from .errors import ChronographError, ConfigError, InputFormatError
from .trace import TraceHook, TraceRecorder, emit
from .types import (
    CommitInfo, CommitSnapshot, CompoundEdge, CompoundGraph, CompoundNode,
    DependencyEdge, DiffStatus, InclusionState, NodeKind, ProjectTree, TreeNode,
)

__all__ = [
    # Types
    "CommitInfo", "CommitSnapshot", "CompoundEdge", "CompoundGraph",
    "CompoundNode", "DependencyEdge", "DiffStatus", "InclusionState",
    "NodeKind", "ProjectTree", "TreeNode",
    # Trace
    "TraceHook", "TraceRecorder", "emit",
    # Errors
    "ChronographError", "ConfigError", "InputFormatError",
]
