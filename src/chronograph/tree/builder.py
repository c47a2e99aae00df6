"""
Project Tree Builder.

Turns a flat list of dependency edges into a rooted folder/file tree with
initial inclusion states. The tree is rebuilt from scratch for every commit
snapshot; nothing here is incremental.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.trace import TraceHook, emit
from ..core.types import DependencyEdge, InclusionState, NodeKind, ProjectTree, TreeNode
from .paths import PathSet, collect_paths, split_path
from .root import LayoutAwareRootStrategy, RootStrategy

logger = logging.getLogger(__name__)


@dataclass
class _Draft:
    """Mutable node used only while the tree is under construction."""
    id: str
    label: str
    kind: NodeKind
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)


def build_tree(
    edges: Iterable[DependencyEdge],
    strategy: RootStrategy | None = None,
    extra_patterns: Sequence[str] = (),
    hook: TraceHook | None = None,
) -> ProjectTree:
    """
    Build the project tree for one snapshot.

    Args:
        edges: Analyzer edges for the snapshot.
        strategy: Root inference strategy (defaults to layout-aware).
        extra_patterns: Additional regexes for paths to ignore.
        hook: Optional trace hook.

    Returns:
        ProjectTree: Root id plus an id -> TreeNode map with initial states.
    """
    strategy = strategy or LayoutAwareRootStrategy()

    path_set = collect_paths(edges, extra_patterns)
    emit(hook, "paths.collected", count=len(path_set), sample=path_set.paths[:10])

    root_id = strategy.infer_root(path_set.paths)
    emit(hook, "root.inferred", root=root_id, strategy=strategy.get_name())

    drafts = _create_drafts(path_set, root_id)
    _sort_children(drafts)
    nodes = _freeze(drafts, root_id)

    emit(hook, "tree.built", root=root_id, nodes=len(nodes))
    return ProjectTree(nodes=nodes, root_id=root_id)


def _create_drafts(path_set: PathSet, root_id: str) -> Dict[str, _Draft]:
    drafts: Dict[str, _Draft] = {
        root_id: _Draft(id=root_id, label=root_id, kind=NodeKind.FOLDER),
    }

    for path in path_set.paths:
        parts = split_path(path)
        is_directory = path in path_set.directories

        for i, label in enumerate(parts):
            node_id = "/".join(parts[: i + 1])
            if node_id == root_id:
                continue

            is_last = i == len(parts) - 1
            parent_id = root_id if i == 0 else "/".join(parts[:i])
            parent = drafts[parent_id]
            # A path that turns out to have children is a folder after all
            if parent.kind == NodeKind.FILE:
                logger.debug("Promoting %s to folder: it has child %s", parent_id, node_id)
                parent.kind = NodeKind.FOLDER

            if node_id in drafts:
                continue

            kind = NodeKind.FILE if is_last and not is_directory else NodeKind.FOLDER
            if kind == NodeKind.FILE and node_id in path_set.directories:
                kind = NodeKind.FOLDER

            drafts[node_id] = _Draft(id=node_id, label=label, kind=kind, parent=parent_id)
            parent.children.append(node_id)

    return drafts


def _sort_children(drafts: Dict[str, _Draft]) -> None:
    """Folders before files, then case-sensitive by label."""
    for draft in drafts.values():
        if len(draft.children) > 1:
            draft.children.sort(
                key=lambda cid: (drafts[cid].kind != NodeKind.FOLDER, drafts[cid].label)
            )


def _freeze(drafts: Dict[str, _Draft], root_id: str) -> Dict[str, TreeNode]:
    """
    Assign initial states and convert drafts to immutable nodes.

    Only the root and its direct children start visible, which keeps the first
    render small no matter how large the project is.
    """
    root = drafts[root_id]
    states: Dict[str, InclusionState] = {root_id: InclusionState.EXPANDED}
    for child_id in root.children:
        child = drafts[child_id]
        states[child_id] = (
            InclusionState.COLLAPSED if child.kind == NodeKind.FOLDER else InclusionState.EXPANDED
        )

    return {
        draft.id: TreeNode(
            id=draft.id,
            label=draft.label,
            kind=draft.kind,
            parent=draft.parent,
            children=tuple(draft.children),
            state=states.get(draft.id, InclusionState.EXCLUDED),
        )
        for draft in drafts.values()
    }
