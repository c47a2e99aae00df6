"""
Inclusion State Machine.

Owns the tri-state (expanded / collapsed / excluded) value of every tree node
and the propagation rules that keep a tree consistent after a single edit.

Propagation is asymmetric:
- Downward, the edited state dictates the subtree. Expanding shows the
  direct children (folders collapsed, files expanded); collapsing or
  excluding hides every descendant.
- Upward, each ancestor is recomputed from its children: excluded when all
  of them are excluded, expanded otherwise. Collapsed is never inferred; only
  a direct edit sets it.

Every operation is pure: the input mapping is never mutated and unchanged
nodes are shared between the old and the new snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..core.trace import TraceHook, emit
from ..core.types import InclusionState, TreeNode

logger = logging.getLogger(__name__)

NodeMap = Mapping[str, TreeNode]
StateEdit = Tuple[str, "InclusionState | str"]


@dataclass
class TreeSelection:
    """Node ids grouped by how they take part in the graph."""
    included: Set[str] = field(default_factory=set)
    expanded_folders: Set[str] = field(default_factory=set)
    collapsed_folders: Set[str] = field(default_factory=set)


def set_state(
    node_id: str,
    new_state: InclusionState | str,
    nodes: NodeMap,
    hook: TraceHook | None = None,
) -> NodeMap:
    """
    Apply one user edit and propagate it through the tree.

    Args:
        node_id: Id of the edited node.
        new_state: Target state (enum member or any accepted alias).
        nodes: Current node map. Not modified.
        hook: Optional trace hook.

    Returns:
        A new node map. An unknown ``node_id`` returns ``nodes`` itself: stale
        ids from a previous snapshot are expected in an interactive UI.
    """
    node = nodes.get(node_id)
    if node is None:
        emit(hook, "state.ignored", node_id=node_id, reason="unknown node")
        return nodes

    state = InclusionState.parse(new_state)
    if node.is_file and state == InclusionState.COLLAPSED:
        state = InclusionState.EXPANDED

    states: Dict[str, InclusionState] = {nid: n.state for nid, n in nodes.items()}
    states[node_id] = state
    _propagate_down(node_id, state, nodes, states)
    _propagate_up(node_id, nodes, states)

    updated = {nid: n.with_state(states[nid]) for nid, n in nodes.items()}
    changed = [nid for nid, n in nodes.items() if updated[nid] is not n]
    emit(hook, "state.changed", node_id=node_id, state=state.value, changed=changed)
    return updated


def set_states(
    edits: Iterable[StateEdit],
    nodes: NodeMap,
    hook: TraceHook | None = None,
) -> NodeMap:
    """Apply a sequence of edits in order."""
    for node_id, state in edits:
        nodes = set_state(node_id, state, nodes, hook=hook)
    return nodes


def _propagate_down(
    node_id: str,
    state: InclusionState,
    nodes: NodeMap,
    states: Dict[str, InclusionState],
) -> None:
    if state != InclusionState.EXPANDED:
        _exclude_descendants(node_id, nodes, states)
        return

    for child_id in nodes[node_id].children:
        child = nodes.get(child_id)
        if child is None:
            continue
        if child.is_folder:
            states[child_id] = InclusionState.COLLAPSED
            _exclude_descendants(child_id, nodes, states)
        else:
            states[child_id] = InclusionState.EXPANDED


def _exclude_descendants(
    node_id: str,
    nodes: NodeMap,
    states: Dict[str, InclusionState],
) -> None:
    stack = list(nodes[node_id].children)
    while stack:
        child_id = stack.pop()
        child = nodes.get(child_id)
        if child is None:
            continue
        states[child_id] = InclusionState.EXCLUDED
        stack.extend(child.children)


def _propagate_up(
    node_id: str,
    nodes: NodeMap,
    states: Dict[str, InclusionState],
) -> None:
    parent_id = nodes[node_id].parent
    while parent_id is not None:
        parent = nodes.get(parent_id)
        if parent is None:
            logger.debug("Parent %s of %s missing from tree", parent_id, node_id)
            return
        all_excluded = all(
            states.get(cid, InclusionState.EXCLUDED) == InclusionState.EXCLUDED
            for cid in parent.children
        )
        states[parent_id] = InclusionState.EXCLUDED if all_excluded else InclusionState.EXPANDED
        node_id, parent_id = parent_id, parent.parent


def partition_by_state(nodes: NodeMap) -> TreeSelection:
    """
    Group node ids by state.

    ``included`` holds every expanded or collapsed node; the folder sets hold
    the folders among them.
    """
    selection = TreeSelection()
    for node_id, node in nodes.items():
        if node.state == InclusionState.EXCLUDED:
            continue
        selection.included.add(node_id)
        if node.is_folder:
            if node.state == InclusionState.EXPANDED:
                selection.expanded_folders.add(node_id)
            else:
                selection.collapsed_folders.add(node_id)
    return selection


def find_inconsistencies(nodes: NodeMap) -> List[str]:
    """
    Report violations of the propagation invariants.

    Checked:
    - An expanded or excluded folder is excluded iff all its children are.
    - Every descendant of a collapsed or excluded node is excluded.
    - A file is never collapsed.

    Returns:
        Human-readable problems; empty for a consistent tree.
    """
    problems: List[str] = []

    for node_id, node in nodes.items():
        if node.is_file and node.state == InclusionState.COLLAPSED:
            problems.append(f"{node_id}: file is collapsed")

        children = [nodes[cid] for cid in node.children if cid in nodes]
        if not children:
            continue

        if node.state == InclusionState.EXPANDED:
            if all(c.state == InclusionState.EXCLUDED for c in children):
                problems.append(f"{node_id}: expanded but every child is excluded")
            continue

        hidden = [c.id for c in _descendants(node_id, nodes) if c.state != InclusionState.EXCLUDED]
        if hidden:
            problems.append(f"{node_id}: {node.state.value} but has visible descendants {hidden[:3]}")

    return problems


def _descendants(node_id: str, nodes: NodeMap) -> List[TreeNode]:
    result: List[TreeNode] = []
    stack = list(nodes[node_id].children)
    while stack:
        child = nodes.get(stack.pop())
        if child is None:
            continue
        result.append(child)
        stack.extend(child.children)
    return result
