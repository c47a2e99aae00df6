"""
Compound Graph Transformer.

Derives a render-ready compound graph from the project tree's current
inclusion states and the snapshot's flat edge list:

- Expanded folders become containers (nesting only, never edge endpoints).
- Collapsed folders and visible files become leaves.
- Every analyzer edge is re-attached to the nearest visible leaf of each
  endpoint; parallel edges between the same pair of leaves are merged into
  one weighted edge. Collapsing a folder therefore folds all of its
  file-level edges into thick folder-level ones.

Edges that cannot be placed (unknown path, hidden endpoint, self-loop at the
current zoom level) are dropped and reported through the trace hook. They are
a data-quality situation, not an error.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..analysis.diff import DependencyDiff, dependency_status_index
from ..core.trace import TraceHook, emit
from ..core.types import (
    CompoundEdge, CompoundGraph, CompoundNode, DependencyEdge, DiffStatus,
    InclusionState, ProjectTree, TreeNode,
)
from ..tree.paths import normalize_path

logger = logging.getLogger(__name__)

NodeMap = Mapping[str, TreeNode]


def to_compound_graph(
    edges: Iterable[DependencyEdge],
    nodes: NodeMap | ProjectTree,
    hook: TraceHook | None = None,
) -> CompoundGraph:
    """
    Build the compound graph for the current tree state.

    Args:
        edges: The snapshot's analyzer edges (the same list the tree was built from).
        nodes: Node map or ProjectTree carrying the current states.
        hook: Optional trace hook.

    Returns:
        CompoundGraph: Containers before their contents, leaves, and aggregated edges.
    """
    if isinstance(nodes, ProjectTree):
        nodes = nodes.nodes

    rendered = rendered_node_ids(nodes)
    graph = CompoundGraph(nodes=_materialize(nodes, rendered))

    aggregated: Dict[tuple, CompoundEdge] = {}
    leaf_cache: Dict[str, Optional[str]] = {}
    dropped = 0

    for edge in edges:
        source = _cached_leaf(edge.source_file, nodes, rendered, leaf_cache)
        target = _cached_leaf(edge.target_file, nodes, rendered, leaf_cache)

        if source is None or target is None:
            dropped += 1
            emit(hook, "edge.dropped", edge=edge.identity_key, reason="unresolved endpoint",
                 source=source, target=target)
            continue
        if source == target:
            dropped += 1
            emit(hook, "edge.dropped", edge=edge.identity_key, reason="self-loop", leaf=source)
            continue

        key = (source, target)
        compound = aggregated.get(key)
        if compound is None:
            compound = CompoundEdge(id=f"{source}->{target}", source=source, target=target)
            aggregated[key] = compound
        compound.add(edge)

    graph.edges = list(aggregated.values())
    emit(hook, "graph.built", dropped=dropped, **graph.get_stats())
    return graph


def rendered_node_ids(nodes: NodeMap) -> Set[str]:
    """
    Ids of every node that appears in the graph.

    A node is rendered when it is not excluded and every ancestor is an
    expanded folder. Traversal starts from the root(s) and never descends
    below a collapsed node.
    """
    roots = [nid for nid, n in nodes.items() if n.parent is None]
    rendered: Set[str] = set()
    stack = list(roots)

    while stack:
        node = nodes.get(stack.pop())
        if node is None or node.state == InclusionState.EXCLUDED:
            continue
        rendered.add(node.id)
        if node.is_folder and node.state == InclusionState.EXPANDED:
            stack.extend(node.children)

    return rendered


def is_leaf(node: TreeNode) -> bool:
    """Files and collapsed folders carry edges; expanded folders never do."""
    return node.is_file or node.state == InclusionState.COLLAPSED


def resolve_leaf(path: str, nodes: NodeMap, rendered: Set[str] | None = None) -> Optional[str]:
    """
    Find the leaf that represents ``path`` at the current zoom level.

    Walks from the path toward the root and stops at the first rendered node:
    a leaf there is the answer; an expanded container means the path itself
    is hidden inside a visible folder.

    Returns:
        The leaf id, or None when the path is unknown or not visible.
    """
    if rendered is None:
        rendered = rendered_node_ids(nodes)

    current = nodes.get(normalize_path(path))
    while current is not None:
        if current.id in rendered:
            return current.id if is_leaf(current) else None
        current = nodes.get(current.parent) if current.parent is not None else None
    return None


def _cached_leaf(
    path: str,
    nodes: NodeMap,
    rendered: Set[str],
    cache: Dict[str, Optional[str]],
) -> Optional[str]:
    if path not in cache:
        cache[path] = resolve_leaf(path, nodes, rendered)
    return cache[path]


def _materialize(nodes: NodeMap, rendered: Set[str]) -> List[CompoundNode]:
    """
    Project rendered tree nodes into compound nodes, parents first.

    An expanded folder with no children (the bare root of an empty snapshot)
    would be an empty box, so it is left out.
    """
    roots = [nid for nid, n in nodes.items() if n.parent is None]
    result: List[CompoundNode] = []
    stack = list(reversed(roots))

    while stack:
        node_id = stack.pop()
        if node_id not in rendered:
            continue
        node = nodes[node_id]
        leaf = is_leaf(node)
        if not leaf and not node.children:
            continue

        parent = nodes.get(node.parent) if node.parent is not None else None
        container_parent = None
        if parent is not None and parent.id in rendered and not is_leaf(parent):
            container_parent = parent.id

        result.append(CompoundNode(
            id=node.id,
            label=node.label,
            kind=node.kind,
            container_parent=container_parent,
            is_leaf=leaf,
            state=node.state,
        ))
        if not leaf:
            stack.extend(reversed(node.children))

    return result


def apply_diff_status(graph: CompoundGraph, diff: DependencyDiff) -> CompoundGraph:
    """
    Copy the graph with every edge tagged by its commit-to-commit status.

    An aggregated edge whose original edges disagree is ``mixed``. The input
    graph is left untouched; the result shares no lists with it.
    """
    index = dependency_status_index(diff)
    edges: List[CompoundEdge] = []

    for edge in graph.edges:
        statuses = {index.get(e.identity_key) for e in edge.original_edges}
        statuses.discard(None)
        if len(statuses) == 1:
            status = statuses.pop()
        elif statuses:
            status = DiffStatus.MIXED
        else:
            status = None
        edges.append(edge.model_copy(update={"diff_status": status}, deep=True))

    return CompoundGraph(nodes=[n.model_copy() for n in graph.nodes], edges=edges)
