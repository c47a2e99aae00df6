"""
Core type definitions for chronograph.

Covers the three layers the engine moves data through:
- Analyzer input: DependencyEdge, CommitSnapshot
- Project tree: TreeNode, ProjectTree, InclusionState
- Render output: CompoundNode, CompoundEdge, CompoundGraph
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class InclusionState(StrEnum):
    """
    Tri-state visibility of a tree node.

    EXPANDED: visible, descendants follow their own state ("checked").
    COLLAPSED: visible as one opaque node, descendants excluded ("half-checked").
    EXCLUDED: invisible together with its whole subtree ("unchecked").
    """
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"
    EXCLUDED = "excluded"

    @classmethod
    def _missing_(cls, value: object) -> Optional["InclusionState"]:
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        for member in cls:
            if member.value == lowered:
                return member
        return _STATE_ALIASES.get(lowered)

    @classmethod
    def parse(cls, value: "InclusionState | str") -> "InclusionState":
        """Accept enum members, canonical names or checkbox aliases."""
        if isinstance(value, InclusionState):
            return value
        return cls(value)


_STATE_ALIASES: Dict[str, InclusionState] = {
    "checked": InclusionState.EXPANDED,
    "half-checked": InclusionState.COLLAPSED,
    "half_checked": InclusionState.COLLAPSED,
    "unchecked": InclusionState.EXCLUDED,
    "expand": InclusionState.EXPANDED,
    "collapse": InclusionState.COLLAPSED,
    "exclude": InclusionState.EXCLUDED,
}


class NodeKind(StrEnum):
    """Tree node categories."""
    FOLDER = "folder"
    FILE = "file"


class DiffStatus(StrEnum):
    """Commit-to-commit status of an edge."""
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    MIXED = "mixed"


class DependencyEdge(BaseModel):
    """
    A file-to-file dependency as reported by the external analyzer.

    Field names follow the analyzer's output format and must not change.
    """
    source_file: str
    target_file: str
    relationship_type: str = "import"
    weight: int | float = 1

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("weight", mode="before")
    @classmethod
    def _default_weight(cls, value: Any) -> Any:
        return 1 if value is None else value

    @property
    def source(self) -> str:
        return self.source_file

    @property
    def target(self) -> str:
        return self.target_file

    @property
    def relationship(self) -> str:
        return self.relationship_type

    @property
    def identity_key(self) -> str:
        """Structural identity across commits. Weight is not part of it."""
        return f"{self.source_file}→{self.target_file}→{self.relationship_type}"


class TreeNode(BaseModel):
    """
    A folder or file in the project tree.

    Instances are immutable; state edits produce copies.
    """
    id: str
    label: str
    kind: NodeKind
    parent: str | None = None
    children: Tuple[str, ...] = ()
    state: InclusionState = InclusionState.EXCLUDED

    model_config = ConfigDict(frozen=True)

    @property
    def is_folder(self) -> bool:
        return self.kind == NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    def with_state(self, state: InclusionState) -> "TreeNode":
        if state == self.state:
            return self
        return self.model_copy(update={"state": state})


class ProjectTree(BaseModel):
    """
    A rooted tree snapshot for one commit.

    Rebuilt from scratch whenever the active commit changes.
    """
    nodes: Dict[str, TreeNode]
    root_id: str

    @property
    def root(self) -> TreeNode:
        return self.nodes[self.root_id]

    def get(self, node_id: str) -> Optional[TreeNode]:
        return self.nodes.get(node_id)

    def with_nodes(self, nodes: Dict[str, TreeNode]) -> "ProjectTree":
        """Return a tree sharing this root but holding a new node map."""
        return ProjectTree(nodes=nodes, root_id=self.root_id)

    def walk(self) -> Iterator[TreeNode]:
        """Depth-first, pre-order, children in their sorted order."""
        stack = [self.root_id]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self.nodes)


class CompoundNode(BaseModel):
    """Render-facing projection of a visible tree node."""
    id: str
    label: str
    kind: NodeKind
    container_parent: str | None = None
    is_leaf: bool
    state: InclusionState

    def to_element(self) -> Dict[str, Any]:
        if self.is_leaf:
            expansion = "collapsed" if self.state == InclusionState.COLLAPSED else "expanded"
            classes = [self.kind.value, expansion, "leaf"]
        else:
            classes = [self.kind.value, "container", "expanded"]
        return {
            "group": "nodes",
            "data": {
                "id": self.id,
                "label": self.label,
                "type": self.kind.value,
                "parent": self.container_parent,
                "isLeaf": self.is_leaf,
                "isExpanded": not self.is_leaf,
            },
            "classes": classes,
        }


class CompoundEdge(BaseModel):
    """
    Aggregated edge between two leaf nodes.

    weight counts the original edges; total_weight sums their own weights.
    """
    id: str
    source: str
    target: str
    weight: int = 0
    total_weight: float = 0
    relationship_types: List[str] = Field(default_factory=list)
    original_edges: List[DependencyEdge] = Field(default_factory=list)
    diff_status: DiffStatus | None = None

    def add(self, edge: DependencyEdge) -> None:
        self.weight += 1
        self.total_weight += edge.weight
        if edge.relationship_type not in self.relationship_types:
            self.relationship_types.append(edge.relationship_type)
        self.original_edges.append(edge)

    def to_element(self) -> Dict[str, Any]:
        return {
            "group": "edges",
            "data": {
                "id": self.id,
                "source": self.source,
                "target": self.target,
                "weight": self.weight,
                "totalWeight": self.total_weight,
                "relationshipTypes": list(self.relationship_types),
                "diffStatus": self.diff_status.value if self.diff_status else None,
                "originalDependencies": [e.model_dump() for e in self.original_edges],
            },
        }


class CompoundGraph(BaseModel):
    """Nodes and edges ready for a compound-graph renderer."""
    nodes: List[CompoundNode] = Field(default_factory=list)
    edges: List[CompoundEdge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[CompoundNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, source: str, target: str) -> Optional[CompoundEdge]:
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge
        return None

    @property
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    @property
    def leaf_ids(self) -> List[str]:
        return [n.id for n in self.nodes if n.is_leaf]

    @property
    def container_ids(self) -> List[str]:
        return [n.id for n in self.nodes if not n.is_leaf]

    def to_elements(self) -> List[Dict[str, Any]]:
        """Flatten to renderer elements: containers, then leaves, then edges."""
        containers = [n.to_element() for n in self.nodes if not n.is_leaf]
        leaves = [n.to_element() for n in self.nodes if n.is_leaf]
        return containers + leaves + [e.to_element() for e in self.edges]

    def get_stats(self) -> Dict[str, int]:
        return {
            "containers": len(self.container_ids),
            "leaves": len(self.leaf_ids),
            "edges": len(self.edges),
            "original_edges": sum(e.weight for e in self.edges),
        }


class CommitInfo(BaseModel):
    hash: str = ""
    message: str = ""
    author: str = ""
    timestamp: int = 0

    model_config = ConfigDict(extra="ignore")


class CommitSnapshot(BaseModel):
    """
    Analyzer output for one commit.

    Accepts both the flat shape (``dependencies`` at top level) and the cached
    analysis shape where edges live under ``analysis_result.dependencies``.
    """
    commit_hash: str = ""
    timestamp: int = 0
    commit_info: CommitInfo | None = None
    dependencies: List[DependencyEdge] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _lift_analysis_dependencies(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("dependencies"):
            analysis = data.get("analysis_result")
            if isinstance(analysis, Mapping) and analysis.get("dependencies"):
                data = {**data, "dependencies": analysis["dependencies"]}
        return data
