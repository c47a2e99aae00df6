"""
Commit Diff Calculator - Compare the dependency edges of two commits.

Edges are matched across commits by structural identity
(source, target, relationship); weight does not take part, so an edge whose
reference count changed is still ``unchanged``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..core.types import CommitSnapshot, DependencyEdge, DiffStatus


class DiffSummary(BaseModel):
    """Counts for a diff, plus each side's total edge count."""
    added_count: int
    removed_count: int
    unchanged_count: int
    total_a: int
    total_b: int


class DependencyDiff(BaseModel):
    """
    Edges partitioned by what happened to them between commit A and commit B.

    Attributes:
        added: In B, not in A (B's copy).
        removed: In A, not in B.
        unchanged: In both (B's copy).
    """
    added: List[DependencyEdge] = Field(default_factory=list)
    removed: List[DependencyEdge] = Field(default_factory=list)
    unchanged: List[DependencyEdge] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)

    def to_markdown(self, generated_at: Optional[datetime] = None) -> str:
        """
        Generate a human-readable markdown report.

        Args:
            generated_at: Report time; defaults to now (UTC).
        """
        generated_at = generated_at or datetime.now(timezone.utc)
        lines = [
            "# Dependency Diff Report",
            f"Generated: {generated_at.isoformat()}",
            "",
            "## Summary",
            f"- **Added:** {len(self.added)}",
            f"- **Removed:** {len(self.removed)}",
            f"- **Unchanged:** {len(self.unchanged)}",
            "",
        ]

        for title, edges, icon in (
            ("Added Dependencies", self.added, "+"),
            ("Removed Dependencies", self.removed, "-"),
        ):
            if not edges:
                continue
            lines.extend([f"## {title}", ""])
            for edge in edges:
                lines.append(
                    f"- `{icon}` {edge.source_file} --> {edge.target_file} [{edge.relationship_type}]"
                )
            lines.append("")

        if not self.has_changes:
            lines.append("No dependency changes.")

        return "\n".join(lines)


def _index(edges: Iterable[DependencyEdge]) -> Dict[str, DependencyEdge]:
    # First position wins, last value wins
    index: Dict[str, DependencyEdge] = {}
    for edge in edges:
        index[edge.identity_key] = edge
    return index


def diff_edges(
    edges_a: Sequence[DependencyEdge],
    edges_b: Sequence[DependencyEdge],
) -> DependencyDiff:
    """
    Partition two commits' edges into added / removed / unchanged.

    Args:
        edges_a: Edges of the older ("from") commit.
        edges_b: Edges of the newer ("to") commit.

    Returns:
        DependencyDiff: Pure and deterministic; follows input order.
    """
    index_a = _index(edges_a)
    index_b = _index(edges_b)
    diff = DependencyDiff()

    for key, edge in index_b.items():
        if key in index_a:
            diff.unchanged.append(edge)
        else:
            diff.added.append(edge)

    for key, edge in index_a.items():
        if key not in index_b:
            diff.removed.append(edge)

    return diff


def diff_snapshots(snapshot_a: CommitSnapshot, snapshot_b: CommitSnapshot) -> DependencyDiff:
    """Diff the dependencies of two commit snapshots."""
    return diff_edges(snapshot_a.dependencies, snapshot_b.dependencies)


def summarize_diff(
    diff: DependencyDiff,
    edges_a: Sequence[DependencyEdge],
    edges_b: Sequence[DependencyEdge],
) -> DiffSummary:
    return DiffSummary(
        added_count=len(diff.added),
        removed_count=len(diff.removed),
        unchanged_count=len(diff.unchanged),
        total_a=len(edges_a),
        total_b=len(edges_b),
    )


def dependency_status_index(diff: DependencyDiff) -> Dict[str, DiffStatus]:
    """Map every identity key in the diff to its status."""
    index: Dict[str, DiffStatus] = {}
    for status, edges in (
        (DiffStatus.UNCHANGED, diff.unchanged),
        (DiffStatus.REMOVED, diff.removed),
        (DiffStatus.ADDED, diff.added),
    ):
        for edge in edges:
            index[edge.identity_key] = status
    return index


def dependency_status(edge: DependencyEdge, diff: DependencyDiff) -> Optional[DiffStatus]:
    """Status of a single edge within a diff, or None if it is not part of it."""
    return dependency_status_index(diff).get(edge.identity_key)
