"""
View-root scoping.

Restrict a snapshot's edges to one folder ("zooming in" on a subtree) and
compute folder-level rollups of file paths relative to that folder.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from pydantic import BaseModel, Field

from ..core.types import DependencyEdge
from ..tree.paths import normalize_path, split_path

logger = logging.getLogger(__name__)

VIEW_ROOT = "/"


class ScopeStats(BaseModel):
    total: int = 0
    internal: int = 0
    incoming: int = 0
    outgoing: int = 0


class ScopeResult(BaseModel):
    """
    Edges kept for a view root and how they were chosen.

    Strategies: ``root-show-all``, ``internal-only``, ``no-internal-dependencies``.
    """
    filtered: List[DependencyEdge] = Field(default_factory=list)
    strategy: str
    stats: ScopeStats = Field(default_factory=ScopeStats)


def _is_root(view_root: str) -> bool:
    return view_root in ("", VIEW_ROOT)


def is_path_within_folder(path: str, folder: str) -> bool:
    """True when ``path`` is ``folder`` itself or lies below it."""
    normalized_path = normalize_path(path)
    normalized_folder = normalize_path(folder)
    if not normalized_folder:
        return True
    return normalized_path == normalized_folder or normalized_path.startswith(normalized_folder + "/")


def relative_to_view_root(path: str, view_root: str) -> str:
    """
    Express ``path`` relative to ``view_root``.

    Returns ``/`` for the view root itself; paths outside it come back unchanged.
    """
    normalized_path = normalize_path(path)
    if _is_root(view_root):
        return normalized_path

    normalized_root = normalize_path(view_root)
    if normalized_path == normalized_root:
        return VIEW_ROOT
    if normalized_path.startswith(normalized_root + "/"):
        return normalized_path[len(normalized_root):]
    return normalized_path


def folder_at_level(path: str, level: int, view_root: str = VIEW_ROOT) -> str:
    """
    Roll a file path up to the folder ``level`` segments below ``view_root``.

    The file name itself never counts as a level, so a file directly inside
    the view root rolls up to the view root.
    """
    if _is_root(view_root):
        parts = split_path(normalize_path(path))
        if level == 0 or not parts:
            return VIEW_ROOT
        folder_parts = parts[: min(level, len(parts) - 1)]
        return "/".join(folder_parts) if folder_parts else VIEW_ROOT

    relative = relative_to_view_root(path, view_root)
    if relative == VIEW_ROOT:
        return view_root

    parts = split_path(relative)
    if level == 0 or not parts:
        return view_root

    folder_parts = parts[: min(level, len(parts) - 1)]
    if not folder_parts:
        return view_root
    return f"{normalize_path(view_root)}/{'/'.join(folder_parts)}"


def filter_for_view_root(edges: Sequence[DependencyEdge], view_root: str) -> ScopeResult:
    """
    Keep only the edges that live entirely inside ``view_root``.

    Incoming and outgoing edges are counted for context but not returned.
    """
    if _is_root(view_root):
        return ScopeResult(
            filtered=list(edges),
            strategy="root-show-all",
            stats=ScopeStats(total=len(edges)),
        )

    internal: List[DependencyEdge] = []
    stats = ScopeStats(total=len(edges))

    for edge in edges:
        source_inside = is_path_within_folder(edge.source_file, view_root)
        target_inside = is_path_within_folder(edge.target_file, view_root)
        if source_inside and target_inside:
            internal.append(edge)
            stats.internal += 1
        elif target_inside:
            stats.incoming += 1
        elif source_inside:
            stats.outgoing += 1

    if internal:
        return ScopeResult(filtered=internal, strategy="internal-only", stats=stats)

    logger.debug("Folder %s has no internal dependencies: %s", view_root, stats.model_dump())
    return ScopeResult(filtered=[], strategy="no-internal-dependencies", stats=stats)
