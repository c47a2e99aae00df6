"""
Root detection strategies.

The analyzer never tells us the repository name, so the tree root has to be
inferred from the shape of the paths alone. The heuristic is best-effort and
project conventions vary, so it lives behind a small strategy interface that
the tree builder accepts as a parameter.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ..config import APP_LAYOUT_DIRS, APP_ROOT, PLACEHOLDER_ROOT
from .paths import PathStats, analyze_paths, split_path

logger = logging.getLogger(__name__)


class RootStrategy(ABC):
    """Abstract base class for root inference."""

    @abstractmethod
    def infer_root(self, paths: Sequence[str]) -> str:
        """Return the root label for a set of normalized paths."""

    @abstractmethod
    def get_name(self) -> str:
        """Return the strategy name."""


class FixedRootStrategy(RootStrategy):
    """Always use the same label, e.g. a repository name the caller knows."""

    def __init__(self, label: str):
        self.label = label

    def get_name(self) -> str:
        return "fixed"

    def infer_root(self, paths: Sequence[str]) -> str:
        return self.label


class LayoutAwareRootStrategy(RootStrategy):
    """
    Statistical root inference.

    1. A single top-level directory covering every path is the root.
    2. Several top-level entries that include a known application directory
       (lib, test, ...) get a synthesized application root above them.
    3. Anything else falls back to a generic placeholder.

    Ambiguous input always degrades to the placeholder, never raises.
    """

    def __init__(
        self,
        placeholder: str = PLACEHOLDER_ROOT,
        app_root: str = APP_ROOT,
        app_layout_dirs: Sequence[str] = APP_LAYOUT_DIRS,
    ):
        self.placeholder = placeholder
        self.app_root = app_root
        self.app_layout_dirs = frozenset(app_layout_dirs)

    def get_name(self) -> str:
        return "layout_aware"

    def infer_root(self, paths: Sequence[str]) -> str:
        if not paths:
            return self.placeholder

        stats = analyze_paths(paths)
        logger.debug(
            "Root detection: top_level=%s common_prefixes=%s avg_depth=%.2f",
            stats.top_level, stats.common_prefixes[:5], stats.avg_depth,
        )

        covering = self._covering_prefix(stats, paths)
        if covering:
            return covering

        if len(stats.top_level) > 1 and self.app_layout_dirs.intersection(stats.top_level):
            return self.app_root

        return self.placeholder

    def _covering_prefix(self, stats: PathStats, paths: Sequence[str]) -> str | None:
        """
        Find a single-segment prefix that is a directory of every path.

        A bare file name cannot be the root: its node would collide with the
        root folder.
        """
        candidates = [p for p in stats.common_prefixes if "/" not in p]
        if len(stats.top_level) == 1 and stats.top_level[0] not in candidates:
            candidates.append(stats.top_level[0])

        for candidate in candidates:
            if stats.coverage(candidate) < 1.0:
                continue
            if all(len(split_path(p)) > 1 for p in paths):
                return candidate
        return None
