"""
Path normalization and statistics.

Analyzer paths arrive with mixed separators, absolute prefixes from our own
checkout cache, and the occasional OS or VCS internal. This module reduces
them to clean, project-relative, forward-slash paths and computes the
statistics the root detection strategies work from.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Pattern, Sequence, Set, Tuple

from ..config import CACHE_PREFIX_PATTERNS, SYSTEM_PATH_PATTERNS
from ..core.types import DependencyEdge

logger = logging.getLogger(__name__)

_CACHE_PREFIXES: Tuple[Pattern[str], ...] = tuple(re.compile(p) for p in CACHE_PREFIX_PATTERNS)
_SYSTEM_PATHS: Tuple[Pattern[str], ...] = tuple(re.compile(p) for p in SYSTEM_PATH_PATTERNS)
_REPEATED_SLASHES = re.compile(r"/{2,}")

# Prefix statistics look at this many leading segments
MAX_PREFIX_DEPTH = 3


@dataclass
class PathSet:
    """Cleaned paths of one snapshot, in first-seen order."""
    paths: List[str] = field(default_factory=list)
    directories: Set[str] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.paths)


@dataclass
class PathStats:
    """
    Shape statistics over a set of paths.

    Attributes:
        top_level: Distinct first segments, in first-seen order.
        prefix_counts: How many paths each 1-3 segment prefix covers.
        common_prefixes: Prefixes covering a significant share, longest first.
        avg_depth: Mean number of segments per path.
        total: Number of paths analyzed.
    """
    top_level: List[str] = field(default_factory=list)
    prefix_counts: Counter = field(default_factory=Counter)
    common_prefixes: List[str] = field(default_factory=list)
    avg_depth: float = 0.0
    total: int = 0

    def coverage(self, prefix: str) -> float:
        """Fraction of paths starting with ``prefix``."""
        if not self.total:
            return 0.0
        return self.prefix_counts.get(prefix, 0) / self.total


def split_path(path: str) -> List[str]:
    """Split a normalized path into its non-empty segments."""
    return [part for part in path.split("/") if part]


def _clean_separators(raw: str) -> str:
    cleaned = _REPEATED_SLASHES.sub("/", raw.strip().replace("\\", "/"))
    if len(cleaned) > 1:
        cleaned = cleaned.rstrip("/")
    return cleaned


def normalize_path(raw: str) -> str:
    """
    Reduce a raw analyzer path to a project-relative, forward-slash path.

    Example:
        ``\\tmp\\chronograph\\cache-1\\lib\\main.dart`` becomes ``lib/main.dart``.
    """
    normalized = _clean_separators(raw)

    for pattern in _CACHE_PREFIXES:
        if pattern.match(normalized):
            normalized = pattern.sub("", normalized, count=1)
            break

    return normalized.lstrip("/")


def is_system_path(path: str, extra_patterns: Sequence[str] = ()) -> bool:
    """
    Check a path against the system/build blocklist.

    Deliberately narrow: a false positive silently removes a project file.
    """
    if any(pattern.search(path) for pattern in _SYSTEM_PATHS):
        return True
    return any(re.search(pattern, path) for pattern in extra_patterns)


def collect_paths(edges: Iterable[DependencyEdge], extra_patterns: Sequence[str] = ()) -> PathSet:
    """
    Gather every distinct, cleaned endpoint path from a snapshot's edges.

    System paths are checked both before and after prefix stripping, so an
    absolute ``/proc/...`` is caught even though the leading slash is removed.
    """
    result = PathSet()
    seen: Set[str] = set()
    dropped = 0

    for edge in edges:
        for raw in (edge.source_file, edge.target_file):
            if not raw:
                continue
            cleaned = _clean_separators(raw)
            path = normalize_path(raw)
            if not path:
                continue
            if is_system_path(cleaned, extra_patterns) or is_system_path(path, extra_patterns):
                dropped += 1
                continue
            if raw.rstrip().endswith(("/", "\\")):
                result.directories.add(path)
            if path not in seen:
                seen.add(path)
                result.paths.append(path)

    if dropped:
        logger.debug("Dropped %d system path references", dropped)
    return result


def analyze_paths(paths: Sequence[str]) -> PathStats:
    """Compute top-level segments and weighted candidate prefixes."""
    stats = PathStats(total=len(paths))
    if not paths:
        return stats

    top_seen: Set[str] = set()
    total_depth = 0

    for path in paths:
        parts = split_path(path)
        total_depth += len(parts)
        if parts and parts[0] not in top_seen:
            top_seen.add(parts[0])
            stats.top_level.append(parts[0])
        for depth in range(1, min(MAX_PREFIX_DEPTH, len(parts)) + 1):
            stats.prefix_counts["/".join(parts[:depth])] += 1

    stats.avg_depth = total_depth / len(paths)

    threshold = max(2, len(paths) * 0.1)
    common = [prefix for prefix, count in stats.prefix_counts.items() if count >= threshold]
    stats.common_prefixes = sorted(common, key=len, reverse=True)
    return stats
