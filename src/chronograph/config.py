"""
Global Configuration and Path Heuristics.

This module centralizes the defaults used when turning raw analyzer paths
into a project tree: the staging-area prefixes we strip, the system paths we
drop, and the directory names that identify an application layout.

An optional YAML file (``.chronograph/config.yaml``) can override the root
labels and add ignore patterns. The heuristics themselves never read it;
callers load an ``EngineConfig`` and hand the resulting strategy down.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.errors import ConfigError

if TYPE_CHECKING:
    from .tree.root import LayoutAwareRootStrategy

logger = logging.getLogger(__name__)

# --- Root labels ---
# Used when no dominant top-level directory can be found
PLACEHOLDER_ROOT = "project"

# Synthesized above sibling source/test directories
APP_ROOT = "app"

# Top-level directory names that signal an application layout
APP_LAYOUT_DIRS: Tuple[str, ...] = ("lib", "test", "integration_test", "testing")

# --- Staging area ---
# Our own checkout cache: tmp/chronograph/<cache>/... (first match wins)
CACHE_PREFIX_PATTERNS: Tuple[str, ...] = (
    r"^(?:/|[A-Za-z]:/)?tmp/chronograph/[^/]+/[^/]+/app/",
    r"^(?:/|[A-Za-z]:/)?tmp/chronograph/[^/]+/",
)

# --- Blocklist ---
# Only unmistakable OS / VCS / build-system internals. Anything else is kept.
SYSTEM_PATH_PATTERNS: Tuple[str, ...] = (
    r"^/?var/tmp/",
    r"^/?var/log/",
    r"^/?proc/",
    r"^/?sys/",
    r"^/?dev/",
    r"^[A-Za-z]:/Windows/",
    r"^[A-Za-z]:/Users/[^/]+/AppData/",
    r"(?:^|/)node_modules/[^/]+/[^/]+/[^/]+/",
    r"(?:^|/)\.git/",
    r"(?:^|/)build/intermediates/",
    r"(?:^|/)target/(?:debug|release)/build/",
)

DEFAULT_CONFIG_PATH = Path(".chronograph/config.yaml")
CONFIG_ENV_VAR = "CHRONOGRAPH_CONFIG"


class EngineConfig(BaseModel):
    """
    User-tunable settings for tree construction.

    Attributes:
        placeholder_root: Root label used when the layout is ambiguous.
        app_root: Root label synthesized above an application layout.
        app_layout_dirs: Top-level names that identify an application layout.
        extra_ignore_patterns: Additional regexes for paths to drop.
    """

    placeholder_root: str = PLACEHOLDER_ROOT
    app_root: str = APP_ROOT
    app_layout_dirs: List[str] = Field(default_factory=lambda: list(APP_LAYOUT_DIRS))
    extra_ignore_patterns: List[str] = Field(default_factory=list)

    def root_strategy(self) -> "LayoutAwareRootStrategy":
        """Build the root detection strategy described by this config."""
        from .tree.root import LayoutAwareRootStrategy

        return LayoutAwareRootStrategy(
            placeholder=self.placeholder_root,
            app_root=self.app_root,
            app_layout_dirs=self.app_layout_dirs,
        )


def load_config(path: Path | None = None) -> EngineConfig:
    """
    Load engine settings from YAML.

    Resolution order: explicit ``path``, the ``CHRONOGRAPH_CONFIG`` environment
    variable, then ``.chronograph/config.yaml``. A missing file yields defaults.

    Args:
        path: Optional explicit config file.

    Returns:
        EngineConfig: The parsed settings.

    Raises:
        ConfigError: The file is not valid YAML, not a mapping, or holds
            invalid settings.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        return EngineConfig()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(str(path), str(e)) from e

    section = data.get("tree", data) if isinstance(data, dict) else data
    if not isinstance(section, dict):
        raise ConfigError(str(path), f"expected a mapping, got {type(section).__name__}")

    try:
        config = EngineConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(str(path), f"invalid settings ({e.error_count()} errors)") from e

    logger.debug("Loaded config from %s", path)
    return config
