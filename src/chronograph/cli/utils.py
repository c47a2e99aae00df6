"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, loading of analyzer output and
parsing of ``--state`` edits shared by the commands.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

import click
from pydantic import ValidationError

from ..config import EngineConfig, load_config
from ..core.errors import ConfigError, InputFormatError
from ..core.types import CommitSnapshot, DependencyEdge, InclusionState


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def read_edges(path: Path) -> List[DependencyEdge]:
    """
    Read analyzer edges from a JSON file.

    Accepted shapes:
    - a bare list of edges
    - ``{"dependencies": [...]}``
    - a commit snapshot with ``analysis_result.dependencies``

    Raises:
        InputFormatError: The file is unreadable or matches none of the shapes.
    """
    try:
        data: Any = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise InputFormatError(str(path), str(e)) from e

    try:
        if isinstance(data, list):
            return [DependencyEdge.model_validate(item) for item in data]
        if isinstance(data, dict):
            return CommitSnapshot.model_validate(data).dependencies
    except ValidationError as e:
        raise InputFormatError(str(path), f"invalid edge data ({e.error_count()} errors)") from e

    raise InputFormatError(str(path), "expected a list of edges or a snapshot object")


def load_edges(edges_file: str) -> Optional[List[DependencyEdge]]:
    """
    Load analyzer edges, reporting problems to the user.

    Returns:
        Optional[List[DependencyEdge]]: The edges, or None if loading failed.
    """
    path = Path(edges_file)
    if not path.exists():
        echo_error(f"Edges file not found: {edges_file}")
        return None

    try:
        return read_edges(path)
    except InputFormatError as e:
        echo_error(f"Failed to load edges: {e}")
        return None


def load_engine_config() -> Optional[EngineConfig]:
    """
    Load the engine config, reporting problems to the user.

    Returns:
        Optional[EngineConfig]: The settings, or None if the config file is unusable.
    """
    try:
        return load_config()
    except ConfigError as e:
        echo_error(f"Invalid config: {e}")
        return None


def parse_state_edit(value: str) -> Tuple[str, InclusionState]:
    """
    Parse ``NODE_ID=STATE`` into an edit.

    Raises:
        click.BadParameter: Missing ``=`` or unknown state name.
    """
    node_id, sep, state = value.rpartition("=")
    if not sep or not node_id:
        raise click.BadParameter(f"expected NODE_ID=STATE, got '{value}'")
    try:
        return node_id, InclusionState.parse(state)
    except ValueError as e:
        choices = ", ".join(s.value for s in InclusionState)
        raise click.BadParameter(f"unknown state '{state}' (choose from {choices})") from e


def state_edits_callback(ctx, param, values) -> List[Tuple[str, InclusionState]]:
    """Click callback turning repeated ``--state`` options into edits."""
    return [parse_state_edit(v) for v in values]
