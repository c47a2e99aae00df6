"""
Tree Command - Show the project tree and its inclusion states.

Usage:
    chronograph tree deps.json
    chronograph tree deps.json --state lib=expanded --max-depth 3
"""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.types import InclusionState, ProjectTree, TreeNode
from ...tree.builder import build_tree
from ...tree.state import set_states
from ..utils import load_edges, load_engine_config, state_edits_callback

console = Console()

_STATE_ICONS = {
    InclusionState.EXPANDED: "[green]☑[/green]",
    InclusionState.COLLAPSED: "[yellow]◩[/yellow]",
    InclusionState.EXCLUDED: "[dim]☐[/dim]",
}


@click.command()
@click.argument("edges_file", type=click.Path())
@click.option("--state", "-s", "edits", multiple=True, callback=state_edits_callback,
              metavar="NODE_ID=STATE", help="Apply an edit (expanded, collapsed, excluded)")
@click.option("--max-depth", "-d", type=int, default=None, help="Limit the printed depth")
@click.option("--visible-only", is_flag=True, help="Hide excluded nodes")
def tree(edges_file: str, edits, max_depth: int | None, visible_only: bool):
    """
    Show the project tree built from analyzer edges.

    Each node is printed with its inclusion state:
    ☑ expanded, ◩ collapsed, ☐ excluded.
    """
    edges = load_edges(edges_file)
    if edges is None:
        sys.exit(1)

    config = load_engine_config()
    if config is None:
        sys.exit(1)

    project = build_tree(
        edges,
        strategy=config.root_strategy(),
        extra_patterns=config.extra_ignore_patterns,
    )
    project = project.with_nodes(dict(set_states(edits, project.nodes)))

    console.print(render_tree(project, max_depth=max_depth, visible_only=visible_only))


def render_tree(project: ProjectTree, max_depth: int | None = None, visible_only: bool = False) -> Tree:
    """Convert a ProjectTree into a rich Tree."""
    root = project.root
    rich_tree = Tree(_label(root, bold=True))

    stack = [(rich_tree, child_id, 1) for child_id in reversed(root.children)]
    while stack:
        branch, node_id, depth = stack.pop()
        node = project.nodes[node_id]
        if visible_only and node.state == InclusionState.EXCLUDED:
            continue
        child_branch = branch.add(_label(node))
        if max_depth is not None and depth >= max_depth:
            continue
        stack.extend((child_branch, cid, depth + 1) for cid in reversed(node.children))

    return rich_tree


def _label(node: TreeNode, bold: bool = False) -> str:
    icon = _STATE_ICONS[node.state]
    name = escape(f"{node.label}/" if node.is_folder else node.label)
    if bold:
        name = f"[bold]{name}[/bold]"
    return f"{icon} {name}"
