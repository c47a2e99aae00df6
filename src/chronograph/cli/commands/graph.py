"""
Graph Command - Emit the compound graph for a tree state.

Builds the project tree from analyzer edges, applies the requested
expand / collapse / exclude edits in order and prints the compound graph,
either as JSON for a renderer or as a readable summary.

Usage:
    chronograph graph deps.json
    chronograph graph deps.json -s lib=expanded -s lib/data=collapsed
    chronograph graph deps.json --format elements -o graph.json
    chronograph graph head.json --diff-base base.json
"""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...analysis.diff import diff_edges
from ...analysis.scope import filter_for_view_root
from ...core.trace import TraceRecorder
from ...core.types import CompoundGraph
from ...graph.compound import apply_diff_status, to_compound_graph
from ...tree.builder import build_tree
from ...tree.state import set_states
from ..utils import echo_info, echo_success, load_edges, load_engine_config, state_edits_callback

console = Console()


@click.command()
@click.argument("edges_file", type=click.Path())
@click.option("--state", "-s", "edits", multiple=True, callback=state_edits_callback,
              metavar="NODE_ID=STATE", help="Apply an edit (expanded, collapsed, excluded)")
@click.option("--scope", "view_root", default="/", help="Only keep edges inside this folder")
@click.option("--diff-base", type=click.Path(), default=None,
              help="Older edges file; tags each edge added/removed/unchanged")
@click.option("--format", "output_format", type=click.Choice(["json", "elements", "text"]),
              default="text", help="Output format")
@click.option("--output", "-o", type=click.Path(), help="Write json/elements output to file")
def graph(edges_file: str, edits, view_root: str, diff_base: str | None,
          output_format: str, output: str | None):
    """
    Generate the compound graph for the current tree state.

    \b
    Formats:
        json      nodes and edges as records
        elements  flat element list for a compound-graph renderer
        text      summary tables
    """
    edges = load_edges(edges_file)
    if edges is None:
        sys.exit(1)

    base_edges = None
    if diff_base:
        base_edges = load_edges(diff_base)
        if base_edges is None:
            sys.exit(1)

    config = load_engine_config()
    if config is None:
        sys.exit(1)

    project = build_tree(
        edges + (base_edges or []),
        strategy=config.root_strategy(),
        extra_patterns=config.extra_ignore_patterns,
    )
    nodes = set_states(edits, project.nodes)

    scope = filter_for_view_root(edges, view_root)
    if scope.strategy != "root-show-all":
        echo_info(f"Scope {view_root}: {scope.strategy} ({scope.stats.internal}/{scope.stats.total} edges)")

    recorder = TraceRecorder()
    if base_edges is not None:
        diff = diff_edges(base_edges, edges)
        render_edges = filter_for_view_root(diff.unchanged + diff.added + diff.removed, view_root).filtered
        result = apply_diff_status(to_compound_graph(render_edges, nodes, hook=recorder), diff)
    else:
        result = to_compound_graph(scope.filtered, nodes, hook=recorder)

    if output_format == "json":
        text = json.dumps(result.model_dump(mode="json"), indent=2)
    elif output_format == "elements":
        text = json.dumps(result.to_elements(), indent=2)
    else:
        _print_summary(result, dropped=len(recorder.named("edge.dropped")))
        return

    if output:
        with open(output, "w") as f:
            f.write(text)
        echo_success(f"Graph written to {output}")
    else:
        click.echo(text)


def _print_summary(result: CompoundGraph, dropped: int) -> None:
    stats = result.get_stats()
    console.print(
        f"[bold]{stats['containers']}[/bold] containers, "
        f"[bold]{stats['leaves']}[/bold] leaves, "
        f"[bold]{stats['edges']}[/bold] edges "
        f"([dim]{stats['original_edges']} dependencies, {dropped} hidden[/dim])"
    )

    if not result.edges:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Source")
    table.add_column("Target")
    table.add_column("Weight", justify="right")
    table.add_column("Relationships")
    table.add_column("Diff")

    for edge in sorted(result.edges, key=lambda e: (-e.weight, e.id)):
        table.add_row(
            escape(edge.source),
            escape(edge.target),
            str(edge.weight),
            escape(", ".join(edge.relationship_types)),
            edge.diff_status.value if edge.diff_status else "",
        )
    console.print(table)
