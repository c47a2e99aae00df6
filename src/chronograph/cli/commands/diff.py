"""
Diff Command - Dependency changes between two commits.

Usage:
    chronograph diff base.json head.json
    chronograph diff base.json head.json --format json
    chronograph diff base.json head.json --format markdown > CHANGES.md
"""

from __future__ import annotations

import json
import sys

import click

from ...analysis.diff import DependencyDiff, DiffSummary, diff_edges, summarize_diff
from ..utils import echo_success, load_edges


@click.command()
@click.argument("base_file", type=click.Path())
@click.argument("head_file", type=click.Path())
@click.option("--format", "output_format", type=click.Choice(["text", "json", "markdown"]),
              default="text", help="Output format")
@click.option("--summary", "summary_only", is_flag=True, help="Only print the counts")
@click.option("--output", "-o", type=click.Path(), help="Write output to file")
def diff(base_file: str, head_file: str, output_format: str, summary_only: bool, output: str | None):
    """
    Compare the dependency edges of two commits.

    Edges match on source, target and relationship; weight is ignored.

    \b
    Exit Codes:
        0 - Success
        1 - Unreadable or invalid input
    """
    edges_a = load_edges(base_file)
    edges_b = load_edges(head_file)
    if edges_a is None or edges_b is None:
        sys.exit(1)

    report = diff_edges(edges_a, edges_b)
    summary = summarize_diff(report, edges_a, edges_b)

    if output_format == "json":
        payload = {"summary": summary.model_dump()}
        if not summary_only:
            payload.update(report.model_dump(mode="json"))
        result = json.dumps(payload, indent=2)
    elif output_format == "markdown":
        result = report.to_markdown()
    else:
        result = _format_text(report, summary, summary_only)

    if output:
        with open(output, "w") as f:
            f.write(result)
        echo_success(f"Report written to {output}")
    else:
        click.echo(result)


def _format_text(report: DependencyDiff, summary: DiffSummary, summary_only: bool) -> str:
    lines = [
        f"Dependencies: {summary.total_a} -> {summary.total_b}",
        f"  + {summary.added_count} added",
        f"  - {summary.removed_count} removed",
        f"  = {summary.unchanged_count} unchanged",
    ]
    if summary_only:
        return "\n".join(lines)

    for icon, edges in (("+", report.added), ("-", report.removed)):
        for edge in edges:
            lines.append(f"{icon} {edge.source_file} --> {edge.target_file} [{edge.relationship_type}]")
    return "\n".join(lines)
