"""
chronograph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import diff, graph, tree


@click.group()
@click.version_option(package_name="chronograph")
@click.option("--verbose", "-v", is_flag=True, help="Log engine events to stderr")
def main(verbose: bool):
    """chronograph: Dependency Evolution Explorer.

    Builds a project tree from analyzer edges, lets you expand, collapse
    and exclude folders, and emits the resulting compound graph or the
    dependency diff between two commits.

    \b
    Quick Start:
      chronograph tree deps.json
      chronograph graph deps.json --state lib=expanded
      chronograph diff base.json head.json --format markdown
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
        datefmt="[%X]",
    )


# Register commands
main.add_command(tree.tree)
main.add_command(graph.graph)
main.add_command(diff.diff)

if __name__ == "__main__":
    main()
