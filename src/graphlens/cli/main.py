"""
graphlens CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import build, filter, render, theme
from .utils import configure_logging


@click.group()
@click.version_option(package_name="graphlens")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """graphlens: Interactive dependency graph viewer.

    Turns an exported Xcode workspace graph into a grouped, filterable
    node/edge model and an interactive page.

    \b
    Quick Start:
      graphlens build graph.json -o model.json
      graphlens render graph.json --open
      graphlens filter graph.json --disable-category package
    """
    configure_logging(verbose)


# Register commands
main.add_command(build.build)
main.add_command(render.render)
main.add_command(filter.filter_graph, name="filter")
main.add_command(theme.theme)

if __name__ == "__main__":
    main()
