"""
Render Command - Generate the interactive graph page.

Writes index.html and graph.json into an output directory and optionally
opens the page in the browser.
"""

import sys
from pathlib import Path

import click
from click.core import ParameterSource

from ...config import load_config
from ...core.preferences import PreferenceStore
from ...graph.styles import Theme
from ...graph.visualize import open_visualization, write_bundle
from ..utils import echo_error, echo_info, echo_success, load_model


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", "output_dir", type=click.Path(file_okay=False),
              help="Output directory (defaults to the configured one)")
@click.option("--open/--no-open", "open_browser", default=True,
              help="Open the page in the browser when done (defaults to the configured choice)")
@click.option("--theme", type=click.Choice([t.value for t in Theme]),
              help="Initial theme (defaults to the saved preference)")
@click.pass_context
def render(ctx: click.Context, graph_file: str, output_dir: str | None, open_browser: bool, theme: str | None):
    """
    Generate the interactive page for GRAPH_FILE.
    """
    try:
        config = load_config()
    except ValueError as e:
        echo_error(str(e))
        sys.exit(1)

    model = load_model(graph_file)
    if model is None:
        sys.exit(1)

    out_dir = Path(output_dir) if output_dir else config.output_dir
    page_theme = Theme(theme) if theme else PreferenceStore().get_theme()
    if ctx.get_parameter_source("open_browser") == ParameterSource.DEFAULT:
        open_browser = config.open_browser

    options = {
        "theme": page_theme,
        "title": f"graphlens - {Path(graph_file).stem}",
        "debounce_seconds": config.debounce_seconds,
    }
    if open_browser:
        page = open_visualization(model, out_dir, **options)
    else:
        page = str(write_bundle(model, out_dir, **options))

    echo_success(f"Generated: {page}")
    echo_info(f"Open: {Path(page).resolve().as_uri()}")
