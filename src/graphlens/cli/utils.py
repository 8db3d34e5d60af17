"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across various CLI commands,
including formatted printing and graph loading.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..core.result import map_ok
from ..core.types import GraphModel
from ..graph.builder import build_graph_model
from ..graph.raw import GraphNotFoundError, load_raw_graph_result

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="[%X]",
    )


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


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def load_model(graph_file: str) -> Optional[GraphModel]:
    """
    Decode a graph document and build its model.

    Load errors are reported to the user rather than raised.

    Args:
        graph_file (str): Path to the exported graph JSON document.

    Returns:
        Optional[GraphModel]: The built model, or None if loading failed.
    """
    result = map_ok(load_raw_graph_result(Path(graph_file)), build_graph_model)

    if result.is_err():
        error = result.error
        echo_error(str(error))
        if isinstance(error, GraphNotFoundError):
            click.echo("Export the workspace graph as JSON first.", err=True)
        return None

    return result.unwrap()
