"""
Build Command - Normalize an exported graph into the node/edge model.

Writes the document the page renders, or prints a summary as JSON.
"""

import json
import logging
import sys
from pathlib import Path
from typing import List

import click
from pydantic import BaseModel

from ...graph.visualize import write_document
from ..utils import echo_info, echo_success, load_model

logger = logging.getLogger(__name__)


# --- API Models ---
class DroppedRelation(BaseModel):
    source: str
    target: str
    reason: str


class BuildSummary(BaseModel):
    nodes: int
    groups: int
    edges: int
    dropped: List[DroppedRelation]
    output: str | None = None


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", type=click.Path(), help="Write the model document to this file")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary instead of text")
def build(graph_file: str, output: str | None, as_json: bool):
    """
    Build the grouped node/edge model from GRAPH_FILE.

    Without --output the model document is printed to stdout.
    """
    model = load_model(graph_file)
    if model is None:
        sys.exit(1)

    if output:
        write_document(model, Path(output))

    stats = model.stats()
    summary = BuildSummary(
        nodes=stats["nodes"],
        groups=stats["groups"],
        edges=stats["edges"],
        dropped=[
            DroppedRelation(source=d.source_id, target=d.target_id, reason=d.reason.value)
            for d in model.dropped
        ],
        output=output,
    )

    if as_json:
        click.echo(summary.model_dump_json(indent=2))
        return

    if not output:
        click.echo(json.dumps(model.to_document(), indent=2))
        return

    echo_success(f"Wrote model to {output}")
    echo_info(f"Nodes: {summary.nodes} ({summary.groups} groups)")
    echo_info(f"Edges: {summary.edges}")
    if summary.dropped:
        echo_info(f"Dropped relations: {len(summary.dropped)}")
