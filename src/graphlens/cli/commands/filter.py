"""
Filter Command - Preview which nodes a filter selection leaves visible.

Applies the same facet rules as the page: search, categories, platform tags
and groups.
"""

import sys
from typing import Dict, List, Tuple

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.types import GraphModel
from ...filtering.controller import FilterController
from ...filtering.engine import VisibilityAssignment
from ...filtering.state import CategoryToggled, GroupToggled, SearchChanged, TagToggled
from ..utils import echo_warning, load_model

console = Console()


# --- API Models ---
class VisibleNode(BaseModel):
    id: str
    label: str
    kind: str
    category: str | None = None
    group: bool = False


class FilterResponse(BaseModel):
    visible_nodes: List[VisibleNode]
    visible_edges: List[str]
    summary: Dict[str, int] = Field(default_factory=dict)


@click.command("filter")
@click.argument("graph_file", type=click.Path())
@click.option("-s", "--search", default="", help="Case-insensitive label search")
@click.option("--disable-category", multiple=True, help="Hide a product type (repeatable)")
@click.option("--disable-tag", multiple=True, help="Hide a platform tag (repeatable)")
@click.option("--disable-group", multiple=True, help="Hide a project or package group by id (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def filter_graph(
    graph_file: str,
    search: str,
    disable_category: Tuple[str, ...],
    disable_tag: Tuple[str, ...],
    disable_group: Tuple[str, ...],
    as_json: bool,
):
    """
    Show the nodes and edges left visible by a filter selection.
    """
    model = load_model(graph_file)
    if model is None:
        sys.exit(1)

    if not as_json:
        _warn_unknown("category", disable_category, model.categories())
        _warn_unknown("tag", disable_tag, model.tags())
        _warn_unknown("group", disable_group, model.group_ids())

    controller = FilterController(model)
    for category in disable_category:
        controller.dispatch(CategoryToggled(category, False))
    for tag in disable_tag:
        controller.dispatch(TagToggled(tag, False))
    for group_id in disable_group:
        controller.dispatch(GroupToggled(group_id, False))
    if search:
        controller.dispatch(SearchChanged(search))
        controller.flush_search()

    response = _build_response(model, controller.visibility)

    if as_json:
        click.echo(response.model_dump_json(indent=2))
        return

    _print_table(response)


def _warn_unknown(facet: str, values: Tuple[str, ...], known: List[str]) -> None:
    for value in values:
        if value not in known:
            echo_warning(f"Unknown {facet}: {value}")


def _build_response(model: GraphModel, visibility: VisibilityAssignment) -> FilterResponse:
    nodes = [
        VisibleNode(
            id=node.id,
            label=node.label,
            kind=node.kind.value,
            category=node.category,
            group=node.is_group,
        )
        for node in model.nodes
        if visibility.is_node_visible(node.id)
    ]
    return FilterResponse(
        visible_nodes=nodes,
        visible_edges=visibility.visible_edges(),
        summary=visibility.summary(),
    )


def _print_table(response: FilterResponse) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Node", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Product Type")

    for node in response.visible_nodes:
        label = f"[bold]{escape(node.label)}[/bold]" if node.group else escape(node.label)
        table.add_row(label, node.kind, node.category or "")

    console.print(table)
    summary = response.summary
    console.print(
        f"\n[green]{summary.get('visible_nodes', 0)} visible[/green], "
        f"[dim]{summary.get('hidden_nodes', 0)} hidden[/dim] nodes; "
        f"{summary.get('visible_edges', 0)} of "
        f"{summary.get('visible_edges', 0) + summary.get('hidden_edges', 0)} edges shown"
    )
