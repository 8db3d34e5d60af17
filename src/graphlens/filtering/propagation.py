"""
Visibility Propagation.

The three passes behind ``compute_visibility``:

1. leaf_pass  - facet rules on every non-group node.
2. group_pass - a group is shown when enabled and at least one direct child
                survived pass 1. Groups are one level deep, so a single
                bottom-up pass is enough.
3. edge_pass  - an edge is shown when both endpoints are shown.
"""

from typing import Dict

from ..core.types import GraphModel, Node
from .state import FilterState


def leaf_is_visible(node: Node, state: FilterState, needle: str) -> bool:
    """
    Facet rule for a single leaf. ``needle`` is the casefolded search text.

    All facets must pass (AND); within the tag facet one enabled tag is
    enough (OR).
    """
    if needle and needle not in node.label.casefold():
        return False

    if node.category and not state.is_category_enabled(node.category):
        return False

    if node.tags and not any(state.is_tag_enabled(tag) for tag in node.tags):
        return False

    if node.parent_id is not None and not state.is_group_enabled(node.parent_id):
        return False

    return True


def leaf_pass(model: GraphModel, state: FilterState) -> Dict[str, bool]:
    needle = state.search_text.casefold()
    return {node.id: leaf_is_visible(node, state, needle) for node in model.iter_leaves()}


def group_pass(
    model: GraphModel, state: FilterState, leaf_visibility: Dict[str, bool]
) -> Dict[str, bool]:
    visibility: Dict[str, bool] = {}
    for group in model.iter_groups():
        visibility[group.id] = state.is_group_enabled(group.id) and any(
            leaf_visibility.get(child.id, False) for child in model.children_of(group.id)
        )
    return visibility


def edge_pass(model: GraphModel, node_visibility: Dict[str, bool]) -> Dict[str, bool]:
    return {
        edge.id: node_visibility.get(edge.source_id, False)
        and node_visibility.get(edge.target_id, False)
        for edge in model.edges
    }
