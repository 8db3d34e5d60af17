"""
Visibility Engine.

Pure function from (GraphModel, FilterState) to a complete show/hide
assignment for every node and edge. The model is never touched; visibility
is a projection the rendering layer applies.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..core.types import GraphModel
from .propagation import edge_pass, group_pass, leaf_pass
from .state import FilterState


@dataclass(frozen=True)
class VisibilityAssignment:
    """Visibility of every node (by id) and every edge (by ``Edge.id``)."""
    nodes: Dict[str, bool] = field(default_factory=dict)
    edges: Dict[str, bool] = field(default_factory=dict)

    def is_node_visible(self, node_id: str) -> bool:
        return self.nodes.get(node_id, False)

    def is_edge_visible(self, edge_id: str) -> bool:
        return self.edges.get(edge_id, False)

    def visible_nodes(self) -> List[str]:
        return [nid for nid, shown in self.nodes.items() if shown]

    def hidden_nodes(self) -> List[str]:
        return [nid for nid, shown in self.nodes.items() if not shown]

    def visible_edges(self) -> List[str]:
        return [eid for eid, shown in self.edges.items() if shown]

    def summary(self) -> Dict[str, int]:
        return {
            "visible_nodes": len(self.visible_nodes()),
            "hidden_nodes": len(self.hidden_nodes()),
            "visible_edges": len(self.visible_edges()),
            "hidden_edges": len(self.edges) - len(self.visible_edges()),
        }


def compute_visibility(model: GraphModel, state: FilterState) -> VisibilityAssignment:
    """
    Recompute visibility from scratch.

    Runs in O(N + E); node entries follow model order.
    """
    leaves = leaf_pass(model, state)
    groups = group_pass(model, state, leaves)

    combined = {**leaves, **groups}
    nodes = {node.id: combined[node.id] for node in model.nodes}

    return VisibilityAssignment(nodes=nodes, edges=edge_pass(model, nodes))
