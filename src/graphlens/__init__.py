"""
graphlens - Interactive dependency graph viewer for Xcode workspaces.

graphlens turns an exported workspace graph (projects, targets, packages and
their dependencies) into a grouped node/edge model and a filterable page.

Key Components:
- graph: Input decoding, model building, styles and the rendering page
- filtering: Facet state, visibility computation and search debounce
- core: Model types and persisted preferences

Usage:
    from graphlens.graph.raw import load_raw_graph
    from graphlens.graph.builder import build_graph_model

    model = build_graph_model(load_raw_graph("graph.json"))
"""

__version__ = "0.1.0"

from .core.types import Edge, GraphModel, MetadataItem, Node, NodeClass, NodeKind

__all__ = [
    "__version__",
    "Edge",
    "GraphModel",
    "MetadataItem",
    "Node",
    "NodeClass",
    "NodeKind",
]
