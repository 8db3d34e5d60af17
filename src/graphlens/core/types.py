"""
Core type definitions for graphlens.

The normalized node/edge model consumed by the visibility engine and
serialized for the rendering page. Models are frozen: a GraphModel is built
once per input document and never mutated afterwards.
"""

from enum import StrEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr


class NodeKind(StrEnum):
    """Kinds of entities in the dependency graph."""
    TARGET = "target"
    PACKAGE = "package"
    PROJECT = "project"
    UNKNOWN = "unknown"


class NodeClass(StrEnum):
    """Styling classes attached to container nodes."""
    PROJECT_GROUP = "projectGroup"
    PACKAGE_GROUP = "packageGroup"


class Platform(StrEnum):
    """
    Known platform tags.

    Tags are open strings on nodes; this enum is only the vocabulary used
    when an entity applies to every platform.
    """
    IOS = "ios"
    MACOS = "macos"
    TVOS = "tvos"
    WATCHOS = "watchos"
    VISIONOS = "visionos"

    @classmethod
    def all_tags(cls) -> Tuple[str, ...]:
        return tuple(p.value for p in cls)


class DropReason(StrEnum):
    """Why a raw dependency relation did not become an edge."""
    UNKNOWN_SOURCE = "unknown_source"
    UNKNOWN_TARGET = "unknown_target"


class MetadataItem(BaseModel):
    """A single human-readable fact displayed in the node inspector."""
    key: str
    value: str

    model_config = ConfigDict(frozen=True)


class Node(BaseModel):
    """
    A renderable entity: either a group container or a leaf.
    """
    id: str
    label: str
    kind: NodeKind = NodeKind.UNKNOWN
    parent_id: str | None = None
    category: str | None = None
    tags: Tuple[str, ...] = ()
    metadata: Tuple[MetadataItem, ...] = ()
    node_class: NodeClass | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_group(self) -> bool:
        return self.node_class is not None

    def to_element(self) -> Dict[str, Any]:
        """Serialize to the `{data, classes?}` element shape of the page."""
        data: Dict[str, Any] = {"id": self.id}
        if self.parent_id is not None:
            data["parent"] = self.parent_id
        data["label"] = self.label
        if self.category is not None:
            data["productType"] = self.category
        data["metadata"] = [item.model_dump() for item in self.metadata]
        data["nodeType"] = self.kind.value
        data["platforms"] = list(self.tags)

        element: Dict[str, Any] = {"data": data}
        if self.node_class is not None:
            element["classes"] = self.node_class.value
        return element


class Edge(BaseModel):
    """
    Directed dependency between two nodes of the same model.
    """
    source_id: str
    target_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> str:
        return f"{self.source_id}->{self.target_id}"

    def to_element(self) -> Dict[str, Any]:
        return {"data": {"source": self.source_id, "target": self.target_id}}


class DroppedReference(BaseModel):
    """A dependency relation omitted because an endpoint did not resolve."""
    source_id: str
    target_id: str
    reason: DropReason

    model_config = ConfigDict(frozen=True)


class GraphModel(BaseModel):
    """
    The normalized, immutable node/edge model.

    Nodes and edges keep first-encounter order so serialization is
    byte-for-byte stable for the same input.
    """
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()
    dropped: Tuple[DroppedReference, ...] = ()

    model_config = ConfigDict(frozen=True)

    _index: Dict[str, Node] = PrivateAttr(default_factory=dict)
    _children: Dict[str, List[str]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        index = {node.id: node for node in self.nodes}
        children: Dict[str, List[str]] = {}
        for node in self.nodes:
            if node.parent_id is not None:
                children.setdefault(node.parent_id, []).append(node.id)
        self._index = index
        self._children = children

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._index

    def children_of(self, group_id: str) -> List[Node]:
        return [self._index[cid] for cid in self._children.get(group_id, [])]

    def iter_groups(self) -> Iterator[Node]:
        return (n for n in self.nodes if n.is_group)

    def iter_leaves(self) -> Iterator[Node]:
        return (n for n in self.nodes if not n.is_group)

    def categories(self) -> List[str]:
        """Distinct categories in first-encounter order."""
        seen: Dict[str, None] = {}
        for node in self.nodes:
            if node.category:
                seen.setdefault(node.category, None)
        return list(seen)

    def tags(self) -> List[str]:
        """Distinct tags in first-encounter order."""
        seen: Dict[str, None] = {}
        for node in self.nodes:
            for tag in node.tags:
                seen.setdefault(tag, None)
        return list(seen)

    def group_ids(self) -> List[str]:
        return [n.id for n in self.iter_groups()]

    def stats(self) -> Dict[str, int]:
        return {
            "nodes": len(self.nodes),
            "groups": sum(1 for _ in self.iter_groups()),
            "edges": len(self.edges),
            "dropped": len(self.dropped),
        }

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_document(self) -> Dict[str, List[Dict[str, Any]]]:
        """Render the `{nodes, edges}` document served to the page."""
        return {
            "nodes": [node.to_element() for node in self.nodes],
            "edges": [edge.to_element() for edge in self.edges],
        }
