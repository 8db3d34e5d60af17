"""
Graph Model Builder.

Normalizes a RawGraph into the deduplicated, grouped node/edge model the
page renders:

1. Project containers and their targets.
2. Package locations and their packages.
3. Dependency relations whose endpoints both resolve to built nodes.

The transform is pure and deterministic: nodes and edges come out in
first-encounter order, so building the same document twice yields identical
output. It never raises; unresolvable relations are omitted from the edges
and recorded on ``GraphModel.dropped`` instead.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.types import (
    DroppedReference,
    DropReason,
    Edge,
    GraphModel,
    Node,
    NodeClass,
    NodeKind,
    Platform,
)
from .identity import dependency_id, entity_id, group_id
from .metadata import MetadataCollector, package_group_label
from .raw import DependencyEntry, RawGraph, RawPackage, RawProject, RawTarget

logger = logging.getLogger(__name__)

PACKAGE_CATEGORY = NodeKind.PACKAGE.value

# Destination names as exported upstream, mapped to platform tags
DESTINATION_PLATFORMS: Dict[str, str] = {
    "iPhone": Platform.IOS,
    "iPad": Platform.IOS,
    "macWithiPadDesign": Platform.IOS,
    "macCatalyst": Platform.IOS,
    "mac": Platform.MACOS,
    "appleWatch": Platform.WATCHOS,
    "appleTv": Platform.TVOS,
    "appleVision": Platform.VISIONOS,
}


def target_platforms(target: RawTarget) -> Tuple[str, ...]:
    """
    Platform tags of a target.

    An explicit ``platforms`` list wins; otherwise destinations are mapped,
    falling back to the lowercased destination name for unknown ones.
    """
    if target.platforms is not None:
        return _unique(p.lower() for p in target.platforms)
    return _unique(
        str(DESTINATION_PLATFORMS.get(d, d.lower())) for d in target.destinations
    )


class GraphModelBuilder:
    """
    Builds a GraphModel from a RawGraph.

    A builder instance holds no state between calls to ``build``.
    """

    def __init__(self, collector: Optional[MetadataCollector] = None):
        self.collector = collector or MetadataCollector()

    def build(self, raw: RawGraph) -> GraphModel:
        nodes: Dict[str, Node] = {}

        for path, project in raw.projects.items():
            self._add_project(nodes, path, project)

        for path, packages in raw.packages.items():
            self._add_packages(nodes, path, packages)

        edges, dropped = self._resolve_edges(nodes, raw.dependencies)

        if dropped:
            logger.warning(
                f"Dropped {len(dropped)} dependency relation(s) with unresolved endpoints"
            )
        logger.info(f"Built graph model: {len(nodes)} nodes, {len(edges)} edges")

        return GraphModel(
            nodes=tuple(nodes.values()),
            edges=tuple(edges),
            dropped=tuple(dropped),
        )

    # =========================================================================
    # Nodes
    # =========================================================================

    def _add_project(self, nodes: Dict[str, Node], path: str, project: RawProject) -> None:
        gid = group_id(NodeClass.PROJECT_GROUP, path)
        if gid not in nodes:
            nodes[gid] = Node(
                id=gid,
                label=project.name,
                kind=NodeKind.PROJECT,
                tags=_unique(
                    tag for target in project.targets.values() for tag in target_platforms(target)
                ),
                metadata=self.collector.collect_project(project),
                node_class=NodeClass.PROJECT_GROUP,
            )

        for name, target in project.targets.items():
            nid = entity_id(NodeKind.TARGET, path, name)
            if nid in nodes:
                continue
            nodes[nid] = Node(
                id=nid,
                parent_id=gid,
                label=name,
                kind=NodeKind.TARGET,
                category=target.product or None,
                tags=target_platforms(target),
                metadata=self.collector.collect_target(target),
            )

    def _add_packages(
        self, nodes: Dict[str, Node], path: str, packages: Dict[str, RawPackage]
    ) -> None:
        all_platforms = Platform.all_tags()

        gid = group_id(NodeClass.PACKAGE_GROUP, path)
        if gid not in nodes:
            nodes[gid] = Node(
                id=gid,
                label=package_group_label(path),
                kind=NodeKind.PACKAGE,
                tags=all_platforms,
                metadata=self.collector.collect_package_group(path),
                node_class=NodeClass.PACKAGE_GROUP,
            )

        for name, package in packages.items():
            nid = entity_id(NodeKind.PACKAGE, path, name)
            if nid in nodes:
                continue
            nodes[nid] = Node(
                id=nid,
                parent_id=gid,
                label=name,
                kind=NodeKind.PACKAGE,
                category=PACKAGE_CATEGORY,
                tags=all_platforms,
                metadata=self.collector.collect_package(package),
            )

    # =========================================================================
    # Edges
    # =========================================================================

    def _resolve_edges(
        self, nodes: Dict[str, Node], relations: List[DependencyEntry]
    ) -> Tuple[List[Edge], List[DroppedReference]]:
        edges: Dict[Tuple[str, str], Edge] = {}
        dropped: List[DroppedReference] = []

        for relation in relations:
            source_id = dependency_id(relation.source)
            for target_ref in relation.targets:
                target_id = dependency_id(target_ref)

                reason = None
                if source_id not in nodes:
                    reason = DropReason.UNKNOWN_SOURCE
                elif target_id not in nodes:
                    reason = DropReason.UNKNOWN_TARGET

                if reason is not None:
                    logger.debug(f"Dropping {source_id} -> {target_id}: {reason}")
                    dropped.append(
                        DroppedReference(source_id=source_id, target_id=target_id, reason=reason)
                    )
                    continue

                key = (source_id, target_id)
                if key not in edges:
                    edges[key] = Edge(source_id=source_id, target_id=target_id)

        return list(edges.values()), dropped


def build_graph_model(raw: RawGraph) -> GraphModel:
    """Convenience wrapper around ``GraphModelBuilder().build``."""
    return GraphModelBuilder().build(raw)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(v for v in values if v))
