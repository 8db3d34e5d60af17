"""
Identity Scheme.

Deterministic string ids for graph entities. The same function family is
used to deduplicate nodes while building and to resolve raw dependency
references to node ids, so both sides always agree on the key format:

    projectGroup-<path>            project container
    packageGroup-<path>            package container
    target-<path>-<name>           target inside a project
    package-<path>-<name>          package at a package location
    package-<path>                 path-addressed binaries (frameworks, ...)
"""

from ..core.types import NodeClass, NodeKind
from .raw import DependencyKind, GraphDependency

_PATH_ONLY_DEPENDENCIES = {
    DependencyKind.FRAMEWORK,
    DependencyKind.XCFRAMEWORK,
    DependencyKind.LIBRARY,
    DependencyKind.BUNDLE,
    DependencyKind.MACRO,
}


def group_id(node_class: NodeClass, path: str) -> str:
    """Id of the container node for a project or package location."""
    return f"{node_class.value}-{path}"


def entity_id(kind: NodeKind, path: str, name: str | None = None) -> str:
    """Id of a leaf entity, discriminated by name when one is given."""
    if name is None:
        return f"{kind.value}-{path}"
    return f"{kind.value}-{path}-{name}"


def dependency_id(ref: GraphDependency) -> str:
    """
    Resolve a raw dependency reference to the node id it would have.

    The result may name a node that does not exist (an SDK, a prebuilt
    framework); the builder treats that as a dangling reference.
    """
    if ref.kind == DependencyKind.TARGET:
        return entity_id(NodeKind.TARGET, ref.path, ref.name or "")
    if ref.kind in _PATH_ONLY_DEPENDENCIES:
        return entity_id(NodeKind.PACKAGE, ref.path)
    # packageProduct and sdk are addressed by path plus name
    return entity_id(NodeKind.PACKAGE, ref.path, ref.name or "")
