"""
Raw Graph Document.

Schema and loader for the dependency graph exported by the upstream project
generator. The document is loosely typed JSON: enum-like values arrive as
single-key tagged objects (``{"target": {"name": ..., "path": ...}}``) and
the dependency map may be encoded either as a list of ``{"from", "to"}``
entries or as a flat ``[key, values, key, values, ...]`` array.

Decoding fails fast: a missing or malformed document raises a
``GraphLoadError`` before any node is built.
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class GraphLoadError(Exception):
    """Base error for input documents that cannot be turned into a RawGraph."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class GraphNotFoundError(GraphLoadError):
    """The input document is missing or unreadable."""


class GraphDecodeError(GraphLoadError):
    """The input document is not valid JSON or does not match the schema."""


class _RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _unwrap_tag(value: Any) -> Any:
    """Turn ``{"tag": payload}`` into ``{"kind": "tag", **payload}``."""
    if not isinstance(value, dict) or "kind" in value or len(value) != 1:
        return value
    (tag, payload), = value.items()
    if isinstance(payload, dict):
        return {"kind": tag, **payload}
    return {"kind": tag, "value": payload}


# =============================================================================
# Dependency references
# =============================================================================


class DependencyKind(StrEnum):
    """Kinds of graph-level dependency endpoints."""
    TARGET = "target"
    FRAMEWORK = "framework"
    XCFRAMEWORK = "xcframework"
    LIBRARY = "library"
    BUNDLE = "bundle"
    PACKAGE_PRODUCT = "packageProduct"
    SDK = "sdk"
    MACRO = "macro"


class GraphDependency(_RawModel):
    """
    One endpoint of a dependency relation.

    ``name`` holds the discriminating name: the target name, the SDK name or
    the package product, depending on ``kind``.
    """
    kind: DependencyKind
    path: str = ""
    name: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, value: Any) -> Any:
        value = _unwrap_tag(value)
        if isinstance(value, dict) and not value.get("name") and value.get("product"):
            value = {**value, "name": value["product"]}
        return value


class DependencyEntry(_RawModel):
    """A relation ``source -> [targets...]``."""
    source: GraphDependency = Field(alias="from")
    targets: List[GraphDependency] = Field(default_factory=list, alias="to")


# =============================================================================
# Targets
# =============================================================================


class TargetDependencyKind(StrEnum):
    """Kinds of dependencies declared on a target."""
    TARGET = "target"
    PROJECT = "project"
    FRAMEWORK = "framework"
    XCFRAMEWORK = "xcframework"
    LIBRARY = "library"
    PACKAGE = "package"
    SDK = "sdk"
    XCTEST = "xctest"


_PATH_NAMED_DEPENDENCIES = {
    TargetDependencyKind.FRAMEWORK,
    TargetDependencyKind.XCFRAMEWORK,
    TargetDependencyKind.LIBRARY,
}


class TargetDependency(_RawModel):
    """A dependency as declared on a target, used for display only."""
    kind: TargetDependencyKind
    name: str | None = None
    target: str | None = None
    path: str | None = None
    product: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, value: Any) -> Any:
        if isinstance(value, str) and value == TargetDependencyKind.XCTEST:
            return {"kind": value}
        return _unwrap_tag(value)

    @property
    def display_name(self) -> str:
        if self.kind in (TargetDependencyKind.TARGET, TargetDependencyKind.SDK):
            return self.name or ""
        if self.kind == TargetDependencyKind.PROJECT:
            return self.target or self.name or ""
        if self.kind in _PATH_NAMED_DEPENDENCIES:
            return Path(self.path).stem if self.path else ""
        if self.kind == TargetDependencyKind.PACKAGE:
            return self.product or self.name or ""
        return "XCTest"


class ScriptOrder(StrEnum):
    PRE = "pre"
    POST = "post"


class BuildScript(_RawModel):
    name: str
    order: ScriptOrder = ScriptOrder.PRE


class RawTarget(_RawModel):
    """A build target inside a project."""
    name: str
    product: str | None = None
    bundle_id: str | None = None
    product_name: str | None = None
    destinations: List[str] = Field(default_factory=list)
    platforms: List[str] | None = None
    dependencies: List[TargetDependency] = Field(default_factory=list)
    environment_variables: Dict[str, str] = Field(default_factory=dict)
    scripts: List[BuildScript] = Field(default_factory=list)

    @field_validator("product", mode="before")
    @classmethod
    def _camel_product(cls, value: Any) -> Any:
        # Product types are reported by their case name, e.g. static_library -> staticLibrary
        if isinstance(value, str) and "_" in value:
            return to_camel(value)
        return value

    @field_validator("environment_variables", mode="before")
    @classmethod
    def _flatten_env(cls, value: Any) -> Any:
        # Variables may be plain strings or {"value": ..., "isEnabled": ...}
        if not isinstance(value, dict):
            return value
        return {
            key: (entry.get("value", "") if isinstance(entry, dict) else entry)
            for key, entry in value.items()
        }

    @property
    def pre_scripts(self) -> List[BuildScript]:
        return [s for s in self.scripts if s.order == ScriptOrder.PRE]

    @property
    def post_scripts(self) -> List[BuildScript]:
        return [s for s in self.scripts if s.order == ScriptOrder.POST]


# =============================================================================
# Projects
# =============================================================================


class NamedRef(_RawModel):
    name: str


class FileRef(_RawModel):
    path: str


class RawProject(_RawModel):
    """A project container and its targets, keyed by target name."""
    name: str
    path: str = ""
    source_root_path: str | None = None
    xcode_proj_path: str | None = None
    is_external: bool = False
    organization_name: str | None = None
    class_prefix: str | None = None
    default_known_regions: List[str] | None = None
    development_region: str | None = None
    last_upgrade_check: str | None = None
    targets: Dict[str, RawTarget] = Field(default_factory=dict)
    schemes: List[NamedRef] = Field(default_factory=list)
    additional_files: List[FileRef] = Field(default_factory=list)

    @field_validator("targets", mode="before")
    @classmethod
    def _default_target_names(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            name: ({"name": name, **target} if isinstance(target, dict) else target)
            for name, target in value.items()
        }

    @field_validator("last_upgrade_check", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, float)) else value


# =============================================================================
# Packages
# =============================================================================


class RequirementKind(StrEnum):
    UP_TO_NEXT_MAJOR = "upToNextMajor"
    UP_TO_NEXT_MINOR = "upToNextMinor"
    RANGE = "range"
    EXACT = "exact"
    BRANCH = "branch"
    REVISION = "revision"


class Requirement(_RawModel):
    """A version requirement on a remote package."""
    kind: RequirementKind
    value: str | None = None
    upper: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, value: Any) -> Any:
        value = _unwrap_tag(value)
        if not isinstance(value, dict):
            return value
        value = dict(value)
        if "_0" in value:
            value["value"] = value.pop("_0")
        if "from" in value:
            value["value"] = value.pop("from")
        if "to" in value:
            value["upper"] = value.pop("to")
        return value

    @model_validator(mode="after")
    def _check_parts(self) -> Requirement:
        if not self.value:
            raise ValueError(f"{self.kind.value} requirement needs a version")
        if self.kind == RequirementKind.RANGE and not self.upper:
            raise ValueError("range requirement needs an upper bound")
        return self


class PackageKind(StrEnum):
    LOCAL = "local"
    REMOTE = "remote"


class RawPackage(_RawModel):
    """A package reference, either local (``path``) or remote (``url``)."""
    kind: PackageKind
    url: str | None = None
    requirement: Requirement | None = None
    path: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, value: Any) -> Any:
        return _unwrap_tag(value)

    @property
    def is_remote(self) -> bool:
        return self.kind == PackageKind.REMOTE


# =============================================================================
# Document
# =============================================================================


class RawGraph(_RawModel):
    """The complete input document."""
    name: str = ""
    path: str = ""
    projects: Dict[str, RawProject] = Field(default_factory=dict)
    packages: Dict[str, Dict[str, RawPackage]] = Field(default_factory=dict)
    dependencies: List[DependencyEntry] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _pair_flat_encoding(cls, value: Any) -> Any:
        if isinstance(value, dict):
            raise ValueError("dependencies must be a list; object keys cannot encode references")
        if not isinstance(value, list) or not value:
            return value
        if all(isinstance(item, dict) and "from" in item for item in value):
            return value
        if len(value) % 2:
            raise ValueError("flat dependency encoding needs an even number of items")
        return [
            {"from": value[i], "to": value[i + 1]}
            for i in range(0, len(value), 2)
        ]


def parse_raw_graph(data: Any, path: Optional[Path] = None) -> RawGraph:
    """
    Validate decoded JSON against the RawGraph schema.

    Raises:
        GraphDecodeError: If the data does not match the schema.
    """
    try:
        return RawGraph.model_validate(data)
    except ValidationError as e:
        raise GraphDecodeError(f"Invalid graph document: {e.error_count()} validation error(s)\n{e}", path) from e


def load_raw_graph(graph_file: str | Path) -> RawGraph:
    """
    Read and decode a graph document from disk.

    Args:
        graph_file: Path to the JSON document.

    Returns:
        The validated RawGraph.

    Raises:
        GraphNotFoundError: The file does not exist or cannot be read.
        GraphDecodeError: The file is not valid JSON or fails validation.
    """
    path = Path(graph_file)
    if not path.is_file():
        raise GraphNotFoundError(f"Graph file not found: {path}", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphNotFoundError(f"Cannot read graph file {path}: {e}", path) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphDecodeError(f"Graph file {path} is not valid JSON: {e}", path) from e

    raw = parse_raw_graph(data, path)
    logger.debug(
        f"Loaded {path}: {len(raw.projects)} projects, "
        f"{len(raw.packages)} package locations, {len(raw.dependencies)} relations"
    )
    return raw


def load_raw_graph_result(graph_file: str | Path) -> Result[RawGraph, GraphLoadError]:
    """Non-raising variant of ``load_raw_graph``."""
    try:
        return Ok(load_raw_graph(graph_file))
    except GraphLoadError as e:
        return Err(e)
