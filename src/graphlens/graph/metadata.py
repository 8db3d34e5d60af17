"""
Metadata Collection.

Builds the ordered list of descriptive facts shown in the node inspector.
The page displays metadata in list order with no secondary sort, so the
order of the ``_append`` calls below is part of the output contract.

Rules:
- A fact is emitted only when its value is present and non-empty.
- List-valued facts are joined into one comma-separated string.
"""

from pathlib import PurePosixPath
from typing import Iterable, List, Optional, Tuple

from ..core.types import MetadataItem
from .raw import RawPackage, RawProject, RawTarget, Requirement, RequirementKind


class MetadataKey:
    PATH = "Path"
    SOURCE_ROOT = "Source Root"
    XCODE_PROJ_PATH = "Xcode Project Path"
    NAME = "Name"
    IS_EXTERNAL = "Is External"
    ORGANIZATION_NAME = "Organization Name"
    CLASS_PREFIX = "Class Prefix"
    DEFAULT_KNOWN_REGIONS = "Default Known Regions"
    DEVELOPMENT_REGION = "Development Region"
    LAST_UPGRADE_CHECK = "Last Upgrade Check"
    TARGETS = "Targets"
    SCHEMES = "Schemes"
    ADDITIONAL_FILES = "Additional Files"
    PRODUCT = "Product"
    BUNDLE_ID = "Bundle ID"
    PRODUCT_NAME = "Product Name"
    DEPENDENCIES = "Dependencies"
    ENVIRONMENT_VARIABLES = "Environment Variables"
    PRE_BUILD_SCRIPTS = "Pre Build Scripts"
    POST_BUILD_SCRIPTS = "Post Build Scripts"
    IS_REMOTE = "Is Remote"
    URL = "URL"
    REQUIREMENT = "Requirement"
    LOCAL_PATH = "Local Path"


_REQUIREMENT_PREFIXES = {
    RequirementKind.UP_TO_NEXT_MAJOR: "Up to next major",
    RequirementKind.UP_TO_NEXT_MINOR: "Up to next minor",
    RequirementKind.EXACT: "Exact version",
    RequirementKind.BRANCH: "Branch",
    RequirementKind.REVISION: "Revision",
}


def package_group_label(path: str) -> str:
    """Display label of the container for packages at ``path``."""
    return f"Packages at {PurePosixPath(path).name or path}"


def describe_requirement(requirement: Requirement) -> str:
    """Human-readable form of a package version requirement."""
    if requirement.kind == RequirementKind.RANGE:
        return f"Range {requirement.value} to {requirement.upper}"
    return f"{_REQUIREMENT_PREFIXES[requirement.kind]} {requirement.value}"


class MetadataCollector:
    """
    Extracts ordered ``MetadataItem`` tuples per entity kind.

    Stateless; a single instance can be shared across builds.
    """

    def collect_project(self, project: RawProject) -> Tuple[MetadataItem, ...]:
        items: List[MetadataItem] = []
        _append(items, MetadataKey.PATH, project.path)
        _append(items, MetadataKey.SOURCE_ROOT, project.source_root_path)
        _append(items, MetadataKey.XCODE_PROJ_PATH, project.xcode_proj_path)
        _append(items, MetadataKey.IS_EXTERNAL, "Yes" if project.is_external else "No")
        _append(items, MetadataKey.ORGANIZATION_NAME, project.organization_name)
        _append(items, MetadataKey.CLASS_PREFIX, project.class_prefix)
        _append(items, MetadataKey.DEFAULT_KNOWN_REGIONS, _join(project.default_known_regions))
        _append(items, MetadataKey.DEVELOPMENT_REGION, project.development_region)
        _append(items, MetadataKey.LAST_UPGRADE_CHECK, project.last_upgrade_check)
        _append(items, MetadataKey.TARGETS, _join(project.targets.keys()))
        _append(items, MetadataKey.SCHEMES, _join(s.name for s in project.schemes))
        _append(items, MetadataKey.ADDITIONAL_FILES, _join(f.path for f in project.additional_files))
        return tuple(items)

    def collect_target(self, target: RawTarget) -> Tuple[MetadataItem, ...]:
        items: List[MetadataItem] = []
        _append(items, MetadataKey.PRODUCT, target.product)
        _append(items, MetadataKey.BUNDLE_ID, target.bundle_id)
        _append(items, MetadataKey.PRODUCT_NAME, target.product_name)
        _append(items, MetadataKey.DEPENDENCIES, _join(d.display_name for d in target.dependencies))
        _append(
            items,
            MetadataKey.ENVIRONMENT_VARIABLES,
            _join(f"{key}: {value}" for key, value in target.environment_variables.items()),
        )
        _append(items, MetadataKey.PRE_BUILD_SCRIPTS, _join(s.name for s in target.pre_scripts))
        _append(items, MetadataKey.POST_BUILD_SCRIPTS, _join(s.name for s in target.post_scripts))
        return tuple(items)

    def collect_package_group(self, path: str) -> Tuple[MetadataItem, ...]:
        items: List[MetadataItem] = []
        _append(items, MetadataKey.PATH, path)
        _append(items, MetadataKey.NAME, package_group_label(path))
        return tuple(items)

    def collect_package(self, package: RawPackage) -> Tuple[MetadataItem, ...]:
        items: List[MetadataItem] = []
        _append(items, MetadataKey.IS_REMOTE, "true" if package.is_remote else "false")
        if package.is_remote:
            _append(items, MetadataKey.URL, package.url)
            if package.requirement is not None:
                _append(items, MetadataKey.REQUIREMENT, describe_requirement(package.requirement))
        else:
            _append(items, MetadataKey.LOCAL_PATH, package.path)
        return tuple(items)


def _join(values: Optional[Iterable[str]]) -> str:
    if values is None:
        return ""
    return ", ".join(v for v in values if v)


def _append(items: List[MetadataItem], key: str, value: Optional[str]) -> None:
    if value:
        items.append(MetadataItem(key=key, value=value))
