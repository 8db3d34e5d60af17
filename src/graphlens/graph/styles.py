"""
Style and Layout Tables.

Colours and shapes per category and platform for both themes, plus the
layout options handed to the rendering library. Categories are an open
vocabulary: anything not listed here renders with ``DEFAULT_STYLE``.
"""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any, Dict

from ..core.types import GraphModel, NodeClass


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class NodeStyle:
    """Visual attributes of a leaf node for one theme."""
    fill_color: str
    shape: str
    stroke_width: int = 2
    size: int = 50


STROKE_COLORS: Dict[Theme, str] = {
    Theme.LIGHT: "#000000",
    Theme.DARK: "#ffffff",
}

DEFAULT_STYLE: Dict[Theme, NodeStyle] = {
    Theme.LIGHT: NodeStyle("#CCCCCC", "ellipse"),
    Theme.DARK: NodeStyle("#808080", "ellipse"),
}


def _styles(light: str, dark: str, shape: str) -> Dict[Theme, NodeStyle]:
    return {Theme.LIGHT: NodeStyle(light, shape), Theme.DARK: NodeStyle(dark, shape)}


CATEGORY_STYLES: Dict[str, Dict[Theme, NodeStyle]] = {
    # Applications
    "app": _styles("#ff6347", "#ff4500", "star"),
    "appClip": _styles("#ff4500", "#ff6347", "star"),
    # Extensions
    "appExtension": _styles("#9370db", "#8a2be2", "ellipse"),
    "watch2Extension": _styles("#9370db", "#8a2be2", "ellipse"),
    "messagesExtension": _styles("#32cd32", "#00ff7f", "hexagon"),
    # Libraries and frameworks
    "staticLibrary": _styles("#00bfff", "#1e90ff", "rectangle"),
    "dynamicLibrary": _styles("#ffd700", "#daa520", "diamond"),
    "framework": _styles("#ffd700", "#daa520", "triangle"),
    "staticFramework": _styles("#00bfff", "#1e90ff", "pentagon"),
    # Bundles and packages
    "bundle": _styles("#f0f8ff", "#4682b4", "hexagon"),
    "package": _styles("#ff4500", "#ff6347", "star"),
    # Tests
    "unitTests": _styles("#32cd32", "#228b22", "octagon"),
    "uiTests": _styles("#32cd32", "#228b22", "octagon"),
    # Tools
    "commandLineTool": _styles("#ff7f50", "#ff6347", "triangle"),
    "xpc": _styles("#800080", "#4b0082", "pentagon"),
    "systemExtension": _styles("#696969", "#2f4f4f", "diamond"),
    "macro": _styles("#808080", "#a9a9a9", "diamond"),
}

PLATFORM_COLORS: Dict[str, Dict[Theme, str]] = {
    "ios": {Theme.LIGHT: "#007aff", Theme.DARK: "#1a73e8"},
    "macos": {Theme.LIGHT: "#ff9500", Theme.DARK: "#ff8c00"},
    "tvos": {Theme.LIGHT: "#af52de", Theme.DARK: "#8b44c4"},
    "watchos": {Theme.LIGHT: "#ffcc00", Theme.DARK: "#ffaa00"},
    "visionos": {Theme.LIGHT: "#34c759", Theme.DARK: "#28a745"},
}

DEFAULT_PLATFORM_COLOR = "#ffffff"


def style_for(category: str | None, theme: Theme = Theme.DARK) -> NodeStyle:
    """Style of a category, falling back to the default for unknown ones."""
    return CATEGORY_STYLES.get(category or "", DEFAULT_STYLE)[theme]


def platform_color(tag: str, theme: Theme = Theme.DARK) -> str:
    return PLATFORM_COLORS.get(tag, {}).get(theme, DEFAULT_PLATFORM_COLOR)


def generate_colors(count: int) -> list[str]:
    """``count`` evenly spaced HSL colours."""
    if count <= 0:
        return []
    step = 360 / count
    return [f"hsl({i * step:g}, 70%, 50%)" for i in range(count)]


def assign_group_colors(model: GraphModel) -> Dict[str, str]:
    """
    Give every group node a distinct colour.

    Project groups are coloured first, then package groups, each in model
    order.
    """
    projects = [n.id for n in model.iter_groups() if n.node_class == NodeClass.PROJECT_GROUP]
    packages = [n.id for n in model.iter_groups() if n.node_class == NodeClass.PACKAGE_GROUP]
    ordered = projects + packages
    return dict(zip(ordered, generate_colors(len(ordered))))


def layout_options() -> Dict[str, Any]:
    """fCoSE layout configuration for compound graphs."""
    return {
        "name": "fcose",
        "quality": "proof",
        "nodeSeparation": 700,
        "componentSpacing": 120,
        "idealEdgeLength": 300,
        "gravity": 1.5,
        "nodeRepulsion": 15000,
        "edgeElasticity": 0.2,
        "fit": True,
        "padding": 60,
        "nodeDimensionsIncludeLabels": True,
        "packComponents": True,
        "randomize": False,
        "nestingFactor": 0.1,
    }


def style_table(theme: Theme) -> Dict[str, Any]:
    """All style data for one theme, in the shape the page script reads."""
    return {
        "theme": theme.value,
        "stroke": STROKE_COLORS[theme],
        "default": asdict(DEFAULT_STYLE[theme]),
        "categories": {name: asdict(styles[theme]) for name, styles in CATEGORY_STYLES.items()},
        "platforms": {name: colors[theme] for name, colors in PLATFORM_COLORS.items()},
    }
