"""
Unit tests for style and layout tables.
"""

from graphlens.graph.styles import (
    CATEGORY_STYLES,
    DEFAULT_PLATFORM_COLOR,
    DEFAULT_STYLE,
    Theme,
    assign_group_colors,
    generate_colors,
    layout_options,
    platform_color,
    style_for,
    style_table,
)


class TestStyles:
    def test_known_category(self):
        style = style_for("app", Theme.LIGHT)
        assert style.fill_color == "#ff6347"
        assert style.shape == "star"

    def test_unknown_category_uses_default(self):
        assert style_for("somethingNew", Theme.DARK) == DEFAULT_STYLE[Theme.DARK]
        assert style_for(None) == DEFAULT_STYLE[Theme.DARK]

    def test_every_category_has_both_themes(self):
        for styles in CATEGORY_STYLES.values():
            assert set(styles) == {Theme.LIGHT, Theme.DARK}

    def test_platform_colors(self):
        assert platform_color("ios", Theme.LIGHT) == "#007aff"
        assert platform_color("carplay") == DEFAULT_PLATFORM_COLOR

    def test_style_table_shape(self):
        table = style_table(Theme.LIGHT)

        assert table["theme"] == "light"
        assert table["stroke"] == "#000000"
        assert table["categories"]["package"]["shape"] == "star"
        assert table["default"]["fill_color"] == "#CCCCCC"
        assert table["platforms"]["macos"] == "#ff9500"


class TestGroupColors:
    def test_generate_colors_evenly_spaced(self):
        assert generate_colors(4) == [
            "hsl(0, 70%, 50%)",
            "hsl(90, 70%, 50%)",
            "hsl(180, 70%, 50%)",
            "hsl(270, 70%, 50%)",
        ]
        assert generate_colors(0) == []

    def test_projects_colored_before_packages(self, sample_model):
        colors = assign_group_colors(sample_model)

        assert list(colors) == ["projectGroup-/ws/App", "packageGroup-/ws/Core"]
        assert colors["projectGroup-/ws/App"] == "hsl(0, 70%, 50%)"
        assert colors["packageGroup-/ws/Core"] == "hsl(180, 70%, 50%)"


def test_layout_options():
    options = layout_options()
    assert options["name"] == "fcose"
    assert options["randomize"] is False
