"""
Visualization Page.

A self-contained Cytoscape page for exploring the compound dependency graph.

Key Features:
- Compound layout: projects and package locations as groups around their members.
- Filter panel: debounced search plus category, platform and group checkboxes.
- Reset: clears the search and re-enables every filter.
- Theme toggle: dark and light palettes, remembered in the browser.
- Inspector: Name, Type and Platforms followed by the node's metadata.

The page applies the same visibility rules as ``graphlens.filtering``:
leaves pass every facet, groups need an enabled flag and a visible child,
edges need both endpoints.
"""

import json
import logging
import re
import webbrowser
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..config import GRAPH_RESOURCE, PAGE_RESOURCE, SEARCH_DEBOUNCE_SECONDS
from ..core.types import GraphModel
from .styles import Theme, assign_group_colors, layout_options, style_table

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://unpkg.com/cytoscape@3.30.2/dist/cytoscape.min.js"></script>
    <script src="https://unpkg.com/layout-base@2.0.1/layout-base.js"></script>
    <script src="https://unpkg.com/cose-base@2.2.0/cose-base.js"></script>
    <script src="https://unpkg.com/cytoscape-fcose@2.2.0/cytoscape-fcose.js"></script>
    <style>
        :root {
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", "Inter", Roboto, sans-serif;
            --radius-md: 6px;
        }

        body.dark-mode {
            --bg-base: #0a0a0a;
            --bg-surface: #171717;
            --border-default: #333333;
            --text-primary: #fafafa;
            --text-secondary: #a1a1aa;
        }

        body.light-mode {
            --bg-base: #ffffff;
            --bg-surface: #f4f4f5;
            --border-default: #d4d4d8;
            --text-primary: #18181b;
            --text-secondary: #52525b;
        }

        * { box-sizing: border-box; }

        body {
            margin: 0;
            height: 100vh;
            display: flex;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: var(--font-sans);
            overflow: hidden;
        }

        #filters {
            width: 260px;
            padding: 12px;
            overflow-y: auto;
            background: var(--bg-surface);
            border-right: 1px solid var(--border-default);
        }

        #filters h3 {
            font-size: 12px;
            text-transform: uppercase;
            color: var(--text-secondary);
            margin: 16px 0 6px;
        }

        #filters label { display: block; font-size: 13px; padding: 2px 0; }

        #search {
            width: 100%;
            padding: 6px 8px;
            border-radius: var(--radius-md);
            border: 1px solid var(--border-default);
            background: var(--bg-base);
            color: var(--text-primary);
        }

        .toolbar { display: flex; gap: 8px; margin-top: 8px; }

        .toolbar button {
            flex: 1;
            padding: 6px;
            border-radius: var(--radius-md);
            border: 1px solid var(--border-default);
            background: var(--bg-base);
            color: var(--text-primary);
            cursor: pointer;
        }

        #cy { flex: 1; }

        #node-info {
            width: 300px;
            padding: 12px;
            overflow-y: auto;
            background: var(--bg-surface);
            border-left: 1px solid var(--border-default);
            font-size: 13px;
        }

        #node-details p { margin: 4px 0; word-break: break-word; }
    </style>
</head>
<body>
    <div id="filters">
        <input id="search" type="search" placeholder="Search nodes...">
        <div class="toolbar">
            <button id="reset-filters">Reset</button>
            <button id="theme-toggle">Theme</button>
        </div>
        <h3>Product Types</h3>
        <div id="category-filters"></div>
        <h3>Platforms</h3>
        <div id="tag-filters"></div>
        <h3>Projects</h3>
        <div id="project-filters"></div>
        <h3>Packages</h3>
        <div id="package-filters"></div>
    </div>
    <div id="cy"></div>
    <div id="node-info"><div id="node-details"></div></div>

    <script>
        const graphData = __GRAPH_DATA__;
        const themes = __STYLES__;
        const layout = __LAYOUT__;
        const groupColors = __GROUP_COLORS__;
        const DEBOUNCE_MS = __DEBOUNCE_MS__;

        // ============================================================
        // FILTER STATE
        // ============================================================
        const state = { search: "", category: {}, tag: {}, group: {} };

        function isEnabled(facet, key) {
            return state[facet][key] !== false;
        }

        function seedState() {
            state.search = "";
            graphData.nodes.forEach(n => {
                const d = n.data;
                if (n.classes) {
                    state.group[d.id] = true;
                    return;
                }
                if (d.productType) state.category[d.productType] = true;
                (d.platforms || []).forEach(t => { state.tag[t] = true; });
            });
        }

        // ============================================================
        // VISIBILITY
        // ============================================================
        function leafVisible(d, needle) {
            if (needle && !(d.label || "").toLowerCase().includes(needle)) return false;
            if (d.productType && !isEnabled("category", d.productType)) return false;
            const tags = d.platforms || [];
            if (tags.length && !tags.some(t => isEnabled("tag", t))) return false;
            if (d.parent && !isEnabled("group", d.parent)) return false;
            return true;
        }

        function applyFilters(cy) {
            const needle = state.search.toLowerCase();
            const shown = {};

            cy.batch(() => {
                cy.nodes().filter(n => !n.isParent() && !n.hasClass("projectGroup") && !n.hasClass("packageGroup"))
                    .forEach(n => {
                        shown[n.id()] = leafVisible(n.data(), needle);
                    });

                cy.nodes(".projectGroup, .packageGroup").forEach(g => {
                    shown[g.id()] = isEnabled("group", g.id())
                        && g.children().some(c => shown[c.id()]);
                });

                cy.nodes().forEach(n => n.style("display", shown[n.id()] ? "element" : "none"));
                cy.edges().forEach(e => {
                    const visible = shown[e.source().id()] && shown[e.target().id()];
                    e.style("display", visible ? "element" : "none");
                });
            });
        }

        // ============================================================
        // FILTER PANEL
        // ============================================================
        function addCheckbox(container, facet, key, label, cy) {
            const row = document.createElement("label");
            const box = document.createElement("input");
            box.type = "checkbox";
            box.checked = true;
            box.dataset.facet = facet;
            box.dataset.key = key;
            box.addEventListener("change", () => {
                state[facet][key] = box.checked;
                applyFilters(cy);
            });
            row.appendChild(box);
            row.appendChild(document.createTextNode(" " + label));
            container.appendChild(row);
        }

        function populateFilters(cy) {
            Object.keys(state.category).forEach(c =>
                addCheckbox(document.getElementById("category-filters"), "category", c, c, cy));
            Object.keys(state.tag).forEach(t =>
                addCheckbox(document.getElementById("tag-filters"), "tag", t, t, cy));
            graphData.nodes.filter(n => n.classes).forEach(n => {
                const target = n.classes === "projectGroup" ? "project-filters" : "package-filters";
                addCheckbox(document.getElementById(target), "group", n.data.id, n.data.label || n.data.id, cy);
            });
        }

        function setupSearch(cy) {
            const input = document.getElementById("search");
            let timer = null;
            input.addEventListener("input", () => {
                clearTimeout(timer);
                timer = setTimeout(() => {
                    state.search = input.value;
                    applyFilters(cy);
                }, DEBOUNCE_MS);
            });
        }

        function setupReset(cy) {
            document.getElementById("reset-filters").addEventListener("click", () => {
                seedState();
                document.getElementById("search").value = "";
                document.querySelectorAll("#filters input[type=checkbox]").forEach(b => { b.checked = true; });
                applyFilters(cy);
            });
        }

        // ============================================================
        // STYLE & THEME
        // ============================================================
        function styleFor(theme) {
            const t = themes[theme];
            const rules = [
                {
                    selector: "node",
                    style: {
                        "label": "data(label)",
                        "color": t.stroke,
                        "background-color": t.default.fill_color,
                        "shape": t.default.shape,
                        "width": t.default.size,
                        "height": t.default.size,
                        "border-width": t.default.stroke_width,
                        "border-color": t.stroke,
                        "text-valign": "bottom",
                        "font-size": 12
                    }
                },
                {
                    selector: ".projectGroup, .packageGroup",
                    style: {
                        "background-opacity": 0.15,
                        "background-color": ele => groupColors[ele.id()] || t.default.fill_color,
                        "border-color": ele => groupColors[ele.id()] || t.stroke,
                        "text-valign": "top",
                        "font-size": 16,
                        "font-weight": "bold"
                    }
                },
                {
                    selector: "edge",
                    style: {
                        "width": 2,
                        "line-color": t.stroke,
                        "target-arrow-color": t.stroke,
                        "target-arrow-shape": "triangle",
                        "curve-style": "bezier",
                        "opacity": 0.6
                    }
                },
                {
                    selector: ".highlight",
                    style: { "border-width": 4, "opacity": 1, "line-color": "#3b82f6", "target-arrow-color": "#3b82f6" }
                }
            ];
            Object.entries(t.categories).forEach(([name, s]) => {
                rules.splice(1, 0, {
                    selector: `node[productType = "${name}"]`,
                    style: { "background-color": s.fill_color, "shape": s.shape, "border-width": s.stroke_width }
                });
            });
            return rules;
        }

        function applyTheme(cy, theme) {
            document.body.classList.toggle("dark-mode", theme === "dark");
            document.body.classList.toggle("light-mode", theme !== "dark");
            cy.style(styleFor(theme)).update();
            localStorage.setItem("graphlens-theme", theme);
        }

        // ============================================================
        // INSPECTOR
        // ============================================================
        function escapeHtml(text) {
            const div = document.createElement("div");
            div.textContent = text;
            return div.innerHTML;
        }

        function showDetails(node) {
            const d = node.data();
            const nodeType = d.nodeType || "";
            const rows = [
                { key: "Name", value: d.label || "" },
                { key: "Type", value: nodeType.charAt(0).toUpperCase() + nodeType.slice(1) },
                { key: "Platforms", value: (d.platforms || []).join(", ") }
            ].concat(d.metadata || []);

            document.getElementById("node-details").innerHTML = rows
                .filter(r => r.value)
                .map(r => `<p><strong>${escapeHtml(r.key)}:</strong> ${escapeHtml(r.value)}</p>`)
                .join("");
        }

        function setupInspector(cy) {
            cy.on("tap", "node", evt => {
                cy.elements().removeClass("highlight");
                evt.target.addClass("highlight");
                evt.target.neighborhood().addClass("highlight");
                showDetails(evt.target);
            });
            cy.on("tap", evt => {
                if (evt.target === cy) {
                    cy.elements().removeClass("highlight");
                    document.getElementById("node-details").innerHTML = "";
                }
            });
        }

        // ============================================================
        // BOOT
        // ============================================================
        document.addEventListener("DOMContentLoaded", () => {
            let theme = localStorage.getItem("graphlens-theme") || "__THEME__";
            const cy = cytoscape({
                container: document.getElementById("cy"),
                elements: graphData.nodes.concat(graphData.edges),
                layout: layout,
                style: styleFor(theme)
            });
            window.cy = cy;

            seedState();
            populateFilters(cy);
            setupSearch(cy);
            setupReset(cy);
            setupInspector(cy);
            applyTheme(cy, theme);
            applyFilters(cy);

            document.getElementById("theme-toggle").addEventListener("click", () => {
                theme = theme === "dark" ? "light" : "dark";
                applyTheme(cy, theme);
            });
        });
    </script>
</body>
</html>
"""


def _json_default(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default json code"""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


def _embed(value: Any) -> str:
    # "</" inside a string literal would close the script element
    return json.dumps(value, default=_json_default).replace("</", "<\\/")


def generate_html(
    model: GraphModel,
    theme: Theme = Theme.DARK,
    title: str = "graphlens",
    debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
) -> str:
    """
    Generate the HTML content for the graph visualization.
    """
    theme = Theme(theme)
    replacements = {
        "__GRAPH_DATA__": _embed(model.to_document()),
        "__STYLES__": _embed({t.value: style_table(t) for t in Theme}),
        "__LAYOUT__": _embed(layout_options()),
        "__GROUP_COLORS__": _embed(assign_group_colors(model)),
        "__DEBOUNCE_MS__": str(int(round(debounce_seconds * 1000))),
        "__THEME__": theme.value,
        "__TITLE__": title.replace("<", "&lt;").replace(">", "&gt;"),
    }

    # One pass, so placeholder-like text inside the embedded data is left alone
    pattern = re.compile("|".join(re.escape(p) for p in replacements))
    return pattern.sub(lambda m: replacements[m.group(0)], HTML_TEMPLATE)


def write_document(model: GraphModel, output_path: Path) -> Path:
    """Write the output document as indented JSON in model order."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(model.to_document(), indent=2, default=_json_default), encoding="utf-8"
    )
    return output_path


def write_bundle(
    model: GraphModel,
    out_dir: Path,
    theme: Theme = Theme.DARK,
    title: str = "graphlens",
    debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
) -> Path:
    """
    Write the page and the output document side by side.

    Returns:
        Path to the page.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    write_document(model, out_dir / GRAPH_RESOURCE)
    page = out_dir / PAGE_RESOURCE
    page.write_text(
        generate_html(model, theme=theme, title=title, debounce_seconds=debounce_seconds),
        encoding="utf-8",
    )

    logger.info(f"Wrote {page} and {GRAPH_RESOURCE} to {out_dir}")
    return page


def open_visualization(model: GraphModel, out_dir: Path, theme: Theme = Theme.DARK, **kwargs: Any) -> str:
    """
    Generate and open the visualization in the browser.
    """
    page = write_bundle(model, out_dir, theme=theme, **kwargs)
    webbrowser.open(page.resolve().as_uri())
    return str(page)
