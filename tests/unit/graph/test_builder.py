"""
Unit tests for the graph model builder.
"""

import json
import logging

import pytest

from graphlens.core.types import DropReason, NodeClass, NodeKind, Platform
from graphlens.graph.builder import GraphModelBuilder, build_graph_model, target_platforms
from graphlens.graph.raw import RawTarget, parse_raw_graph
from graphlens.graph.styles import CATEGORY_STYLES, DEFAULT_STYLE, Theme, style_for


def _build(document):
    return build_graph_model(parse_raw_graph(document))


class TestGraphModelBuilder:
    def test_sample_nodes(self, sample_model):
        assert [n.id for n in sample_model.nodes] == [
            "projectGroup-/ws/App",
            "target-/ws/App-AppTarget",
            "packageGroup-/ws/Core",
            "package-/ws/Core-CoreLib",
        ]

    def test_project_group(self, sample_model):
        group = sample_model.get_node("projectGroup-/ws/App")

        assert group.label == "App"
        assert group.kind == NodeKind.PROJECT
        assert group.node_class == NodeClass.PROJECT_GROUP
        assert group.parent_id is None
        assert group.tags == ("ios",)

    def test_target_node(self, sample_model):
        target = sample_model.get_node("target-/ws/App-AppTarget")

        assert target.parent_id == "projectGroup-/ws/App"
        assert target.category == "app"
        assert target.tags == ("ios",)
        assert target.kind == NodeKind.TARGET

    def test_snake_case_product_gets_category_style(self, sample_document):
        sample_document["projects"]["/ws/App"]["targets"]["AppTarget"]["product"] = "static_library"

        target = _build(sample_document).get_node("target-/ws/App-AppTarget")

        assert target.category == "staticLibrary"
        assert ("Product", "staticLibrary") in [(m.key, m.value) for m in target.metadata]
        assert style_for(target.category) == CATEGORY_STYLES["staticLibrary"][Theme.DARK]
        assert style_for(target.category) != DEFAULT_STYLE[Theme.DARK]

    def test_package_nodes(self, sample_model):
        group = sample_model.get_node("packageGroup-/ws/Core")
        package = sample_model.get_node("package-/ws/Core-CoreLib")

        assert group.label == "Packages at Core"
        assert group.tags == Platform.all_tags()
        assert package.parent_id == group.id
        assert package.category == "package"
        assert package.tags == Platform.all_tags()

    def test_sample_edge(self, sample_model):
        assert [(e.source_id, e.target_id) for e in sample_model.edges] == [
            ("target-/ws/App-AppTarget", "package-/ws/Core-CoreLib")
        ]
        assert sample_model.dropped == ()

    def test_node_ids_are_unique(self, sample_document):
        # Same package location reached twice through different keys
        sample_document["packages"]["/ws/Other"] = {
            "CoreLib": {"local": {"path": "/ws/Other"}}
        }
        model = _build(sample_document)

        ids = [n.id for n in model.nodes]
        assert len(ids) == len(set(ids))

    def test_referential_integrity(self, sample_document):
        sample_document["dependencies"].append({
            "from": {"target": {"name": "AppTarget", "path": "/ws/App"}},
            "to": [
                {"sdk": {"path": "/sdk/UIKit.framework", "name": "UIKit"}},
                {"framework": {"path": "/libs/Foo.framework"}},
            ],
        })
        model = _build(sample_document)

        for edge in model.edges:
            assert model.has_node(edge.source_id)
            assert model.has_node(edge.target_id)
        for node in model.nodes:
            if node.parent_id is not None:
                assert model.get_node(node.parent_id).is_group

    def test_dangling_references_are_recorded(self, sample_document, caplog):
        sample_document["dependencies"].append({
            "from": {"target": {"name": "Ghost", "path": "/ws/App"}},
            "to": [{"packageProduct": {"path": "/ws/Core", "product": "CoreLib"}}],
        })
        sample_document["dependencies"].append({
            "from": {"target": {"name": "AppTarget", "path": "/ws/App"}},
            "to": [{"sdk": {"path": "/sdk/UIKit.framework", "name": "UIKit"}}],
        })

        with caplog.at_level(logging.DEBUG, logger="graphlens.graph.builder"):
            model = _build(sample_document)

        assert [(d.source_id, d.reason) for d in model.dropped] == [
            ("target-/ws/App-Ghost", DropReason.UNKNOWN_SOURCE),
            ("target-/ws/App-AppTarget", DropReason.UNKNOWN_TARGET),
        ]
        assert len(model.edges) == 1
        assert "Dropped 2 dependency relation(s)" in caplog.text

    def test_duplicate_relations_yield_one_edge(self, sample_document):
        sample_document["dependencies"].append(sample_document["dependencies"][0])

        model = _build(sample_document)

        assert len(model.edges) == 1

    def test_flat_and_entry_encodings_build_the_same_model(self, sample_document):
        entry = sample_document["dependencies"][0]
        flat = dict(sample_document, dependencies=[entry["from"], entry["to"]])

        assert _build(flat).to_document() == _build(sample_document).to_document()

    def test_determinism(self, sample_document):
        first = json.dumps(_build(sample_document).to_document(), indent=2)
        second = json.dumps(_build(sample_document).to_document(), indent=2)

        assert first == second

    def test_empty_project_still_builds_group(self, sample_document):
        sample_document["projects"]["/ws/Empty"] = {"name": "Empty", "path": "/ws/Empty"}

        model = _build(sample_document)

        group = model.get_node("projectGroup-/ws/Empty")
        assert group is not None
        assert model.children_of(group.id) == []
        assert group.tags == ()

    def test_builder_uses_injected_collector(self, sample_document):
        class NoMetadata:
            def collect_project(self, project):
                return ()

            def collect_target(self, target):
                return ()

            def collect_package_group(self, path):
                return ()

            def collect_package(self, package):
                return ()

        model = GraphModelBuilder(collector=NoMetadata()).build(parse_raw_graph(sample_document))

        assert all(node.metadata == () for node in model.nodes)


class TestTargetPlatforms:
    @pytest.mark.parametrize(
        "destinations,expected",
        [
            (["iPhone", "iPad"], ("ios",)),
            (["mac"], ("macos",)),
            (["appleWatch"], ("watchos",)),
            (["appleTv"], ("tvos",)),
            (["appleVision"], ("visionos",)),
            (["iPhone", "mac"], ("ios", "macos")),
            (["CarPlay"], ("carplay",)),
            ([], ()),
        ],
    )
    def test_destinations(self, destinations, expected):
        target = RawTarget(name="T", destinations=destinations)
        assert target_platforms(target) == expected

    def test_explicit_platforms_win(self):
        target = RawTarget(name="T", destinations=["iPhone"], platforms=["macOS"])
        assert target_platforms(target) == ("macos",)
