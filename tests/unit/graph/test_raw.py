"""
Unit tests for raw graph decoding.
"""

import json

import pytest

from graphlens.core.result import Err, Ok
from graphlens.graph.raw import (
    DependencyKind,
    GraphDecodeError,
    GraphDependency,
    GraphNotFoundError,
    PackageKind,
    RequirementKind,
    TargetDependency,
    load_raw_graph,
    load_raw_graph_result,
    parse_raw_graph,
)


class TestParseRawGraph:
    def test_sample_document(self, sample_document):
        raw = parse_raw_graph(sample_document)

        project = raw.projects["/ws/App"]
        assert project.name == "App"
        assert project.xcode_proj_path == "/ws/App/App.xcodeproj"
        assert project.organization_name == "Acme"

        target = project.targets["AppTarget"]
        assert target.product == "app"
        assert target.bundle_id == "com.acme.app"
        assert target.destinations == ["iPhone"]
        assert target.dependencies[0].display_name == "CoreLib"

        package = raw.packages["/ws/Core"]["CoreLib"]
        assert package.kind == PackageKind.REMOTE
        assert package.requirement.kind == RequirementKind.UP_TO_NEXT_MAJOR
        assert package.requirement.value == "1.0.0"

    def test_dependency_entries(self, sample_document):
        raw = parse_raw_graph(sample_document)

        assert len(raw.dependencies) == 1
        entry = raw.dependencies[0]
        assert entry.source == GraphDependency(kind=DependencyKind.TARGET, path="/ws/App", name="AppTarget")
        assert entry.targets == [
            GraphDependency(kind=DependencyKind.PACKAGE_PRODUCT, path="/ws/Core", name="CoreLib")
        ]

    def test_flat_dependency_encoding(self, sample_document):
        """[key, values, key, values] is paired into entries."""
        sample_document["dependencies"] = [
            {"target": {"name": "AppTarget", "path": "/ws/App"}},
            [{"sdk": {"path": "/sdk/UIKit.framework", "name": "UIKit"}}],
        ]

        raw = parse_raw_graph(sample_document)

        assert len(raw.dependencies) == 1
        assert raw.dependencies[0].source.name == "AppTarget"
        assert raw.dependencies[0].targets[0].kind == DependencyKind.SDK

    def test_flat_encoding_with_odd_length_fails(self, sample_document):
        sample_document["dependencies"] = [{"target": {"name": "AppTarget", "path": "/ws/App"}}]

        with pytest.raises(GraphDecodeError):
            parse_raw_graph(sample_document)

    def test_dependencies_as_object_fails(self, sample_document):
        sample_document["dependencies"] = {"AppTarget": []}

        with pytest.raises(GraphDecodeError):
            parse_raw_graph(sample_document)

    def test_target_name_defaults_to_key(self, sample_document):
        del sample_document["projects"]["/ws/App"]["targets"]["AppTarget"]["name"]

        raw = parse_raw_graph(sample_document)

        assert raw.projects["/ws/App"].targets["AppTarget"].name == "AppTarget"

    def test_environment_variables_are_flattened(self, sample_document):
        target = sample_document["projects"]["/ws/App"]["targets"]["AppTarget"]
        target["environmentVariables"] = {"API": {"value": "prod", "isEnabled": True}, "MODE": "debug"}

        raw = parse_raw_graph(sample_document)

        assert raw.projects["/ws/App"].targets["AppTarget"].environment_variables == {
            "API": "prod",
            "MODE": "debug",
        }

    @pytest.mark.parametrize(
        "product,expected",
        [
            ("static_library", "staticLibrary"),
            ("unit_tests", "unitTests"),
            ("app_extension", "appExtension"),
            ("watch2_extension", "watch2Extension"),
            ("staticFramework", "staticFramework"),
            ("app", "app"),
        ],
    )
    def test_product_is_camel_cased(self, sample_document, product, expected):
        sample_document["projects"]["/ws/App"]["targets"]["AppTarget"]["product"] = product

        raw = parse_raw_graph(sample_document)

        assert raw.projects["/ws/App"].targets["AppTarget"].product == expected

    def test_numeric_upgrade_check_is_stringified(self, sample_document):
        sample_document["projects"]["/ws/App"]["lastUpgradeCheck"] = 1500

        raw = parse_raw_graph(sample_document)

        assert raw.projects["/ws/App"].last_upgrade_check == "1500"

    def test_missing_required_field_fails(self, sample_document):
        del sample_document["projects"]["/ws/App"]["name"]

        with pytest.raises(GraphDecodeError) as exc:
            parse_raw_graph(sample_document)

        assert "validation error" in str(exc.value)

    @pytest.mark.parametrize(
        "requirement",
        [{"branch": {}}, {"exact": ""}, {"range": {"from": "1.0.0"}}],
    )
    def test_incomplete_requirement_fails(self, sample_document, requirement):
        sample_document["packages"]["/ws/Core"]["CoreLib"]["remote"]["requirement"] = requirement

        with pytest.raises(GraphDecodeError):
            parse_raw_graph(sample_document)

    def test_empty_document(self):
        raw = parse_raw_graph({})

        assert raw.projects == {}
        assert raw.packages == {}
        assert raw.dependencies == []


class TestTargetDependency:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ({"target": {"name": "Core"}}, "Core"),
            ({"project": {"target": "Shared", "path": "/ws/Shared"}}, "Shared"),
            ({"framework": {"path": "/libs/Foo.framework"}}, "Foo"),
            ({"xcframework": {"path": "/libs/Bar.xcframework"}}, "Bar"),
            ({"package": {"product": "CoreLib"}}, "CoreLib"),
            ({"sdk": {"name": "UIKit.framework"}}, "UIKit.framework"),
            ("xctest", "XCTest"),
        ],
    )
    def test_display_name(self, value, expected):
        assert TargetDependency.model_validate(value).display_name == expected


class TestLoadRawGraph:
    def test_load_from_file(self, sample_graph_file):
        raw = load_raw_graph(sample_graph_file)
        assert "/ws/App" in raw.projects

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphNotFoundError) as exc:
            load_raw_graph(tmp_path / "missing.json")

        assert exc.value.path == tmp_path / "missing.json"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("{not json")

        with pytest.raises(GraphDecodeError):
            load_raw_graph(path)

    def test_result_ok(self, sample_graph_file):
        result = load_raw_graph_result(sample_graph_file)

        assert isinstance(result, Ok)
        assert result.unwrap().name == "Workspace"

    def test_result_err(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"projects": "nope"}))

        result = load_raw_graph_result(path)

        assert isinstance(result, Err)
        assert isinstance(result.error, GraphDecodeError)
        with pytest.raises(GraphDecodeError):
            result.unwrap()
