"""
Shared fixtures: a small exported workspace graph.

One project (App) with a single app target depending on one remote package
(CoreLib) that lives at /ws/Core.
"""

import copy
import json

import pytest

SAMPLE_DOCUMENT = {
    "name": "Workspace",
    "path": "/ws",
    "projects": {
        "/ws/App": {
            "name": "App",
            "path": "/ws/App",
            "sourceRootPath": "/ws/App",
            "xcodeProjPath": "/ws/App/App.xcodeproj",
            "isExternal": False,
            "organizationName": "Acme",
            "targets": {
                "AppTarget": {
                    "name": "AppTarget",
                    "product": "app",
                    "bundleId": "com.acme.app",
                    "productName": "App",
                    "destinations": ["iPhone"],
                    "dependencies": [{"package": {"product": "CoreLib"}}],
                }
            },
            "schemes": [{"name": "App"}],
        }
    },
    "packages": {
        "/ws/Core": {
            "CoreLib": {
                "remote": {
                    "url": "https://example.com/acme/core.git",
                    "requirement": {"upToNextMajor": "1.0.0"},
                }
            }
        }
    },
    "dependencies": [
        {
            "from": {"target": {"name": "AppTarget", "path": "/ws/App"}},
            "to": [{"packageProduct": {"path": "/ws/Core", "product": "CoreLib"}}],
        }
    ],
}


@pytest.fixture
def sample_document():
    """A fresh copy of the sample document, safe to mutate."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_graph_file(tmp_path, sample_document):
    """The sample document written to disk."""
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(sample_document))
    return path


@pytest.fixture
def sample_model(sample_document):
    """The GraphModel built from the sample document."""
    from graphlens.graph.builder import build_graph_model
    from graphlens.graph.raw import parse_raw_graph

    return build_graph_model(parse_raw_graph(sample_document))
