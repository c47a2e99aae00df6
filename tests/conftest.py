"""Shared fixtures: small analyzer outputs with a known tree shape."""

import json

import pytest

from chronograph.core.types import DependencyEdge


def make_edge(source, target, relationship="import", weight=1):
    return DependencyEdge(
        source_file=source,
        target_file=target,
        relationship_type=relationship,
        weight=weight,
    )


@pytest.fixture
def scenario_edges():
    """The single-edge project rooted at 'a'."""
    return [make_edge("a/x.txt", "a/b/y.txt", "import")]


@pytest.fixture
def app_edges():
    """
    An application layout with lib/ and test/ at the top.

    Tree (root synthesized as 'app'):
        lib/
          config/assets.dart, config/dependencies.dart
          data/repositories/repo.dart, data/services/api.dart
          ui/home/view.dart
          main.dart
        test/
          ui/home_test.dart
    """
    return [
        make_edge("lib/main.dart", "lib/config/assets.dart"),
        make_edge("lib/config/dependencies.dart", "lib/data/services/api.dart"),
        make_edge("lib/data/repositories/repo.dart", "lib/data/services/api.dart"),
        make_edge("lib/ui/home/view.dart", "lib/data/repositories/repo.dart"),
        make_edge("lib/ui/home/view.dart", "lib/data/services/api.dart", "call", 3),
        make_edge("test/ui/home_test.dart", "lib/ui/home/view.dart"),
    ]


@pytest.fixture
def write_edges(tmp_path):
    """Write edges to a JSON file the way the analyzer cache stores them."""
    def _write(edges, name="deps.json", shape="list"):
        records = [e.model_dump() for e in edges]
        if shape == "snapshot":
            data = {"commit_hash": name, "analysis_result": {"dependencies": records}}
        else:
            data = records
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)
    return _write


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """Point config loading at a file that does not exist."""
    monkeypatch.setenv("CHRONOGRAPH_CONFIG", str(tmp_path / "absent.yaml"))
