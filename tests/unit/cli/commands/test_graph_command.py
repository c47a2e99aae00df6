"""
Unit tests for the 'graph' command.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from chronograph.cli.main import main
from conftest import make_edge

pytestmark = pytest.mark.usefixtures("no_user_config")


class TestGraphCommand:
    """Compound graph output for a tree state."""

    def test_json_output(self, app_edges, write_edges):
        result = CliRunner().invoke(main, ["graph", write_edges(app_edges), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [n["id"] for n in data["nodes"]] == ["app", "lib", "test"]
        assert [e["id"] for e in data["edges"]] == ["test->lib"]

    def test_elements_with_edits(self, app_edges, write_edges):
        result = CliRunner().invoke(
            main, ["graph", write_edges(app_edges), "-s", "lib=expanded", "--format", "elements"],
        )

        assert result.exit_code == 0
        elements = json.loads(result.output)
        edges = [el for el in elements if el["group"] == "edges"]
        assert len(edges) == 4
        merged = next(el for el in edges if el["data"]["id"] == "lib/ui->lib/data")
        assert merged["data"]["weight"] == 2
        assert merged["data"]["relationshipTypes"] == ["import", "call"]

    def test_text_summary(self, app_edges, write_edges):
        result = CliRunner().invoke(main, ["graph", write_edges(app_edges), "-s", "lib=expanded"])

        assert result.exit_code == 0
        assert "2 containers, 5 leaves, 4 edges" in result.output
        assert "1 hidden" in result.output

    def test_diff_base(self, app_edges, write_edges):
        head = write_edges(app_edges[1:], name="head.json")
        base = write_edges(app_edges[:5], name="base.json")

        result = CliRunner().invoke(
            main, ["graph", head, "--diff-base", base, "-s", "lib=expanded", "--format", "json"],
        )

        assert result.exit_code == 0
        statuses = {e["id"]: e["diff_status"] for e in json.loads(result.output)["edges"]}
        assert statuses == {
            "lib/main.dart->lib/config": "removed",
            "lib/config->lib/data": "unchanged",
            "lib/ui->lib/data": "unchanged",
            "test->lib/ui": "added",
        }

    def test_scope(self, app_edges, write_edges):
        result = CliRunner().invoke(main, ["graph", write_edges(app_edges), "--scope", "lib/data"])

        assert result.exit_code == 0
        assert "Scope lib/data: internal-only (1/6 edges)" in result.output

    def test_output_file(self, app_edges, write_edges, tmp_path):
        target = tmp_path / "graph.json"
        result = CliRunner().invoke(
            main, ["graph", write_edges(app_edges), "--format", "elements", "-o", str(target)],
        )

        assert result.exit_code == 0
        assert "Graph written to" in result.output
        assert json.loads(target.read_text())[0]["data"]["id"] == "app"

    @patch("chronograph.cli.commands.graph.to_compound_graph")
    def test_edits_reach_the_transformer(self, mock_transform, app_edges, write_edges):
        mock_transform.side_effect = RuntimeError("stop")

        CliRunner().invoke(main, ["graph", write_edges(app_edges), "-s", "test=excluded"])

        nodes = mock_transform.call_args.args[1]
        assert nodes["test"].state == "excluded"

    def test_missing_files(self, app_edges, write_edges, tmp_path):
        runner = CliRunner()

        result = runner.invoke(main, ["graph", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

        result = runner.invoke(main, ["graph", write_edges(app_edges), "--diff-base", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Edges file not found" in result.output

    def test_bracketed_names_in_table(self, write_edges):
        edges = [make_edge("src/pages/[id].tsx", "src/lib/api.ts", "[/dynamic]")]
        result = CliRunner().invoke(main, ["graph", write_edges(edges), "-s", "src/pages=expanded"])

        assert result.exit_code == 0
        assert "src/pages/[id].tsx" in result.output
        assert "[/dynamic]" in result.output

    def test_bad_config_file(self, app_edges, write_edges, tmp_path, monkeypatch):
        config = tmp_path / "config.yaml"
        config.write_text("42\n")
        monkeypatch.setenv("CHRONOGRAPH_CONFIG", str(config))

        result = CliRunner().invoke(main, ["graph", write_edges(app_edges)])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
