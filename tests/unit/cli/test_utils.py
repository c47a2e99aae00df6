"""Unit tests for CLI utilities."""

import json
from pathlib import Path

import click
import pytest

from chronograph.cli.utils import load_edges, parse_state_edit, read_edges
from chronograph.core.errors import InputFormatError
from chronograph.core.types import InclusionState


class TestReadEdges:
    def test_bare_list(self, app_edges, write_edges):
        path = write_edges(app_edges)
        assert read_edges(Path(path)) == app_edges

    def test_snapshot_shapes(self, app_edges, write_edges, tmp_path):
        cached = write_edges(app_edges, name="cached.json", shape="snapshot")
        assert read_edges(Path(cached)) == app_edges

        flat = tmp_path / "flat.json"
        flat.write_text(json.dumps({"dependencies": [e.model_dump() for e in app_edges]}))
        assert read_edges(flat) == app_edges

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(InputFormatError):
            read_edges(path)

    def test_unexpected_shape(self, tmp_path):
        path = tmp_path / "number.json"
        path.write_text("42")
        with pytest.raises(InputFormatError, match="expected a list"):
            read_edges(path)

    def test_invalid_edge(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps([{"source_file": "a"}]))
        with pytest.raises(InputFormatError, match="invalid edge data"):
            read_edges(path)


class TestLoadEdges:
    def test_missing_file(self, tmp_path, capsys):
        assert load_edges(str(tmp_path / "missing.json")) is None
        captured = capsys.readouterr()
        assert "Edges file not found" in captured.err

    def test_broken_file(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("[")
        assert load_edges(str(path)) is None
        assert "Failed to load edges" in capsys.readouterr().err


class TestParseStateEdit:
    def test_valid(self):
        assert parse_state_edit("lib/ui=collapsed") == ("lib/ui", InclusionState.COLLAPSED)
        assert parse_state_edit("lib=checked") == ("lib", InclusionState.EXPANDED)

    def test_last_equals_sign_separates(self):
        assert parse_state_edit("lib/a=b.dart=excluded") == ("lib/a=b.dart", InclusionState.EXCLUDED)

    @pytest.mark.parametrize("value", ["lib", "=expanded", "lib=sideways"])
    def test_invalid(self, value):
        with pytest.raises(click.BadParameter):
            parse_state_edit(value)
