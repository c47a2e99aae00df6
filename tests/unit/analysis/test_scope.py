"""Unit tests for view-root scoping and folder rollups."""

import pytest

from chronograph.analysis.scope import (
    filter_for_view_root, folder_at_level, is_path_within_folder, relative_to_view_root,
)
from conftest import make_edge


class TestPathHelpers:
    @pytest.mark.parametrize("path, folder, expected", [
        ("lib/ui/a.dart", "lib", True),
        ("lib/ui/a.dart", "lib/ui", True),
        ("lib/ui", "lib/ui", True),
        ("lib/uix/a.dart", "lib/ui", False),
        ("test/a.dart", "lib", False),
        ("anything.dart", "/", True),
        ("\\lib\\ui\\a.dart", "/lib/ui/", True),
    ])
    def test_is_path_within_folder(self, path, folder, expected):
        assert is_path_within_folder(path, folder) is expected

    @pytest.mark.parametrize("path, view_root, expected", [
        ("lib/ui/a.dart", "/", "lib/ui/a.dart"),
        ("lib/ui/a.dart", "lib", "/ui/a.dart"),
        ("lib", "lib", "/"),
        ("test/a.dart", "lib", "test/a.dart"),
    ])
    def test_relative_to_view_root(self, path, view_root, expected):
        assert relative_to_view_root(path, view_root) == expected


class TestFolderAtLevel:
    @pytest.mark.parametrize("path, level, expected", [
        ("lib/ui/home/view.dart", 0, "/"),
        ("lib/ui/home/view.dart", 1, "lib"),
        ("lib/ui/home/view.dart", 2, "lib/ui"),
        ("lib/ui/home/view.dart", 9, "lib/ui/home"),
        ("main.dart", 1, "/"),
    ])
    def test_from_project_root(self, path, level, expected):
        assert folder_at_level(path, level) == expected

    @pytest.mark.parametrize("path, level, expected", [
        ("lib/ui/home/view.dart", 1, "lib/ui"),
        ("lib/ui/home/view.dart", 2, "lib/ui/home"),
        ("lib/main.dart", 1, "lib"),
        ("lib/ui/home/view.dart", 0, "lib"),
        ("lib", 1, "lib"),
    ])
    def test_from_view_root(self, path, level, expected):
        assert folder_at_level(path, level, view_root="lib") == expected


class TestFilterForViewRoot:
    def test_root_shows_everything(self, app_edges):
        result = filter_for_view_root(app_edges, "/")

        assert result.strategy == "root-show-all"
        assert result.filtered == app_edges
        assert result.stats.total == len(app_edges)

    def test_internal_only(self, app_edges):
        result = filter_for_view_root(app_edges, "lib/data")

        assert result.strategy == "internal-only"
        assert [(e.source_file, e.target_file) for e in result.filtered] == [
            ("lib/data/repositories/repo.dart", "lib/data/services/api.dart"),
        ]
        assert result.stats.internal == 1
        assert result.stats.incoming == 3
        assert result.stats.outgoing == 0

    def test_folder_without_internal_edges(self, app_edges):
        result = filter_for_view_root(app_edges, "test")

        assert result.strategy == "no-internal-dependencies"
        assert result.filtered == []
        assert result.stats.outgoing == 1

    def test_unknown_folder(self):
        result = filter_for_view_root([make_edge("a/x", "a/y")], "b")
        assert result.strategy == "no-internal-dependencies"
        assert result.stats.model_dump() == {"total": 1, "internal": 0, "incoming": 0, "outgoing": 0}
