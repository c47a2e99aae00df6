"""
Unit tests for path normalization, system path filtering and path statistics.
"""

import pytest

from chronograph.tree.paths import analyze_paths, collect_paths, is_system_path, normalize_path
from conftest import make_edge


class TestNormalizePath:
    @pytest.mark.parametrize("raw, expected", [
        ("lib\\src\\main.dart", "lib/src/main.dart"),
        ("lib//src///main.dart", "lib/src/main.dart"),
        ("/lib/main.dart", "lib/main.dart"),
        ("lib/assets/", "lib/assets"),
        ("tmp/chronograph/cache-1/compass/app/lib/main.dart", "lib/main.dart"),
        ("/tmp/chronograph/cache-1/compass/app/lib/main.dart", "lib/main.dart"),
        ("/tmp/chronograph/cache-1/lib/main.dart", "lib/main.dart"),
        ("C:\\tmp\\chronograph\\cache-1\\lib\\main.dart", "lib/main.dart"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected

    def test_only_first_cache_pattern_applies(self):
        # The longer app/ pattern wins; the remainder is not stripped again
        raw = "tmp/chronograph/c/p/app/tmp/chronograph/x/lib/a.dart"
        assert normalize_path(raw) == "tmp/chronograph/x/lib/a.dart"

    def test_root_slash_becomes_empty(self):
        assert normalize_path("/") == ""


class TestSystemPaths:
    @pytest.mark.parametrize("path", [
        "/proc/1/status",
        "sys/kernel/x",
        "/var/log/syslog",
        "repo/.git/HEAD",
        "web/node_modules/a/b/c/index.js",
        "C:/Windows/System32/drivers.dll",
        "C:/Users/me/AppData/Local/x.txt",
        "android/build/intermediates/classes/A.class",
        "core/target/debug/build/out.rs",
    ])
    def test_system_paths_are_dropped(self, path):
        assert is_system_path(path)

    @pytest.mark.parametrize("path", [
        "lib/sys/x.dart",
        "lib/main.dart",
        "web/node_modules/a/index.js",
        "build/output.txt",
        "tmp/notes.md",
    ])
    def test_project_paths_are_kept(self, path):
        assert not is_system_path(path)

    def test_extra_patterns(self):
        assert is_system_path("lib/generated/a.g.dart", extra_patterns=[r"\.g\.dart$"])
        assert not is_system_path("lib/a.dart", extra_patterns=[r"\.g\.dart$"])


class TestCollectPaths:
    def test_dedupes_in_first_seen_order(self):
        edges = [
            make_edge("lib/b.dart", "lib/a.dart"),
            make_edge("lib/a.dart", "lib/c.dart"),
            make_edge("lib\\b.dart", "/lib/c.dart"),
        ]
        assert collect_paths(edges).paths == ["lib/b.dart", "lib/a.dart", "lib/c.dart"]

    def test_drops_system_paths(self):
        edges = [
            make_edge("/proc/cpuinfo", "lib/a.dart"),
            make_edge("lib/a.dart", "repo/.git/config"),
        ]
        assert collect_paths(edges).paths == ["lib/a.dart"]

    def test_records_directories(self):
        edges = [make_edge("lib/a.dart", "lib/assets/")]
        result = collect_paths(edges)
        assert result.directories == {"lib/assets"}
        assert "lib/assets" in result.paths

    def test_skips_empty_paths(self):
        edges = [make_edge("", "lib/a.dart"), make_edge("/", "lib/a.dart")]
        assert collect_paths(edges).paths == ["lib/a.dart"]


class TestAnalyzePaths:
    def test_empty(self):
        stats = analyze_paths([])
        assert stats.total == 0
        assert stats.top_level == []
        assert stats.coverage("lib") == 0.0

    def test_statistics(self):
        paths = ["lib/a.dart", "lib/ui/b.dart", "lib/ui/c.dart", "test/a_test.dart"]
        stats = analyze_paths(paths)

        assert stats.top_level == ["lib", "test"]
        assert stats.prefix_counts["lib"] == 3
        assert stats.prefix_counts["lib/ui"] == 2
        assert stats.prefix_counts["lib/ui/b.dart"] == 1
        assert stats.coverage("lib") == 0.75
        assert stats.avg_depth == pytest.approx(10 / 4)

    def test_common_prefixes_longest_first(self):
        paths = ["lib/ui/a.dart", "lib/ui/b.dart", "lib/c.dart"]
        stats = analyze_paths(paths)
        # threshold is max(2, 10%) == 2
        assert stats.common_prefixes == ["lib/ui", "lib"]
