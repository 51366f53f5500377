"""
Tests for configuration — root discovery and scaffold.yml.
"""

from pathlib import Path

import pytest

from scaffolder.core.config.loader import (
    MARKER_FILE,
    ConfigError,
    find_project_root,
    load_project_config,
    lookup,
)


class TestFindProjectRoot:
    def test_finds_marker_upwards(self, tmp_path: Path):
        (tmp_path / MARKER_FILE).write_text("{}")
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        assert find_project_root(deep) == tmp_path.resolve()

    def test_start_dir_when_no_marker(self, tmp_path: Path):
        start = tmp_path / "plain"
        start.mkdir()
        assert find_project_root(start) == start.resolve()

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_project_root() == tmp_path.resolve()


class TestLoadProjectConfig:
    def test_missing_is_empty(self, tmp_path: Path):
        assert load_project_config(tmp_path) == {}

    def test_empty_file_is_empty(self, tmp_path: Path):
        (tmp_path / "scaffold.yml").write_text("")
        assert load_project_config(tmp_path) == {}

    def test_reads_mapping(self, tmp_path: Path):
        (tmp_path / "scaffold.yml").write_text("style: sass\nhooks:\n  test: mocha\n")
        assert load_project_config(tmp_path) == {"style": "sass", "hooks": {"test": "mocha"}}

    def test_invalid_yaml(self, tmp_path: Path):
        (tmp_path / "scaffold.yml").write_text("key: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_project_config(tmp_path)

    def test_non_mapping(self, tmp_path: Path):
        (tmp_path / "scaffold.yml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_project_config(tmp_path)


class TestLookup:
    def test_top_level(self):
        assert lookup({"a": 1}, "a") == 1

    def test_dotted(self):
        assert lookup({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    def test_exact_key_wins_over_dotted(self):
        assert lookup({"a.b": "flat", "a": {"b": "nested"}}, "a.b") == "flat"

    def test_missing(self):
        assert lookup({"a": {"b": 1}}, "a.c") is None
        assert lookup({"a": 1}, "a.b") is None
