"""
Tests for persistence — generator storage in the rc file.
"""

import json
from pathlib import Path

import pytest

from scaffolder.core.persistence.storage import Storage


class TestStorage:
    def test_set_is_durable(self, tmp_path: Path):
        path = tmp_path / ".scaffold-rc.json"
        Storage("app", path).set("style", "sass")

        assert Storage("app", path).get("style") == "sass"
        assert json.loads(path.read_text()) == {"app": {"style": "sass"}}

    def test_missing_key_returns_default(self, tmp_path: Path):
        store = Storage("app", tmp_path / "rc.json")
        assert store.get("nope") is None
        assert store.get("nope", 3) == 3

    def test_set_mapping(self, tmp_path: Path):
        store = Storage("app", tmp_path / "rc.json")
        store.set({"a": 1, "b": 2})
        assert store.get_all() == {"a": 1, "b": 2}

    def test_sections_are_preserved(self, tmp_path: Path):
        path = tmp_path / "rc.json"
        Storage("first", path).set("k", 1)
        Storage("second", path).set("k", 2)

        data = json.loads(path.read_text())
        assert data == {"first": {"k": 1}, "second": {"k": 2}}

    def test_defaults_only_fill_missing(self, tmp_path: Path):
        store = Storage("app", tmp_path / "rc.json")
        store.set("style", "less")
        merged = store.defaults({"style": "sass", "lint": True})
        assert merged == {"style": "less", "lint": True}

    def test_delete(self, tmp_path: Path):
        path = tmp_path / "rc.json"
        store = Storage("app", path)
        store.set("a", 1)
        store.delete("a")
        assert "a" not in store
        assert Storage("app", path).get_all() == {}

    def test_corrupt_file_starts_fresh(self, tmp_path: Path):
        path = tmp_path / "rc.json"
        path.write_text("not json {{{")
        assert Storage("app", path).get_all() == {}

    def test_reads_lazily(self, tmp_path: Path):
        path = tmp_path / "rc.json"
        store = Storage("app", path)
        path.write_text(json.dumps({"app": {"late": True}}))
        assert store.get("late") is True

    def test_save_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "rc.json"
        Storage("app", path).set("a", 1)
        assert path.is_file()

    def test_no_temp_files_left(self, tmp_path: Path):
        store = Storage("app", tmp_path / "rc.json")
        store.set("a", 1)
        store.set("b", 2)
        assert list(tmp_path.glob(".scaffold-rc_*.tmp")) == []

    def test_unserializable_value_leaves_store_usable(self, tmp_path: Path):
        path = tmp_path / "rc.json"
        store = Storage("app", path)
        store.set("kept", 1)

        with pytest.raises(TypeError):
            store.set("bad", object())
        assert "bad" not in store

        store.set("good", 2)
        store.delete("kept")
        assert store.get_all() == {"good": 2}
        assert json.loads(path.read_text()) == {"app": {"good": 2}}
