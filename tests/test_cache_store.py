"""Tests for the on-disk key/value store."""

from __future__ import annotations

from pilotlog.cache_store import FileStore


class TestFileStore:
    def test_missing_key_returns_none(self, tmp_path):
        assert FileStore(tmp_path).get_item("absent") is None

    def test_set_then_get(self, tmp_path):
        store = FileStore(tmp_path / "nested" / "cache")
        store.set_item("k", '{"a": 1}')
        assert store.get_item("k") == '{"a": 1}'

    def test_overwrite_replaces_whole_value(self, tmp_path):
        store = FileStore(tmp_path)
        store.set_item("k", "a much longer first value")
        store.set_item("k", "short")
        assert store.get_item("k") == "short"

    def test_no_temp_files_left_behind(self, tmp_path):
        store = FileStore(tmp_path)
        store.set_item("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_remove(self, tmp_path):
        store = FileStore(tmp_path)
        store.set_item("k", "v")
        store.remove_item("k")
        assert store.get_item("k") is None

    def test_remove_missing_is_noop(self, tmp_path):
        FileStore(tmp_path).remove_item("absent")

    def test_keys_cannot_escape_directory(self, tmp_path):
        root = tmp_path / "cache"
        store = FileStore(root)
        store.set_item("../../etc/passwd", "x")
        files = list(root.iterdir())
        assert len(files) == 1
        assert files[0].parent == root

    def test_directory_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PILOTLOG_CACHE_DIR", str(tmp_path / "env-cache"))
        assert FileStore().directory == tmp_path / "env-cache"
