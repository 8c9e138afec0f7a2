"""Tests for the key-value storage backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from foamdesk.data.storage import FileStorage, MemoryStorage
from foamdesk.exceptions import StorageError


class TestMemoryStorage:
    def test_get_missing_is_none(self) -> None:
        assert MemoryStorage().get("spf_customers") is None

    def test_set_then_get(self) -> None:
        storage = MemoryStorage()
        storage.set("k", "[1, 2]")
        assert storage.get("k") == "[1, 2]"

    def test_last_write_wins(self) -> None:
        storage = MemoryStorage()
        storage.set("k", "a")
        storage.set("k", "b")
        assert storage.get("k") == "b"

    def test_delete_is_idempotent(self) -> None:
        storage = MemoryStorage({"k": "v"})
        storage.delete("k")
        storage.delete("k")
        assert storage.get("k") is None
        assert storage.keys() == []


class TestFileStorage:
    def test_round_trip(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "data")
        storage.set("spf_settings", '{"a": 1}')
        assert storage.get("spf_settings") == '{"a": 1}'
        assert (tmp_path / "data" / "spf_settings.json").exists()

    def test_creates_directory_on_first_write(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir"
        FileStorage(target).set("k", "v")
        assert target.is_dir()

    def test_missing_key_is_none(self, tmp_path: Path) -> None:
        assert FileStorage(tmp_path).get("nope") is None

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path)
        storage.set("k", "first")
        storage.set("k", "second")
        assert storage.get("k") == "second"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]

    def test_delete(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path)
        storage.set("k", "v")
        storage.delete("k")
        storage.delete("k")
        assert storage.get("k") is None

    def test_unreadable_key_raises_storage_error(self, tmp_path: Path) -> None:
        (tmp_path / "k.json").mkdir()
        with pytest.raises(StorageError):
            FileStorage(tmp_path).get("k")
