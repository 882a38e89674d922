"""Unit tests for blob storage backends."""

import sqlite3
from pathlib import Path

import pytest

from bookmark_tag_store.storage import (
    BaseBlobStorage,
    JsonFileBlobStorage,
    MemoryBlobStorage,
    SqliteBlobStorage,
)


class TestMemoryBlobStorage:
    def test_get_set(self) -> None:
        storage = MemoryBlobStorage()

        assert storage.get("k") is None
        storage.set("k", "v")
        assert storage.get("k") == "v"
        assert storage.writes == 1

    def test_initial_is_copied(self) -> None:
        initial = {"k": "v"}
        storage = MemoryBlobStorage(initial)
        storage.set("k", "w")

        assert initial == {"k": "v"}

    def test_is_base_storage(self) -> None:
        assert isinstance(MemoryBlobStorage(), BaseBlobStorage)


class TestJsonFileBlobStorage:
    def test_missing_file_reads_none(self, tmp_path: Path) -> None:
        storage = JsonFileBlobStorage(tmp_path / "store.json")

        assert storage.get("TagStore|v1") is None

    def test_set_keeps_other_keys(self, tmp_path: Path) -> None:
        """既存の別キーを消さずに書き込むこと."""
        path = tmp_path / "nested" / "store.json"
        storage = JsonFileBlobStorage(path)
        storage.set("a", "1")
        storage.set("b", "2")
        storage.set("a", "3")

        assert path.exists()
        assert storage.get("a") == "3"
        assert storage.get("b") == "2"
        assert not path.with_suffix(".json.tmp").exists()

    def test_invalid_json_raises_oserror(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{invalid json}", encoding="utf-8")

        with pytest.raises(OSError, match="Invalid JSON"):
            JsonFileBlobStorage(path).get("a")

    def test_non_object_raises_oserror(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(OSError, match="must contain a JSON object"):
            JsonFileBlobStorage(path).get("a")


class TestSqliteBlobStorage:
    def test_creates_schema(self, tmp_path: Path) -> None:
        db_path = tmp_path / "sub" / "store.sqlite"
        SqliteBlobStorage(db_path)

        conn = sqlite3.connect(db_path)
        tables = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()]
        conn.close()

        assert "BLOB_STORE" in tables

    def test_upsert(self, tmp_path: Path) -> None:
        storage = SqliteBlobStorage(tmp_path / "store.sqlite")

        assert storage.get("k") is None
        storage.set("k", "v1")
        storage.set("k", "v2")
        storage.set("other", "x")

        assert storage.get("k") == "v2"
        assert storage.get("other") == "x"

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        db_path = tmp_path / "store.sqlite"
        SqliteBlobStorage(db_path).set("TagStore|v1", "{}")

        assert SqliteBlobStorage(db_path).get("TagStore|v1") == "{}"
