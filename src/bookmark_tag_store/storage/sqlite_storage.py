"""SQLite 上のキー・バリューストレージ.

1テーブル（BLOB_STORE）に key → value を保存します。
接続は操作ごとに開閉する（単一プロセス・同期利用の前提）。
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from loguru import logger

from .base_storage import BaseBlobStorage

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS BLOB_STORE (
    key TEXT NOT NULL PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at DATETIME DEFAULT (CURRENT_TIMESTAMP)
);
"""

_UPSERT_SQL = """
INSERT INTO BLOB_STORE (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = CURRENT_TIMESTAMP
"""


def create_blob_database(db_path: Path | str) -> None:
    """ストレージ用DBファイルを作成する（既存ならスキーマ作成のみ）.

    Args:
        db_path: データベースファイルパス
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    except Exception as e:
        logger.error(f"Failed to create blob database: {e}")
        raise
    finally:
        conn.close()


class SqliteBlobStorage(BaseBlobStorage):
    """SQLite ファイルに値を保存するストレージ.

    Args:
        db_path: データベースファイルパス（無ければ作成する）
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        if not self.db_path.exists():
            logger.info(f"Creating blob database: {self.db_path}")
        create_blob_database(self.db_path)

    def get(self, key: str) -> str | None:
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute("SELECT value FROM BLOB_STORE WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(_UPSERT_SQL, (key, value))
            conn.commit()
        finally:
            conn.close()
        logger.debug(f"Stored {len(value)} chars under {key!r}")
