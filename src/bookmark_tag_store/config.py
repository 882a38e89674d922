"""タグストアの設定（YAML）.

設定ファイル例（tag_store.yml）:
    db_path: data/tag_store.sqlite
    storage_key: "TagStore|v1"
    indent: 2
    log_level: INFO

ファイルに無い項目は既定値を使う。CLI 引数は設定ファイルより優先する。
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml
from loguru import logger

from bookmark_tag_store.core.snapshot import STORAGE_KEY

DEFAULT_DB_PATH = Path("tag_store.sqlite")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StoreConfig:
    db_path: Path = DEFAULT_DB_PATH
    storage_key: str = STORAGE_KEY
    indent: int | None = 2
    log_level: str = "INFO"

    def override(self, **values: object) -> StoreConfig:
        """None でない値だけを上書きした設定を返す."""
        changes = {k: v for k, v in values.items() if v is not None}
        return replace(self, **changes)


def load_config(config_path: Path | str | None) -> StoreConfig:
    """YAML 設定ファイルを読み込む.

    Args:
        config_path: 設定ファイルのパス（None なら既定値）

    Returns:
        設定オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAML の形が不正、または未知/不正な値が含まれている場合
    """
    if config_path is None:
        return StoreConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in config file: {config_path}"
        raise ValueError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data)}"
        raise ValueError(msg)

    known = {f.name for f in fields(StoreConfig)}
    unknown = set(data) - known
    if unknown:
        msg = f"Unknown config keys: {sorted(unknown)}. Valid keys: {sorted(known)}"
        raise ValueError(msg)

    values: dict[str, object] = {}
    if "db_path" in data:
        values["db_path"] = Path(str(data["db_path"]))
    if "storage_key" in data:
        if not isinstance(data["storage_key"], str) or not data["storage_key"]:
            raise ValueError("storage_key must be a non-empty string")
        values["storage_key"] = data["storage_key"]
    if "indent" in data:
        indent = data["indent"]
        if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)):
            raise ValueError(f"indent must be an integer or null, got {indent!r}")
        values["indent"] = indent
    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level {data['log_level']!r}. Valid: {LOG_LEVELS}")
        values["log_level"] = level

    logger.info(f"Loaded config from {config_path}")
    return replace(StoreConfig(), **values)
