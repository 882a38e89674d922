"""Unit tests for YAML config loading."""

from pathlib import Path

import pytest

from bookmark_tag_store.config import DEFAULT_DB_PATH, StoreConfig, load_config
from bookmark_tag_store.core.snapshot import STORAGE_KEY


class TestLoadConfig:
    def test_none_returns_defaults(self) -> None:
        config = load_config(None)

        assert config == StoreConfig()
        assert config.db_path == DEFAULT_DB_PATH
        assert config.storage_key == STORAGE_KEY

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "tag_store.yml"
        path.write_text(
            "db_path: data/tags.sqlite\nstorage_key: custom\nindent: null\nlog_level: debug\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.db_path == Path("data/tags.sqlite")
        assert config.storage_key == "custom"
        assert config.indent is None
        assert config.log_level == "DEBUG"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == StoreConfig()

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("db_path: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "unknown.yml"
        path.write_text("colour: blue\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unknown config keys"):
            load_config(path)

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        path = tmp_path / "level.yml"
        path.write_text("log_level: LOUD\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid log_level"):
            load_config(path)

    def test_invalid_indent(self, tmp_path: Path) -> None:
        path = tmp_path / "indent.yml"
        path.write_text("indent: wide\n", encoding="utf-8")

        with pytest.raises(ValueError, match="indent must be an integer"):
            load_config(path)


class TestOverride:
    def test_none_values_ignored(self) -> None:
        config = StoreConfig().override(db_path=Path("x.sqlite"), log_level=None)

        assert config.db_path == Path("x.sqlite")
        assert config.log_level == "INFO"
