"""JsonFileBlobStorage for keeping blobs in a single JSON file.

The file holds one JSON object mapping storage keys to string values.
"""

import json
from pathlib import Path

from loguru import logger

from .base_storage import BaseBlobStorage


class JsonFileBlobStorage(BaseBlobStorage):
    """Storage backed by a JSON object file.

    Args:
        file_path: Path to the JSON file (created on first write)
    """

    def __init__(self, file_path: Path | str) -> None:
        self.file_path = Path(file_path)

    def _read_all(self) -> dict[str, str]:
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in storage file: {self.file_path}"
            raise OSError(msg) from e

        if not isinstance(data, dict):
            msg = f"Storage file must contain a JSON object, got {type(data)}"
            raise OSError(msg)

        return data

    def get(self, key: str) -> str | None:
        """Return the stored value or None.

        Raises:
            OSError: The file exists but cannot be read as a JSON object
        """
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Write the value, keeping other keys in the file."""
        data = self._read_all()
        data[key] = value

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        tmp_path.replace(self.file_path)

        logger.debug(f"Wrote {len(value)} chars to {self.file_path} [{key}]")
