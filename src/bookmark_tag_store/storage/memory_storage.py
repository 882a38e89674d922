"""In-memory blob storage (tests and embedding)."""

from .base_storage import BaseBlobStorage


class MemoryBlobStorage(BaseBlobStorage):
    """Dict-backed storage.

    Args:
        initial: Optional initial key/value pairs (copied)
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes += 1
