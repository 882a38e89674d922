"""タグストア用の永続化ストレージ群."""

from .base_storage import BaseBlobStorage
from .json_file_storage import JsonFileBlobStorage
from .memory_storage import MemoryBlobStorage
from .sqlite_storage import SqliteBlobStorage

__all__ = [
    "BaseBlobStorage",
    "JsonFileBlobStorage",
    "MemoryBlobStorage",
    "SqliteBlobStorage",
]
