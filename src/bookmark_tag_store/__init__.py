"""ブックマーク用タグストア.

タグ名 → コンテンツID集合のインメモリDBと、前方一致サジェスト用の Trie、
キー・バリューストレージへの JSON スナップショット保存を提供する。
"""

from bookmark_tag_store.core.normalize import parse_tag_list, validate_string
from bookmark_tag_store.core.registry import Tag
from bookmark_tag_store.core.snapshot import STORAGE_KEY, LoadResult, LoadStatus
from bookmark_tag_store.store import TagStore

__version__ = "0.1.0"

__all__ = [
    "STORAGE_KEY",
    "LoadResult",
    "LoadStatus",
    "Tag",
    "TagStore",
    "parse_tag_list",
    "validate_string",
]
