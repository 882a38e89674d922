"""タグストアのコア処理群.

- Trie（前方一致サジェスト）
- タグレジストリ（正規化キー → Tag）
- 関連グラフ（無向）
- スナップショット（JSON）のエンコード/デコード
"""

from .graph import RelationshipGraph
from .normalize import normalize_key, parse_tag_list, validate_string
from .registry import Tag, TagRegistry
from .snapshot import STORAGE_KEY, LoadResult, LoadStatus, decode_snapshot, encode_snapshot
from .trie import Trie

__all__ = [
    "STORAGE_KEY",
    "LoadResult",
    "LoadStatus",
    "RelationshipGraph",
    "Tag",
    "TagRegistry",
    "Trie",
    "decode_snapshot",
    "encode_snapshot",
    "normalize_key",
    "parse_tag_list",
    "validate_string",
]
