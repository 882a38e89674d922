"""永続化スナップショット（JSON）のエンコード/デコード.

保存形式（"TagStore|v1" キー配下に JSON 文字列として保存）:
    {
        "tags": {
            "<key>": {
                "id": "<key>",
                "name": "<表示名>",
                "createdAt": <epoch ms>,
                "lastUpdatedAt": <epoch ms>,
                "contentIds": ["<content id>", ...]   # 集合は配列（ソート済み）
            }
        },
        "normalizedTagMap": {"<key>": "<表示名>"},
        "relatedGraph": {"<key>": {"<neighbor>": true}},   # グラフはネストした存在マップ
        "trie": {"isEnd": false, "children": {"<char>": {...}}}
    }

注意:
    trie は確認用に書き出すだけで、読み込み時は使わない。
    Trie は tags の表示名から再構築する（壊れた/古い trie を持ち込まないため）。
    trie のネストはキー長の約2倍になるため、最長キーが TRIE_EXPORT_MAX_DEPTH を
    超える場合は "trie" 自体を書き出さない。
    tags の各エントリのキー（id）は読み込み時に name の小文字から導出し直す。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger

from .exceptions import SnapshotDecodeError
from .graph import RelationshipGraph
from .normalize import normalize_key
from .registry import Tag, TagRegistry

# 永続化キー（固定）
STORAGE_KEY = "TagStore|v1"

# trie を書き出す最長キー長（JSON のネスト深さ ≒ 2 × キー長）
TRIE_EXPORT_MAX_DEPTH = 200


class LoadStatus(str, Enum):
    """スナップショット読み込みの結果種別."""

    LOADED = "loaded"
    EMPTY = "empty"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class Snapshot:
    """デコード済みスナップショット."""

    tags: list[Tag] = field(default_factory=list)
    related: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class LoadResult:
    """読み込み結果（どの経路を通ったかをテストから確認できるようにする）."""

    status: LoadStatus
    snapshot: Snapshot | None = None
    reason: str | None = None

    @classmethod
    def loaded(cls, snapshot: Snapshot) -> LoadResult:
        return cls(status=LoadStatus.LOADED, snapshot=snapshot)

    @classmethod
    def empty(cls) -> LoadResult:
        return cls(status=LoadStatus.EMPTY)

    @classmethod
    def corrupt(cls, reason: str) -> LoadResult:
        return cls(status=LoadStatus.CORRUPT, reason=reason)


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    return {
        "id": tag.id,
        "name": tag.name,
        "createdAt": tag.created_at,
        "lastUpdatedAt": tag.last_updated_at,
        "contentIds": sorted(tag.content_ids),
    }


def encode_snapshot(
    registry: TagRegistry,
    graph: RelationshipGraph,
    indent: int | None = 2,
) -> str:
    """レジストリとグラフの状態を JSON 文字列にする."""
    data: dict[str, Any] = {
        "tags": {tag.id: tag_to_dict(tag) for tag in registry},
        "normalizedTagMap": registry.names,
        "relatedGraph": graph.to_dict(),
    }

    longest = max((len(tag.id) for tag in registry), default=0)
    if longest <= TRIE_EXPORT_MAX_DEPTH:
        data["trie"] = registry.trie.to_dict()
    else:
        logger.debug(f"Skipping trie export (longest key {longest} > {TRIE_EXPORT_MAX_DEPTH})")

    return json.dumps(data, indent=indent, ensure_ascii=False)


def _require_int(value: object, field_name: str) -> int:
    # bool は int のサブクラスなので明示的に弾く
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotDecodeError(f"expected number, got {type(value).__name__}", field=field_name)
    return int(value)


def _decode_tag(key: str, raw: object) -> Tag:
    if not isinstance(raw, dict):
        raise SnapshotDecodeError(f"tag entry {key!r} is not an object", field="tags")

    name = raw.get("name")
    if not isinstance(name, str):
        raise SnapshotDecodeError(f"tag entry {key!r} has no string name", field="tags")

    tag_id = normalize_key(name)
    if raw.get("id", tag_id) != tag_id:
        logger.warning(f"Tag entry {key!r} has id {raw.get('id')!r}; using {tag_id!r} derived from name")

    content_ids = raw.get("contentIds", [])
    if not isinstance(content_ids, list) or not all(isinstance(c, str) for c in content_ids):
        raise SnapshotDecodeError(f"tag entry {key!r} contentIds must be a list of strings", field="tags")

    created_at = _require_int(raw.get("createdAt", 0), "tags")
    last_updated_at = _require_int(raw.get("lastUpdatedAt", created_at), "tags")

    return Tag(
        id=tag_id,
        name=name,
        created_at=created_at,
        last_updated_at=last_updated_at,
        content_ids=set(content_ids),
    )


def decode_snapshot(json_string: str) -> Snapshot:
    """JSON 文字列をスナップショットに復元する.

    Raises:
        SnapshotDecodeError: JSON として不正、または必須フィールドの形が不正な場合
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"invalid JSON ({e.msg} at line {e.lineno})") from e
    except RecursionError as e:
        raise SnapshotDecodeError("JSON nesting too deep") from e

    if not isinstance(data, dict):
        raise SnapshotDecodeError(f"expected a JSON object, got {type(data).__name__}")

    raw_tags = data.get("tags")
    if not isinstance(raw_tags, dict):
        raise SnapshotDecodeError("missing or not an object", field="tags")

    raw_graph = data.get("relatedGraph", {})
    if not isinstance(raw_graph, dict):
        raise SnapshotDecodeError("not an object", field="relatedGraph")

    tags = [_decode_tag(key, raw) for key, raw in raw_tags.items()]

    related: dict[str, list[str]] = {}
    for key, neighbors in raw_graph.items():
        if not isinstance(neighbors, dict):
            raise SnapshotDecodeError(f"neighbors of {key!r} is not an object", field="relatedGraph")
        related[key] = [neighbor for neighbor, present in neighbors.items() if present]

    return Snapshot(tags=tags, related=related)


def apply_snapshot(snapshot: Snapshot, registry: TagRegistry, graph: RelationshipGraph) -> None:
    """スナップショットを（クリア済みの）レジストリとグラフへ反映する."""
    for tag in snapshot.tags:
        registry.restore(tag)

    for key, neighbors in snapshot.related.items():
        graph.add_node(key)
        for neighbor in neighbors:
            graph.add_relationship(key, neighbor)
