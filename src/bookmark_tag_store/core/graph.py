"""タグ間の関連グラフ（無向・隣接集合）.

タグ付けの流れからは自動で追加されず、add_relationship() の明示呼び出しでのみ増える。
キーはタグレジストリと独立しており、未登録のタグを指す辺もあり得る。
"""

from __future__ import annotations

from collections.abc import Iterator


class RelationshipGraph:
    """対称性を保つ無向グラフ."""

    def __init__(self) -> None:
        self._adjacency: dict[str, set[str]] = {}

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, key: object) -> bool:
        return key in self._adjacency

    def __iter__(self) -> Iterator[str]:
        return iter(self._adjacency)

    def add_node(self, key: str) -> None:
        self._adjacency.setdefault(key, set())

    def add_relationship(self, tag1: str, tag2: str) -> None:
        """tag1 と tag2 を相互に関連付ける（冪等）."""
        self._adjacency.setdefault(tag1, set()).add(tag2)
        self._adjacency.setdefault(tag2, set()).add(tag1)

    def neighbors(self, key: str) -> set[str]:
        """隣接キーの集合（コピー）。未知のキーは空集合."""
        return set(self._adjacency.get(key, ()))

    def to_dict(self) -> dict[str, dict[str, bool]]:
        """ネストした存在マップ形式 {key: {neighbor: true}} に変換する."""
        return {
            key: {neighbor: True for neighbor in sorted(neighbors)}
            for key, neighbors in self._adjacency.items()
        }

    def clear(self) -> None:
        self._adjacency.clear()
