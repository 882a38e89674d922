"""タグレジストリ（正規化キー → Tag）.

- キーは表示名の小文字化（normalize_key）
- 表示名は最初に登録された表記を保持し、以後の別表記で上書きしない
- 新規キーは Trie にも挿入する（Trie 側で小文字化される）
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace

from loguru import logger

from .normalize import normalize_key
from .trie import Trie


def now_ms() -> int:
    """現在時刻（Unix epoch ミリ秒）."""
    return int(time.time() * 1000)


@dataclass
class Tag:
    """1つのタグ.

    Attributes:
        id: 正規化キー（表示名の小文字）
        name: 最初に登録された表示名
        created_at: 作成時刻（epoch ms）
        last_updated_at: 最後にコンテンツIDが関連付けられた時刻（epoch ms）
        content_ids: 関連付けられたコンテンツIDの集合
    """

    id: str
    name: str
    created_at: int
    last_updated_at: int
    content_ids: set[str] = field(default_factory=set)

    def copy(self) -> Tag:
        return replace(self, content_ids=set(self.content_ids))


class TagRegistry:
    """タグ本体・表示名ルックアップ・Trie をまとめて管理する."""

    def __init__(self, trie: Trie | None = None, clock: Callable[[], int] = now_ms) -> None:
        self.trie = trie if trie is not None else Trie()
        self._clock = clock
        self._tags: dict[str, Tag] = {}
        self._names: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_key(name) in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags.values())

    @property
    def names(self) -> dict[str, str]:
        """正規化キー → 表示名（コピー）."""
        return dict(self._names)

    def add_tag(self, name: str, content_id: str) -> Tag:
        """タグを登録（または更新）する.

        Args:
            name: 表示名（trim 済み・非空の前提）
            content_id: 関連付けるコンテンツID（空文字なら関連付けは行わない）

        Returns:
            登録後の Tag（内部オブジェクト。外部へ返すときは copy() すること）
        """
        key = normalize_key(name)
        tag = self._tags.get(key)

        if tag is None:
            now = self._clock()
            tag = Tag(id=key, name=name, created_at=now, last_updated_at=now)
            self._tags[key] = tag
            self.trie.insert(name)
            self._names[key] = name
            logger.debug(f"New tag: {key!r} (name={name!r})")

        if content_id:
            tag.content_ids.add(content_id)
            tag.last_updated_at = self._clock()

        return tag

    def restore(self, tag: Tag) -> None:
        """永続化データから Tag をそのまま復元する（タイムスタンプは更新しない）."""
        self._tags[tag.id] = tag
        self._names[tag.id] = tag.name
        self.trie.insert(tag.name)

    def get(self, name: str) -> Tag | None:
        return self._tags.get(normalize_key(name))

    def resolve_name(self, key: str) -> str | None:
        return self._names.get(key)

    def suggest(self, prefix: str) -> list[str]:
        """prefix に一致するタグの表示名を返す（表示名が引けないキーは除外）."""
        names = (self.resolve_name(key) for key in self.trie.suggest(prefix))
        return [name for name in names if name is not None]

    def clear(self) -> None:
        self._tags.clear()
        self._names.clear()
        self.trie.clear()
