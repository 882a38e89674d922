"""タグストア（ファサード）.

Trie・タグレジストリ・関連グラフをまとめ、注入されたキー・バリューストレージとの
読み書き（起動時に1回読み込み、変更操作のたびに全体を書き出し）を担う。
UI 層から呼ばれるのはこのクラスの公開メソッドだけで、戻り値は常にコピーか
プレーンな値（内部構造への参照は返さない）。

失敗時の方針:
    - 保存データが無い/壊れている: ログに残して空の状態で起動（load_result に記録）
    - 書き込み失敗: ログに残して続行（呼び出し側へは伝播させない）
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterable

from loguru import logger

from bookmark_tag_store.core.exceptions import SnapshotDecodeError
from bookmark_tag_store.core.graph import RelationshipGraph
from bookmark_tag_store.core.normalize import normalize_key
from bookmark_tag_store.core.registry import Tag, TagRegistry, now_ms
from bookmark_tag_store.core.snapshot import (
    STORAGE_KEY,
    LoadResult,
    apply_snapshot,
    decode_snapshot,
    encode_snapshot,
)
from bookmark_tag_store.storage.base_storage import BaseBlobStorage

# ストレージ実装が投げ得る例外（読み書きとも「ベストエフォート」で扱う）
STORAGE_ERRORS = (OSError, sqlite3.Error)


class TagStore:
    """タグ付け・サジェスト・永続化のファサード.

    Args:
        storage: 永続化ストレージ（get/set を持つもの）
        storage_key: 保存キー（既定 "TagStore|v1"）
        clock: 現在時刻（epoch ms）を返す関数（テスト用に差し替え可能）
        indent: 保存する JSON のインデント（None で1行）
    """

    def __init__(
        self,
        storage: BaseBlobStorage,
        *,
        storage_key: str = STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
        indent: int | None = 2,
    ) -> None:
        self._storage = storage
        self._storage_key = storage_key
        self._indent = indent
        self._registry = TagRegistry(clock=clock)
        self._graph = RelationshipGraph()
        self.load_result = self._load()

    # ------------------------------------------------------------------
    # タグ付け
    # ------------------------------------------------------------------
    def add_tag(self, name: str, content_id: str) -> None:
        """タグを登録し、content_id を関連付ける（保存はしない）.

        Args:
            name: 表示名（trim 済み・非空の前提）
            content_id: コンテンツID（空文字なら関連付けなし）
        """
        self._registry.add_tag(name, content_id)

    def add_tags(self, names: Iterable[str], content_id: str, source: str | None = None) -> None:
        """複数タグをまとめて登録し、最後に1回だけ保存する.

        Args:
            names: 表示名のリスト
            content_id: コンテンツID
            source: 呼び出し元のラベル（ログ出力のみ）
        """
        count = 0
        for name in names:
            self._registry.add_tag(name, content_id)
            count += 1

        logger.info(f"Tagged content {content_id!r} with {count} tags (source={source})")
        self.export_json()

    def suggest(self, prefix: str) -> list[str]:
        """prefix に前方一致するタグの表示名を返す（順序は Trie の走査順）."""
        return self._registry.suggest(prefix)

    def get_all_tags(self) -> list[Tag]:
        """全タグのコピーを返す."""
        return [tag.copy() for tag in self._registry]

    def get_tag(self, name: str) -> Tag | None:
        """大文字小文字を問わずタグを1件返す（コピー）."""
        tag = self._registry.get(name)
        return None if tag is None else tag.copy()

    # ------------------------------------------------------------------
    # 関連グラフ
    # ------------------------------------------------------------------
    def add_relationship(self, tag1: str, tag2: str) -> None:
        """2つのタグキーを相互に関連付けて保存する."""
        self._graph.add_relationship(tag1, tag2)
        self.export_json()

    def get_related(self, tag: str) -> list[str]:
        """関連付けられたキーをソートして返す."""
        neighbors = self._graph.neighbors(tag)
        if not neighbors:
            neighbors = self._graph.neighbors(normalize_key(tag))
        return sorted(neighbors)

    # ------------------------------------------------------------------
    # 永続化
    # ------------------------------------------------------------------
    def export_json(self, dry_run: bool = False) -> str:
        """現在の状態を JSON 文字列にして保存する.

        Args:
            dry_run: True なら文字列を作るだけで書き込まない

        Returns:
            シリアライズした JSON 文字列
        """
        value = encode_snapshot(self._registry, self._graph, indent=self._indent)
        if dry_run:
            logger.debug(f"[export_json] dry run: {len(value)} chars")
            return value

        try:
            self._storage.set(self._storage_key, value)
        except STORAGE_ERRORS as e:
            logger.warning(f"Failed to save tag store ({self._storage_key}): {e}")
            return value

        logger.debug(f"[export_json] saved {len(self._registry)} tags, {len(value)} chars")
        return value

    def import_json(self, json_string: str | None) -> LoadResult:
        """JSON 文字列から状態を復元する.

        デコードに成功した場合のみ既存の状態をクリアして置き換える。
        Trie は保存された構造ではなく、タグの表示名から再構築する。

        Returns:
            LOADED / EMPTY / CORRUPT のいずれか
        """
        if not json_string:
            logger.info("No stored tag snapshot, starting empty")
            return LoadResult.empty()

        try:
            snapshot = decode_snapshot(json_string)
        except SnapshotDecodeError as e:
            logger.warning(f"Ignoring corrupt tag snapshot: {e}")
            return LoadResult.corrupt(str(e))

        self._registry.clear()
        self._graph.clear()
        apply_snapshot(snapshot, self._registry, self._graph)

        logger.info(f"Loaded {len(self._registry)} tags, {len(self._graph)} graph nodes")

        # 書き込みを重複させずに往復できることだけ確認する
        self.export_json(dry_run=True)
        return LoadResult.loaded(snapshot)

    def _load(self) -> LoadResult:
        try:
            value = self._storage.get(self._storage_key)
        except STORAGE_ERRORS as e:
            logger.warning(f"Failed to read tag store ({self._storage_key}): {e}")
            return LoadResult.corrupt(f"storage read failed: {e}")
        return self.import_json(value)
