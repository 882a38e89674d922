"""タグ一覧のレポート出力.

タグごとのコンテンツ数を Polars DataFrame にまとめ、CSV として出力します。
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import polars as pl
from loguru import logger

from bookmark_tag_store.core.registry import Tag

REPORT_SCHEMA = {
    "id": pl.Utf8,
    "name": pl.Utf8,
    "created_at": pl.Int64,
    "last_updated_at": pl.Int64,
    "content_count": pl.Int64,
}


def tags_to_frame(tags: Iterable[Tag]) -> pl.DataFrame:
    """タグ一覧を DataFrame に変換する（content_count 降順 → id 昇順）."""
    rows = [
        {
            "id": tag.id,
            "name": tag.name,
            "created_at": tag.created_at,
            "last_updated_at": tag.last_updated_at,
            "content_count": len(tag.content_ids),
        }
        for tag in tags
    ]
    df = pl.DataFrame(rows, schema=REPORT_SCHEMA)
    return df.sort(["content_count", "id"], descending=[True, False])


def export_tag_report(tags: Iterable[Tag], output_path: Path | str) -> Path | None:
    """タグ一覧を CSV に出力する.

    Args:
        tags: 出力対象のタグ
        output_path: 出力先 CSV パス

    Returns:
        出力したパス（タグが無ければ出力せず None）
    """
    df = tags_to_frame(tags)
    if df.is_empty():
        logger.info("No tags to report")
        return None

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(output_path)
    logger.info(f"Wrote tag report ({len(df)} rows) to {output_path}")
    return output_path
