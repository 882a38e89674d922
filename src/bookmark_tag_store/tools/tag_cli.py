"""SQLite に保存したタグストアをコマンドラインから操作する。"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from bookmark_tag_store.config import LOG_LEVELS, StoreConfig, load_config
from bookmark_tag_store.core.normalize import parse_tag_list, validate_string
from bookmark_tag_store.report import export_tag_report
from bookmark_tag_store.storage.sqlite_storage import SqliteBlobStorage
from bookmark_tag_store.store import TagStore


def open_store(config: StoreConfig) -> TagStore:
    storage = SqliteBlobStorage(config.db_path)
    return TagStore(storage, storage_key=config.storage_key, indent=config.indent)


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def cmd_add(store: TagStore, args: argparse.Namespace) -> int:
    content_id = validate_string(args.content_id, key="contentID")
    if not content_id.success:
        print(content_id.error, file=sys.stderr)
        return 2

    tags = parse_tag_list(args.tags, key="tags")
    if not tags.success:
        print(tags.error, file=sys.stderr)
        return 2

    store.add_tags(tags.data or [], content_id.data or "", source="cli")
    print(f"Tagged {content_id.data}: {', '.join(tags.data or [])}")
    return 0


def cmd_suggest(store: TagStore, args: argparse.Namespace) -> int:
    for name in store.suggest(args.prefix):
        print(name)
    return 0


def cmd_relate(store: TagStore, args: argparse.Namespace) -> int:
    tag1 = validate_string(args.tag1, key="tag1")
    tag2 = validate_string(args.tag2, key="tag2")
    for result in (tag1, tag2):
        if not result.success:
            print(result.error, file=sys.stderr)
            return 2

    store.add_relationship(tag1.data or "", tag2.data or "")
    print(f"Related {tag1.data} <-> {tag2.data}")
    return 0


def cmd_list(store: TagStore, args: argparse.Namespace) -> int:
    tags = sorted(store.get_all_tags(), key=lambda t: t.id)
    for tag in tags:
        print(f"{tag.name}\t{len(tag.content_ids)}")
    return 0


def cmd_export(store: TagStore, args: argparse.Namespace) -> int:
    value = store.export_json(dry_run=True)
    if args.output is None:
        print(value)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(value, encoding="utf-8")
    logger.info(f"Exported tag snapshot to {args.output}")
    return 0


def cmd_report(store: TagStore, args: argparse.Namespace) -> int:
    path = export_tag_report(store.get_all_tags(), args.output)
    if path is None:
        print("No tags to report", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Tag content and query tag suggestions.")
    p.add_argument("--db", type=Path, default=None, help="SQLite storage path")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="loguru log level (default: config or INFO)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Tag a piece of content")
    add.add_argument("--content-id", required=True, help="Content identifier")
    add.add_argument("--tags", required=True, help='Comma separated tags, e.g. "Travel, Food"')
    add.set_defaults(func=cmd_add)

    suggest = sub.add_parser("suggest", help="List tags starting with a prefix")
    suggest.add_argument("prefix")
    suggest.set_defaults(func=cmd_suggest)

    relate = sub.add_parser("relate", help="Relate two tags")
    relate.add_argument("tag1")
    relate.add_argument("tag2")
    relate.set_defaults(func=cmd_relate)

    lst = sub.add_parser("list", help="List tags with content counts")
    lst.set_defaults(func=cmd_list)

    export = sub.add_parser("export", help="Print or write the stored snapshot JSON")
    export.add_argument("--output", type=Path, default=None, help="Output JSON path")
    export.set_defaults(func=cmd_export)

    report = sub.add_parser("report", help="Write a CSV report of tags")
    report.add_argument("--output", type=Path, required=True, help="Output CSV path")
    report.set_defaults(func=cmd_report)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config).override(db_path=args.db, log_level=args.log_level)
    _configure_logging(config.log_level)

    store = open_store(config)
    return args.func(store, args)


if __name__ == "__main__":
    sys.exit(main())
