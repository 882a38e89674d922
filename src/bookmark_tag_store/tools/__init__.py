"""タグストア用のコマンドラインツール."""
