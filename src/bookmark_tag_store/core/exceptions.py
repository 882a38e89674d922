"""Tag store exceptions.

カスタム例外クラスを定義します。
"""


class SnapshotDecodeError(ValueError):
    """永続化スナップショットを復元できない場合の例外.

    ストア本体はこの例外を捕捉してログに残し、空の状態で起動します
    （呼び出し側へは伝播させない）。

    Attributes:
        reason: 復元できなかった理由
        field: 問題のあったトップレベルのフィールド名（特定できない場合は None）
    """

    def __init__(self, reason: str, field: str | None = None) -> None:
        """例外初期化.

        Args:
            reason: 復元できなかった理由
            field: 問題のあったフィールド名
        """
        self.reason = reason
        self.field = field
        if field is None:
            message = f"Snapshot decode failed: {reason}"
        else:
            message = f"Snapshot decode failed at '{field}': {reason}"
        super().__init__(message)
