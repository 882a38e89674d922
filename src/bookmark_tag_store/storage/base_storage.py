"""永続化ストレージ（キー・バリュー）の基底クラス.

タグストアは文字列キー → 文字列値の単純なストレージだけを前提にします。
"""

from abc import ABC, abstractmethod


class BaseBlobStorage(ABC):
    """文字列キー・バリューストレージの基底クラス.

    全てのストレージ実装はこのクラスを継承し、get()/set() を実装します。
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """キーに対応する値を返す（存在しなければ None）.

        Raises:
            OSError: 読み込みに失敗した場合
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """キーに値を書き込む（既存値は上書き）.

        Raises:
            OSError: 書き込みに失敗した場合
        """
        ...
