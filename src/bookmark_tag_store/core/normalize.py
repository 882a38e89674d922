"""タグ名の正規化と入力検証.

設計方針:
    - ストア内部のキーは表示名の小文字化のみ（空白置換などは行わない）
    - 入力検証（trim・空文字チェック・カンマ区切り分解）は呼び出し側の責務
      ストア本体は検証済みの文字列だけを受け取る前提
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ValidateResult(Generic[T]):
    """検証結果（成功なら data、失敗なら error にメッセージ）."""

    success: bool
    data: T | None = None
    error: str | None = None


def normalize_key(name: str) -> str:
    """表示名からストア内部のキーを作る.

    Examples:
        >>> normalize_key("Travel")
        'travel'
        >>> normalize_key("New York")
        'new york'
    """
    return name.lower()


def _type_name(value: object) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def validate_string(value: object, key: str | None = None) -> ValidateResult[str]:
    """文字列入力を検証し、前後の空白を除去した値を返す.

    Args:
        value: 検証対象
        key: エラーメッセージに使うフィールド名

    Returns:
        成功時は trim 済みの文字列、失敗時はエラーメッセージを持つ結果
    """
    if not isinstance(value, str):
        core = f"Expected string, but received {_type_name(value)}"
        return ValidateResult(success=False, error=f"[{key}] {core}" if key else core)

    label = key or "String"
    if value == "":
        return ValidateResult(success=False, error=f"{label} cannot be empty")

    trimmed = value.strip()
    if trimmed == "":
        return ValidateResult(
            success=False,
            error=f"{label} cannot be empty or contain only whitespace",
        )

    return ValidateResult(success=True, data=trimmed)


def parse_tag_list(text: object, key: str = "tags") -> ValidateResult[list[str]]:
    """カンマ区切りのタグ文字列をタグ名リストに分解する.

    - 各要素は trim し、空要素は捨てる
    - 重複は最初の出現だけ残す（大文字小文字は区別する。同一キーへの集約はストアの責務）

    Args:
        text: カンマ区切りのタグ文字列（例: "Travel, Food"）
        key: エラーメッセージに使うフィールド名

    Returns:
        成功時はタグ名のリスト
    """
    result = validate_string(text, key=key)
    if not result.success:
        return ValidateResult(success=False, error=result.error)

    tags: list[str] = []
    seen: set[str] = set()
    for part in (result.data or "").split(","):
        tag = part.strip()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)

    if not tags:
        return ValidateResult(
            success=False,
            error=f"{key} must contain at least one non-empty tag",
        )

    return ValidateResult(success=True, data=tags)
