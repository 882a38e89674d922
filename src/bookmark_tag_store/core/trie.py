"""Prefix trie for tag autocomplete.

キーは常に小文字化して格納する。子ノードは dict なので、各ノードでの走査順は
「その文字が最初に挿入された順」になる（アルファベット順やランキングではない）。
"""

from __future__ import annotations

from typing import Any


class TrieNode:
    """Trie node: 1文字 -> 子ノードの対応と、終端フラグ."""

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.is_end = False

    def to_dict(self) -> dict[str, Any]:
        # 明示スタックで変換（再帰なし、子の順序は保持）
        out: dict[str, Any] = {"isEnd": self.is_end, "children": {}}
        stack: list[tuple[TrieNode, dict[str, Any]]] = [(self, out)]
        while stack:
            node, node_out = stack.pop()
            for char, child in node.children.items():
                child_out: dict[str, Any] = {"isEnd": child.is_end, "children": {}}
                node_out["children"][char] = child_out
                stack.append((child, child_out))
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrieNode:
        root = cls()
        stack: list[tuple[TrieNode, dict[str, Any]]] = [(root, data)]
        while stack:
            node, node_data = stack.pop()
            node.is_end = bool(node_data.get("isEnd", False))
            for char, child_data in (node_data.get("children") or {}).items():
                child = cls()
                node.children[char] = child
                stack.append((child, child_data))
        return root


class Trie:
    """Prefix tree over lowercased tag keys."""

    def __init__(self) -> None:
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._find(word.lower())
        return node is not None and node.is_end

    def insert(self, word: str) -> None:
        """単語を挿入する（小文字化して格納、再挿入は何もしない）.

        空文字はルート自体を終端にする。
        """
        node = self.root
        for char in word.lower():
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child
        if not node.is_end:
            node.is_end = True
            self._size += 1

    def suggest(self, prefix: str) -> list[str]:
        """prefix で始まる全キーを返す.

        prefix の途中で一致しない文字があれば即座に空リストを返す（部分一致なし）。
        """
        lower_prefix = prefix.lower()
        node = self._find(lower_prefix)
        if node is None:
            return []

        results: list[str] = []
        self._collect(node, lower_prefix, results)
        return results

    def clear(self) -> None:
        self.root = TrieNode()
        self._size = 0

    def to_dict(self) -> dict[str, Any]:
        return self.root.to_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Trie:
        trie = cls()
        trie.root = TrieNode.from_dict(data)
        trie._size = len(trie.suggest(""))
        return trie

    def _find(self, lower_prefix: str) -> TrieNode | None:
        node = self.root
        for char in lower_prefix:
            child = node.children.get(char)
            if child is None:
                return None
            node = child
        return node

    def _collect(self, node: TrieNode, current: str, results: list[str]) -> None:
        # 明示スタックによる深さ優先走査（再帰なし）
        stack: list[tuple[TrieNode, str]] = [(node, current)]
        while stack:
            n, word = stack.pop()
            if n.is_end:
                results.append(word)
            # 挿入順で取り出すため逆順に積む
            for char, child in reversed(list(n.children.items())):
                stack.append((child, word + char))
