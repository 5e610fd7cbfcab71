"""Thin read-only view over tree-sitter trees.

Offsets are byte offsets into the UTF-8 source that was parsed.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import NamedTuple

from tree_sitter import Node, Tree


class ByteRange(NamedTuple):
    start: int
    end: int


class SyntaxNode:
    __slots__ = ("_node", "_source")

    def __init__(self, node: Node, source: bytes) -> None:
        self._node = node
        self._source = source

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def raw(self) -> Node:
        return self._node

    def byte_range(self) -> ByteRange:
        return ByteRange(self._node.start_byte, self._node.end_byte)

    def text(self) -> str:
        return self._source[self._node.start_byte : self._node.end_byte].decode("utf-8", errors="replace")

    @property
    def named_children(self) -> list[SyntaxNode]:
        return [SyntaxNode(child, self._source) for child in self._node.named_children]

    @property
    def parent(self) -> SyntaxNode | None:
        parent = self._node.parent
        return SyntaxNode(parent, self._source) if parent is not None else None

    def field(self, name: str) -> SyntaxNode | None:
        child = self._node.child_by_field_name(name)
        return SyntaxNode(child, self._source) if child is not None else None

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and all of its descendants in document order."""
        stack = [self._node]
        while stack:
            node = stack.pop()
            yield SyntaxNode(node, self._source)
            stack.extend(reversed(node.children))

    def descendants_of_kind(self, kinds: Collection[str]) -> list[SyntaxNode]:
        """Return matching descendants in document order.

        A matching node's own subtree is not searched, so the returned ranges
        never overlap.
        """
        return list(self._iter_kind(kinds))

    def _iter_kind(self, kinds: Collection[str]) -> Iterator[SyntaxNode]:
        stack = [self._node]
        while stack:
            node = stack.pop()
            if node.type in kinds:
                yield SyntaxNode(node, self._source)
                continue
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind!r}, {self._node.start_byte}..{self._node.end_byte})"


class SyntaxTree:
    __slots__ = ("_tree", "source")

    def __init__(self, tree: Tree, source: bytes) -> None:
        self._tree = tree
        self.source = source

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self._tree.root_node, self.source)

    def wrap(self, node: Node) -> SyntaxNode:
        return SyntaxNode(node, self.source)
