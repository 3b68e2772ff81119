"""
Depth-first traversal over a node hierarchy.

Traversal keeps an explicit stack of sibling cursors instead of
recursing, so arbitrarily deep trees can be walked. Nodes are produced in
pre-order: a node before its children, siblings in child order.
"""

from typing import Iterator, List, Optional


class NodeIterator:
    """
    Forward cursor over the descendants of a node.

    Args:
        start: Node whose descendants are visited (not the node itself).
            None creates an exhausted iterator, usable as an end sentinel.
        kind: Optional filter. A Kind tag matches nodes carrying that tag,
            a class matches instances of it and of its subclasses.
            Non-matching nodes are skipped but still descended through.

    Two iterators compare equal when they point at the same node, whatever
    their remaining stacks hold.
    """

    __slots__ = ("_kind", "_stack", "current")

    def __init__(self, start=None, kind=None):
        self._kind = kind
        self._stack: List[list] = []
        self.current = None
        if start is not None and start._children:
            self._stack.append([start._children, 0])
            self._advance()

    def _matches(self, node) -> bool:
        kind = self._kind
        if kind is None:
            return True
        if isinstance(kind, type):
            return isinstance(node, kind)
        return node.kind is kind

    def _advance(self) -> None:
        stack = self._stack
        while stack:
            cursor = stack[-1]
            siblings, idx = cursor
            if idx >= len(siblings):
                stack.pop()
                continue
            node = siblings[idx]
            cursor[1] = idx + 1
            if node._children:
                stack.append([node._children, 0])
            if self._matches(node):
                self.current = node
                return
        self.current = None

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeIterator):
            return NotImplemented
        return self.current is other.current

    __hash__ = None

    def __iter__(self) -> "NodeIterator":
        return self

    def __next__(self):
        node = self.current
        if node is None:
            raise StopIteration
        self._advance()
        return node


class NodeRange:
    """
    Restartable view of the (optionally filtered) descendants of a node.

    Every iteration starts a fresh NodeIterator, so a range can be walked
    any number of times and reflects the tree as it is at that moment.
    """

    __slots__ = ("_start", "_kind")

    def __init__(self, start, kind=None):
        self._start = start
        self._kind = kind

    def __repr__(self) -> str:
        return f"NodeRange({self._start!r}, kind={self._kind!r})"

    def begin(self) -> NodeIterator:
        return NodeIterator(self._start, self._kind)

    def end(self) -> NodeIterator:
        return NodeIterator()

    def __iter__(self) -> Iterator:
        return self.begin()

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self.begin().current is not None

    def first(self) -> Optional[object]:
        """First matching descendant, or None."""
        return self.begin().current
