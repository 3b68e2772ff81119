"""
Generic N-ary tree of polymorphic nodes.

Parents own their children; a child only keeps a back reference to its
parent. Composite nodes hold an ordered child list (document order),
leaf nodes hold none. Root nodes can never be attached to a parent.
"""

from enum import Enum
from typing import Optional, Tuple

from maral.core.iteration import NodeRange


class Kind(Enum):
    """Structural role of a node."""

    ROOT = "root"
    MODEL = "model"
    CHAIN = "chain"
    RESIDUE = "residue"
    ATOM = "atom"
    BOND = "bond"


class Node:
    """Abstract tree element."""

    kind: Optional[Kind] = None
    _children: tuple = ()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._parent: Optional["CompositeNode"] = None

    @property
    def parent(self) -> Optional["CompositeNode"]:
        """Owning composite node, or None when detached."""
        return self._parent

    @property
    def children(self) -> Tuple["Node", ...]:
        """Direct children in document order."""
        return tuple(self._children)

    def _change_parent(self, new_parent: Optional["CompositeNode"]) -> None:
        # attaching or detaching always moves the whole subtree to another root
        self._parent = new_parent
        self._on_root_changed()
        for node in self.range():
            node._on_root_changed()

    def _on_root_changed(self) -> None:
        """Hook for nodes that keep state tied to the document they belong to."""

    def _check_new_parent(self, parent: "CompositeNode") -> None:
        """Hook letting a node refuse a parent. Raises ValueError to refuse."""

    def root(self) -> "Node":
        """Topmost ancestor, or the node itself when it has no parent."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def depth(self) -> int:
        """Number of ancestors."""
        count = 0
        node = self._parent
        while node is not None:
            count += 1
            node = node._parent
        return count

    def is_ancestor_of(self, other: "Node") -> bool:
        """True if this node appears in other's parent chain."""
        node = other._parent
        while node is not None:
            if node is self:
                return True
            node = node._parent
        return False

    def has_ancestor(self, other: "Node") -> bool:
        """True if other appears in this node's parent chain."""
        return other.is_ancestor_of(self)

    def common_ancestor(self, other: "Node") -> Optional["CompositeNode"]:
        """
        Lowest composite that is a strict ancestor of this node and an
        ancestor of other. None if the two nodes live in different trees.
        """
        node = self._parent
        while node is not None:
            if node.is_ancestor_of(other):
                return node
            node = node._parent
        return None

    def range(self, kind=None) -> NodeRange:
        """
        Lazy pre-order view of the descendants.

        Args:
            kind: Optional Kind tag or node class to filter on
        """
        return NodeRange(self, kind)


class LeafNode(Node):
    """A node without children."""


class CompositeNode(Node):
    """A node owning an ordered sequence of children."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._children: list = []

    def _check_attachable(self, child: Node) -> None:
        if child._parent is not None:
            raise ValueError(f"{child!r} already has a parent")
        if isinstance(child, RootNode):
            raise ValueError("A root node cannot be attached to a parent")
        # a childless node cannot be an ancestor
        if child is self or (child._children and child.is_ancestor_of(self)):
            raise ValueError(f"Adding {child!r} to {self!r} would create a cycle")
        child._check_new_parent(self)

    def add(self, child: Node) -> Node:
        """
        Append a child at the end of the child sequence.

        Returns:
            The child

        Raises:
            ValueError: If the child already has a parent, is a root, is
                this node or one of its ancestors, or refuses the new parent
        """
        self._check_attachable(child)
        self._children.append(child)
        child._change_parent(self)
        return child

    def insert(self, index: int, child: Node) -> Node:
        """Insert a child before the given position. Same checks as add()."""
        self._check_attachable(child)
        self._children.insert(index, child)
        child._change_parent(self)
        return child

    def remove(self, child: Node) -> Node:
        """
        Detach a child and hand it back to the caller.

        Raises:
            ValueError: If this node is not the child's parent
        """
        if child._parent is not self:
            raise ValueError(f"{self!r} is not the parent of {child!r}")
        for i, node in enumerate(self._children):
            if node is child:
                del self._children[i]
                break
        child._change_parent(None)
        return child

    def clear(self) -> None:
        """Detach every child."""
        while self._children:
            self.remove(self._children[-1])


class RootNode(CompositeNode):
    """Top of a document tree. Can never be given a parent."""

    kind = Kind.ROOT

    def _change_parent(self, new_parent) -> None:
        if new_parent is not None:
            raise ValueError("A root node cannot be attached to a parent")
