"""
Tree vertices and the navigation primitives shared by the tree and its
iterators.

Children are owned by their parent; ``parent`` is a back-reference used
only to walk upwards. A missing child is ``None`` and counts as black.
"""

from typing import Any, Optional

from .errors import check

RED = 0
BLACK = 1


class Node:
    """A red-black tree vertex."""

    __slots__ = ("item", "color", "parent", "left", "right")

    def __init__(self, item: Any):
        self.item = item
        self.color = RED
        self.parent: Optional[Node] = None
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None

    def __repr__(self) -> str:
        color = "red" if self.color == RED else "black"
        return f"Node({self.item!r}, {color})"

    def is_left_child(self) -> bool:
        return self.parent is not None and self is self.parent.left

    def is_right_child(self) -> bool:
        return self.parent is not None and self is self.parent.right

    def sibling(self) -> Optional["Node"]:
        """Return the parent's other child. The node must have a parent."""
        check(self.parent is not None, "root node has no sibling")
        if self.is_left_child():
            return self.parent.right
        return self.parent.left

    def leftmost(self) -> "Node":
        n = self
        while n.left is not None:
            n = n.left
        return n

    def rightmost(self) -> "Node":
        n = self
        while n.right is not None:
            n = n.right
        return n

    def max_predecessor(self) -> "Node":
        """
        Return the largest node of the left subtree.

        The result never has a right child.
        """
        check(self.left is not None, "max_predecessor needs a left child")
        return self.left.rightmost()

    def next(self) -> Optional["Node"]:
        """
        Return the in-order successor, or None if this is the maximum.

        Descends to the leftmost node of the right subtree when there is
        one; otherwise climbs until it arrives at an ancestor from its
        left side.
        """
        if self.right is not None:
            return self.right.leftmost()
        n = self
        while n.parent is not None:
            if n.is_left_child():
                return n.parent
            n = n.parent
        return None

    def prev(self) -> Optional["Node"]:
        """Return the in-order predecessor, or None if this is the minimum."""
        if self.left is not None:
            return self.max_predecessor()
        n = self
        while n.parent is not None:
            if n.is_right_child():
                return n.parent
            n = n.parent
        return None


def color_of(n: Optional[Node]) -> int:
    """Return the color of n, treating an absent node as black."""
    if n is None:
        return BLACK
    return n.color
