"""
Red-black tree ordered by a caller-supplied comparator.

The tree stores each item at most once, keeps the minimum and maximum
nodes cached, and hands out cursors (RBTreeIterator) that walk the tree
through parent links instead of an explicit stack. Search, insertion and
deletion run in O(log n).
"""

import warnings
from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar

from .compare import natural_compare
from .errors import PerformanceWarning, check, require
from .node import BLACK, RED, Node, color_of

T = TypeVar("T")

_FIRST = object()


class RBTreeIterator(Generic[T]):
    """
    Cursor over the items of an RBTree.

    A cursor whose node is None sits past the maximum item (the end
    position). Cursors are immutable: next() and prev() return new ones.
    Using a cursor whose item has since been deleted is not supported.
    """

    __slots__ = ("tree", "node")

    def __init__(self, tree: "RBTree[T]", node: Optional[Node]):
        self.tree = tree
        self.node = node

    def is_end(self) -> bool:
        """Check if the cursor points past the maximum item."""
        return self.node is None

    def is_begin(self) -> bool:
        """
        Check if the cursor points at the minimum item.

        On an empty tree the end cursor is also the begin cursor.
        """
        return self.node is self.tree._min_node

    def item(self) -> T:
        """
        Get the item under the cursor.

        Raises:
            PreconditionError: If the cursor is at the end
        """
        require(self.node is not None, "item() called on an end iterator")
        return self.node.item

    def next(self) -> "RBTreeIterator[T]":
        """
        Get a cursor on the next larger item.

        Stepping past the maximum item yields the end cursor.

        Raises:
            PreconditionError: If the cursor is at the end
        """
        require(self.node is not None, "next() called on an end iterator")
        return RBTreeIterator(self.tree, self.node.next())

    def prev(self) -> "RBTreeIterator[T]":
        """
        Get a cursor on the next smaller item.

        Stepping back from the end yields the maximum item.

        Raises:
            PreconditionError: If the cursor is at the minimum item
        """
        require(not self.is_begin(), "prev() called on a begin iterator")
        if self.node is None:
            check(len(self.tree) > 0, "end of an empty tree is not its begin")
            return RBTreeIterator(self.tree, self.tree._max_node)
        return RBTreeIterator(self.tree, self.node.prev())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RBTreeIterator):
            return NotImplemented
        return self.tree is other.tree and self.node is other.node

    def __repr__(self) -> str:
        if self.node is None:
            return "RBTreeIterator(<end>)"
        return f"RBTreeIterator({self.node.item!r})"


class RBTree(Generic[T]):
    """
    Sorted set of items backed by a red-black tree.

    Items are ordered only through the comparator, which may look at part
    of an item (a key) and ignore the rest. Two items comparing equal are
    the same entry; inserting the second one is refused.

    Not thread-safe. Callers sharing a tree across threads must serialize
    access themselves.
    """

    def __init__(
        self,
        compare: Optional[Callable[[T, T], float]] = None,
        validate: bool = False,
    ):
        """
        Initialize an empty tree.

        Args:
            compare: Comparison function returning negative, zero, or positive.
                Defaults to the items' natural ordering.
            validate: Check every red-black invariant after each insert and
                delete. Meant for tests; it makes mutations O(n).
        """
        self._root: Optional[Node] = None
        self._min_node: Optional[Node] = None
        self._max_node: Optional[Node] = None
        self._count = 0
        self._compare = compare if compare is not None else natural_compare
        self._validate = validate
        if validate:
            warnings.warn(
                "RBTree invariant validation is enabled; every insert and "
                "delete will walk the whole tree.",
                PerformanceWarning,
                stacklevel=2
            )

    @property
    def compare(self) -> Callable[[T, T], float]:
        """The comparator fixed at construction."""
        return self._compare

    def __len__(self) -> int:
        return self._count

    @property
    def size(self) -> int:
        """Get number of elements in tree."""
        return self._count

    def is_empty(self) -> bool:
        """Check if tree is empty."""
        return self._count == 0

    def __contains__(self, key: T) -> bool:
        return self._find_ge(key)[1]

    def __iter__(self) -> Iterator[T]:
        n = self._min_node
        while n is not None:
            yield n.item
            n = n.next()

    def __reversed__(self) -> Iterator[T]:
        n = self._max_node
        while n is not None:
            yield n.item
            n = n.prev()

    def __repr__(self) -> str:
        return f"RBTree({list(self)!r})"

    def get(self, key: T, default: Optional[T] = None) -> Optional[T]:
        """
        Find the stored item equal to key.

        Args:
            key: Item to look up; only the comparator sees it
            default: Value returned when no equal item is stored

        Returns:
            The stored item, or default
        """
        n, exact = self._find_ge(key)
        if exact:
            return n.item
        return default

    def min_item(self) -> T:
        """
        Get the smallest item.

        Raises:
            KeyError: If the tree is empty
        """
        if self._min_node is None:
            raise KeyError("min_item() on an empty tree")
        return self._min_node.item

    def max_item(self) -> T:
        """
        Get the largest item.

        Raises:
            KeyError: If the tree is empty
        """
        if self._max_node is None:
            raise KeyError("max_item() on an empty tree")
        return self._max_node.item

    def begin(self) -> RBTreeIterator[T]:
        """Get a cursor on the minimum item (the end cursor if empty)."""
        return RBTreeIterator(self, self._min_node)

    def end(self) -> RBTreeIterator[T]:
        """Get the cursor past the maximum item."""
        return RBTreeIterator(self, None)

    def find_ge(self, key: T) -> RBTreeIterator[T]:
        """
        Find the smallest item that is >= key.

        Args:
            key: Item to search for

        Returns:
            Cursor on the item, or the end cursor if every item is < key
        """
        n, _ = self._find_ge(key)
        return RBTreeIterator(self, n)

    def find_le(self, key: T) -> RBTreeIterator[T]:
        """
        Find the largest item that is <= key.

        Args:
            key: Item to search for

        Returns:
            Cursor on the item, or the end cursor if every item is > key
        """
        n, exact = self._find_ge(key)
        if exact:
            return RBTreeIterator(self, n)
        if n is not None:
            return RBTreeIterator(self, n.prev())
        # Every item is smaller than key
        return RBTreeIterator(self, self._max_node)

    def insert(self, item: T) -> bool:
        """
        Insert an item into the tree.

        Args:
            item: Item to insert

        Returns:
            True if inserted, False if an equal item is already stored (the
            tree is left unchanged)
        """
        n = self._attach(item)
        if n is None:
            return False
        self._insert_fixup(n)
        self._after_mutation()
        return True

    def delete_with_key(self, key: T) -> bool:
        """
        Delete the item equal to key.

        Args:
            key: Item to delete

        Returns:
            True if an item was deleted, False if none compared equal
        """
        n, exact = self._find_ge(key)
        if not exact:
            return False
        self.delete_with_iterator(RBTreeIterator(self, n))
        return True

    def delete_with_iterator(self, it: RBTreeIterator[T]) -> None:
        """
        Delete the item under a cursor.

        The cursor, and any other cursor on the same item, must not be used
        afterwards. Cursors on other items stay valid.

        Args:
            it: Cursor on the item to delete

        Raises:
            PreconditionError: If the cursor is at the end or belongs to
                another tree
        """
        require(it.tree is self, "iterator belongs to a different tree")
        require(it.node is not None, "cannot delete through an end iterator")
        self._delete(it.node)
        self._after_mutation()

    def clear(self) -> None:
        """Remove every item."""
        self._root = None
        self._min_node = None
        self._max_node = None
        self._count = 0

    def check_invariants(self) -> None:
        """
        Verify the tree structure.

        Checks ordering, root color, the red-red and black-height rules,
        parent links, the cached minimum and maximum, and the count.

        Raises:
            InvariantError: On the first violation found
        """
        root = self._root
        if root is None:
            check(self._count == 0, f"empty tree reports {self._count} items")
            check(self._min_node is None and self._max_node is None,
                  "empty tree caches a minimum or maximum node")
            return

        check(root.parent is None, "root has a parent")
        check(root.color == BLACK, "root is red")
        count, _ = self._check_subtree(root)
        check(count == self._count,
              f"tree reports {self._count} items but holds {count}")
        check(self._min_node is root.leftmost(), "cached minimum node is stale")
        check(self._max_node is root.rightmost(), "cached maximum node is stale")

        prev = _FIRST
        for item in self:
            if prev is not _FIRST:
                check(self._compare(prev, item) < 0,
                      f"items out of order: {prev!r} before {item!r}")
            prev = item

    def _check_subtree(self, n: Optional[Node]) -> Tuple[int, int]:
        """Return (node count, black height) of the subtree rooted at n."""
        if n is None:
            return 0, 1
        check(n.color in (RED, BLACK), f"node {n.item!r} has no color")
        for child in (n.left, n.right):
            if child is not None:
                check(child.parent is n, f"broken parent link below {n.item!r}")
        if n.color == RED:
            check(color_of(n.left) == BLACK and color_of(n.right) == BLACK,
                  f"red node {n.item!r} has a red child")

        left_count, left_height = self._check_subtree(n.left)
        right_count, right_height = self._check_subtree(n.right)
        check(left_height == right_height,
              f"black height differs below {n.item!r}")
        return 1 + left_count + right_count, left_height + (n.color == BLACK)

    def _after_mutation(self) -> None:
        if self._validate:
            self.check_invariants()

    def _find_ge(self, key: T) -> Tuple[Optional[Node], bool]:
        """
        Find the smallest node whose item is >= key.

        Returns (node, exact) where exact tells whether the item equals key,
        or (None, False) when every item is < key.
        """
        n = self._root
        while n is not None:
            comp = self._compare(key, n.item)
            if comp == 0:
                return n, True
            if comp < 0:
                if n.left is None:
                    return n, False
                n = n.left
            else:
                if n.right is None:
                    succ = n.next()
                    if succ is None:
                        return None, False
                    return succ, self._compare(key, succ.item) == 0
                n = n.right
        return None, False

    def _attach(self, item: T) -> Optional[Node]:
        """
        Link a new red leaf holding item, or return None on a duplicate.

        Updates the count and the cached extremes but does not rebalance.
        """
        if self._root is None:
            n = Node(item)
            self._root = self._min_node = self._max_node = n
            self._count += 1
            return n

        parent = self._root
        while True:
            comp = self._compare(item, parent.item)
            if comp == 0:
                return None
            if comp < 0:
                if parent.left is None:
                    n = parent.left = Node(item)
                    break
                parent = parent.left
            else:
                if parent.right is None:
                    n = parent.right = Node(item)
                    break
                parent = parent.right

        n.parent = parent
        self._count += 1
        # Only the left child of the minimum can be smaller than it
        if parent is self._min_node and n is parent.left:
            self._min_node = n
        elif parent is self._max_node and n is parent.right:
            self._max_node = n
        return n

    def _insert_fixup(self, n: Node) -> None:
        while True:
            parent = n.parent
            if parent is None:
                n.color = BLACK
                return
            if parent.color == BLACK:
                return

            grandparent = parent.parent
            check(grandparent is not None, "red node at the root")
            if parent.is_left_child():
                uncle = grandparent.right
            else:
                uncle = grandparent.left

            if color_of(uncle) == RED:
                parent.color = BLACK
                uncle.color = BLACK
                grandparent.color = RED
                n = grandparent
                continue

            # Inner grandchild: rotate it to the outside and retry from the
            # old parent, which is now its child
            if n.is_right_child() and parent.is_left_child():
                self._rotate_left(parent)
                n = parent
                continue
            if n.is_left_child() and parent.is_right_child():
                self._rotate_right(parent)
                n = parent
                continue

            parent.color = BLACK
            grandparent.color = RED
            if n.is_left_child():
                self._rotate_right(grandparent)
            else:
                self._rotate_left(grandparent)
            return

    def _delete(self, n: Node) -> None:
        if self._min_node is n:
            self._min_node = None
        if self._max_node is n:
            self._max_node = None
        self._count -= 1

        if n.left is not None and n.right is not None:
            self._swap_with_predecessor(n)

        check(n.left is None or n.right is None, "deleted node has two children")
        child = n.left if n.left is not None else n.right
        if n.color == BLACK:
            n.color = color_of(child)
            self._delete_fixup(n)
        self._replace_node(n, child)
        if n.parent is None and child is not None:
            child.color = BLACK
        n.parent = n.left = n.right = None

        if self._count > 0:
            if self._min_node is None:
                self._min_node = self._root.leftmost()
            if self._max_node is None:
                self._max_node = self._root.rightmost()

    def _swap_with_predecessor(self, n: Node) -> None:
        """
        Exchange the tree positions and colors of n and its predecessor.

        Nodes are relinked rather than having their items copied, so the
        predecessor node (and any cursor on it) survives the deletion of n.
        Afterwards n has no right child.
        """
        pred = n.max_predecessor()
        pred_parent = pred.parent
        pred_left = pred.left
        pred_color = pred.color

        self._replace_node(n, pred)
        pred.color = n.color
        pred.right = n.right
        pred.right.parent = pred

        if pred_parent is n:
            # pred was n's left child; n moves directly below it
            pred.left = n
            n.parent = pred
        else:
            pred.left = n.left
            pred.left.parent = pred
            pred_parent.right = n
            n.parent = pred_parent

        n.left = pred_left
        if pred_left is not None:
            pred_left.parent = n
        n.right = None
        n.color = pred_color

    def _delete_fixup(self, n: Node) -> None:
        """
        Rebalance before unlinking n, whose side of the tree is about to
        lose one black node.
        """
        while n.parent is not None:
            parent = n.parent
            sibling = n.sibling()
            if color_of(sibling) == RED:
                parent.color = RED
                sibling.color = BLACK
                if n.is_left_child():
                    self._rotate_left(parent)
                else:
                    self._rotate_right(parent)
                sibling = n.sibling()

            check(sibling is not None, "black node without a sibling")
            nephews_black = (color_of(sibling.left) == BLACK and
                             color_of(sibling.right) == BLACK)
            if parent.color == BLACK and sibling.color == BLACK and nephews_black:
                sibling.color = RED
                n = parent
                continue
            if parent.color == RED and sibling.color == BLACK and nephews_black:
                sibling.color = RED
                parent.color = BLACK
                return

            self._delete_rotate_nephew(n)
            return

    def _delete_rotate_nephew(self, n: Node) -> None:
        """Finish a deletion fixup where the black sibling has a red child."""
        parent = n.parent
        sibling = n.sibling()
        if n.is_left_child():
            if color_of(sibling.left) == RED and color_of(sibling.right) == BLACK:
                sibling.color = RED
                sibling.left.color = BLACK
                self._rotate_right(sibling)
                sibling = n.sibling()
            sibling.color = parent.color
            parent.color = BLACK
            check(color_of(sibling.right) == RED, "far nephew is not red")
            sibling.right.color = BLACK
            self._rotate_left(parent)
        else:
            if color_of(sibling.right) == RED and color_of(sibling.left) == BLACK:
                sibling.color = RED
                sibling.right.color = BLACK
                self._rotate_left(sibling)
                sibling = n.sibling()
            sibling.color = parent.color
            parent.color = BLACK
            check(color_of(sibling.left) == RED, "far nephew is not red")
            sibling.left.color = BLACK
            self._rotate_right(parent)

    def _replace_node(self, old: Node, new: Optional[Node]) -> None:
        """Point whatever referenced old (root or parent link) at new."""
        parent = old.parent
        if parent is None:
            self._root = new
        elif old is parent.left:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    #      X              Y
    #    A   Y    =>    X   C
    #       B C        A B
    def _rotate_left(self, x: Node) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        self._replace_node(x, y)
        y.left = x
        x.parent = y

    #      Y              X
    #    X   C    =>    A   Y
    #   A B                B C
    def _rotate_right(self, y: Node) -> None:
        x = y.left
        y.left = x.right
        if x.right is not None:
            x.right.parent = y
        self._replace_node(y, x)
        x.right = y
        y.parent = x
