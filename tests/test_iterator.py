"""Tests for tree cursors."""

import pytest
from pyrbtree import RBTree, PreconditionError


@pytest.fixture
def tree():
    t = RBTree(validate=True)
    for key in [5, 1, 9, 3, 7]:
        t.insert(key)
    return t


class TestCursorMovement:
    """Test walking cursors forwards and backwards."""

    def test_forward_walk(self, tree):
        """Test next() visits items in ascending order."""
        items = []
        it = tree.begin()
        while not it.is_end():
            items.append(it.item())
            it = it.next()
        assert items == [1, 3, 5, 7, 9]

    def test_backward_walk(self, tree):
        """Test prev() from end visits items in descending order."""
        items = []
        it = tree.end()
        while not it.is_begin():
            it = it.prev()
            items.append(it.item())
        assert items == [9, 7, 5, 3, 1]

    def test_prev_from_end_is_max(self, tree):
        """Test stepping back from end reaches the maximum."""
        assert tree.end().prev().item() == 9

    def test_next_from_max_is_end(self, tree):
        """Test stepping past the maximum reaches end."""
        assert tree.find_ge(9).next().is_end()

    def test_is_begin(self, tree):
        """Test begin detection."""
        assert tree.begin().is_begin()
        assert tree.find_ge(1).is_begin()
        assert not tree.find_ge(3).is_begin()
        assert not tree.end().is_begin()

    def test_walk_from_middle(self, tree):
        """Test walking both ways from a found item."""
        it = tree.find_ge(4)
        assert it.item() == 5
        assert it.prev().item() == 3
        assert it.next().item() == 7

    def test_cursors_are_immutable(self, tree):
        """Test next() leaves the original cursor in place."""
        it = tree.find_ge(3)
        it.next()
        assert it.item() == 3


class TestCursorEquality:
    """Test cursor comparison."""

    def test_same_position(self, tree):
        """Test cursors on the same node are equal."""
        assert tree.find_ge(4) == tree.find_le(5)
        assert tree.find_ge(100) == tree.end()

    def test_different_position(self, tree):
        """Test cursors on different nodes differ."""
        assert tree.find_ge(3) != tree.find_ge(5)

    def test_different_trees(self, tree):
        """Test end cursors of different trees differ."""
        assert tree.end() != RBTree().end()

    def test_repr(self, tree):
        """Test string representation."""
        assert repr(tree.find_ge(3)) == "RBTreeIterator(3)"
        assert repr(tree.end()) == "RBTreeIterator(<end>)"


class TestCursorPreconditions:
    """Test misuse of cursors fails loudly."""

    def test_item_on_end(self, tree):
        """Test item() on end raises."""
        with pytest.raises(PreconditionError):
            tree.end().item()

    def test_next_on_end(self, tree):
        """Test next() on end raises."""
        with pytest.raises(PreconditionError):
            tree.end().next()

    def test_prev_on_begin(self, tree):
        """Test prev() on begin raises."""
        with pytest.raises(PreconditionError):
            tree.begin().prev()

    def test_prev_on_empty_end(self):
        """Test prev() on the end of an empty tree raises."""
        with pytest.raises(PreconditionError):
            RBTree().end().prev()

    def test_delete_with_end(self, tree):
        """Test deleting through end raises and changes nothing."""
        with pytest.raises(PreconditionError):
            tree.delete_with_iterator(tree.end())
        assert len(tree) == 5

    def test_delete_with_foreign_cursor(self, tree):
        """Test deleting through another tree's cursor raises."""
        other = RBTree()
        other.insert(5)
        with pytest.raises(PreconditionError):
            tree.delete_with_iterator(other.begin())
        assert len(tree) == 5
        assert len(other) == 1

    def test_precondition_error_is_runtime_error(self, tree):
        """Test the error hierarchy."""
        with pytest.raises(RuntimeError):
            tree.end().item()
