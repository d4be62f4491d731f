"""Tests for node navigation."""

import pytest
from pyrbtree import InvariantError
from pyrbtree.node import BLACK, RED, Node, color_of


def link(parent, left=None, right=None):
    parent.left = left
    parent.right = right
    for child in (left, right):
        if child is not None:
            child.parent = parent
    return parent


@pytest.fixture
def nodes():
    """Build   4
             2   6
            1 3 5 7
    """
    n = {i: Node(i) for i in range(1, 8)}
    link(n[2], n[1], n[3])
    link(n[6], n[5], n[7])
    link(n[4], n[2], n[6])
    return n


class TestNode:
    """Test node basics."""

    def test_created_red(self):
        """Test new nodes start red and unlinked."""
        n = Node("a")
        assert n.color == RED
        assert n.parent is None and n.left is None and n.right is None

    def test_color_of_none(self):
        """Test missing children count as black."""
        assert color_of(None) == BLACK
        assert color_of(Node(1)) == RED

    def test_child_side(self, nodes):
        """Test left/right child detection."""
        assert nodes[2].is_left_child()
        assert nodes[6].is_right_child()
        assert not nodes[4].is_left_child()
        assert not nodes[4].is_right_child()

    def test_sibling(self, nodes):
        """Test sibling lookup."""
        assert nodes[2].sibling() is nodes[6]
        assert nodes[7].sibling() is nodes[5]

    def test_root_sibling_fails(self, nodes):
        """Test the root has no sibling."""
        with pytest.raises(InvariantError):
            nodes[4].sibling()

    def test_extremes(self, nodes):
        """Test leftmost and rightmost descendants."""
        assert nodes[4].leftmost() is nodes[1]
        assert nodes[4].rightmost() is nodes[7]
        assert nodes[4].max_predecessor() is nodes[3]

    def test_max_predecessor_needs_left(self, nodes):
        """Test max_predecessor on a leaf fails."""
        with pytest.raises(InvariantError):
            nodes[1].max_predecessor()


class TestNavigation:
    """Test in-order successor and predecessor walks."""

    def test_next_chain(self, nodes):
        """Test next() visits every node in order."""
        order = []
        n = nodes[1]
        while n is not None:
            order.append(n.item)
            n = n.next()
        assert order == [1, 2, 3, 4, 5, 6, 7]

    def test_prev_chain(self, nodes):
        """Test prev() visits every node in reverse order."""
        order = []
        n = nodes[7]
        while n is not None:
            order.append(n.item)
            n = n.prev()
        assert order == [7, 6, 5, 4, 3, 2, 1]

    def test_next_climbs(self, nodes):
        """Test next() from a right leaf climbs to the ancestor."""
        assert nodes[3].next() is nodes[4]

    def test_prev_climbs(self, nodes):
        """Test prev() from a left leaf climbs to the ancestor."""
        assert nodes[5].prev() is nodes[4]
