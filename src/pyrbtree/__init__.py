"""
PyRBTree: ordered container backed by a red-black tree

Items are ordered by a caller-supplied comparator. Lookup, nearest
neighbour search, insertion and deletion are O(log n), and cursors walk
the items in either direction.
"""

__version__ = "0.1.0"

from .compare import compare_by, natural_compare, reverse_compare
from .errors import (
    InvariantError,
    PerformanceWarning,
    PreconditionError,
    RBTreeError,
)
from .rbtree import RBTree, RBTreeIterator

__all__ = [
    "RBTree",
    "RBTreeIterator",
    "compare_by",
    "natural_compare",
    "reverse_compare",
    "RBTreeError",
    "PreconditionError",
    "InvariantError",
    "PerformanceWarning",
]
