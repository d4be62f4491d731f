"""
Comparator helpers.

A comparator takes two items and returns a negative number, zero, or a
positive number when the first orders before, equal to, or after the
second. It must define a strict total order and must not change while a
tree uses it.
"""

from typing import Any, Callable, TypeVar

T = TypeVar("T")
K = TypeVar("K")


def natural_compare(a: Any, b: Any) -> int:
    """
    Compare two values with their own ``<`` and ``>`` operators.

    Args:
        a: First value
        b: Second value

    Returns:
        -1, 0 or 1
    """
    return (a > b) - (a < b)


def compare_by(
    key: Callable[[T], K], compare: Callable[[K, K], float] = natural_compare
) -> Callable[[T, T], float]:
    """
    Build a comparator that orders records by an extracted key.

    Args:
        key: Function returning the sort key of a record
        compare: Comparator applied to the extracted keys

    Returns:
        Comparator over whole records
    """
    def _compare(a: T, b: T) -> float:
        return compare(key(a), key(b))

    return _compare


def reverse_compare(compare: Callable[[T, T], float]) -> Callable[[T, T], float]:
    """Return a comparator giving the opposite order of compare."""
    def _compare(a: T, b: T) -> float:
        return compare(b, a)

    return _compare
