"""
Exceptions and warnings raised by the red-black tree.

Lookups that miss are not errors and never raise; the classes here are
reserved for programmer errors and for broken internal structure.
"""


class RBTreeError(RuntimeError):
    """Base class for red-black tree failures."""
    pass


class PreconditionError(RBTreeError):
    """A caller broke an operation's documented requirement."""
    pass


class InvariantError(RBTreeError):
    """The tree structure no longer satisfies the red-black invariants."""
    pass


class PerformanceWarning(UserWarning):
    """Warning about performance-related issues."""
    pass


def require(condition: bool, message: str) -> None:
    """Raise PreconditionError with message unless condition holds."""
    if not condition:
        raise PreconditionError(message)


def check(condition: bool, message: str) -> None:
    """Raise InvariantError with message unless condition holds."""
    if not condition:
        raise InvariantError(message)
