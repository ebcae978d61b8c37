"""
Exceptions raised by the subset-enumeration engine.

All of them are usage-contract violations raised at the point where the
contract is broken; none of them is transient.
"""


class SubsetsError(Exception):
    """Base class for all errors raised by python_subsets."""


class SizeExceeded(SubsetsError, ValueError):
    """The input collection has more elements than can be encoded in a position."""


class NullInput(SubsetsError, TypeError):
    """A required construction argument is None."""


class DuplicateElements(SubsetsError, ValueError):
    """The input collection yields the same element more than once."""


class ExhaustedError(SubsetsError, StopIteration):
    """
    Advancing an iterator that has already produced its last subset.

    Being a StopIteration, it ends `for` loops and `next(it, default)` calls
    normally.
    """


class ListTooLarge(SubsetsError, ValueError):
    """Eager materialization was requested for too many elements."""


class TraversalConsumed(SubsetsError, RuntimeError):
    """A traversal was used after its range had already been handed over."""
