"""
Enumeration of all subsets of a collection of at most 62 elements.

Each subset is identified by a position in [0, 2^n): bit i of the position is
set iff the i-th element (in the iteration order of the input at construction
time) belongs to the subset. Subsets are generated in increasing position
order, so elements [A, B, C] give

    {}, {A}, {B}, {A, B}, {C}, {A, C}, {B, C}, {A, B, C}

Two cursor types share the `decode` function: `SubsetIterator`, a plain
forward-only iterator, and `SubsetRange`, a half-open range of positions that
can be bisected so that the pieces are traversed independently (see
`python_subsets.traversal`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Set as AbstractSet
from enum import Flag, auto
from typing import (
    TYPE_CHECKING, Any, Callable, Final, Generic, Iterator, List, MutableSet, Optional, TypeVar
)

from python_subsets.capability import Capability, detect, new_container
from python_subsets.errors import (
    DuplicateElements, ExhaustedError, ListTooLarge, NullInput, SizeExceeded
)
from python_subsets.utils import iter_set_bits

if TYPE_CHECKING:
    from python_subsets.traversal import Traversal

T = TypeVar('T')

MAX_SIZE: Final = 62
MAX_LIST_SIZE: Final = 30

_DETECT: Final = object()

logger = logging.getLogger(__name__)


class Characteristics(Flag):
    """Structural properties of the subsets produced by a SubsetRange."""
    DISTINCT = auto()
    IMMUTABLE = auto()
    NONNULL = auto()
    SIZED = auto()
    SUBSIZED = auto()
    ORDERED = auto()


def decode(position: int, elements: tuple, capability: Capability) -> MutableSet[Any]:
    """
    Build the subset at `position`: a new container for `capability` holding
    elements[i] for every bit i set in `position`.
    """
    subset = new_container(capability)
    for i in iter_set_bits(position):
        subset.add(elements[i])
    return subset


class SubsetIterator(Iterator[MutableSet[T]]):
    """Forward-only iterator over the positions [0, 2^n)."""

    def __init__(self, elements: tuple, capability: Capability) -> None:
        self._elements = elements
        self._capability = capability
        self._upper_bound = 1 << len(elements)
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def has_next(self) -> bool:
        return self._position < self._upper_bound

    def __next__(self) -> MutableSet[T]:
        if not self.has_next():
            raise ExhaustedError("All subsets have already been produced")
        subset = decode(self._position, self._elements, self._capability)
        self._position += 1
        return subset

    advance = __next__

    def __length_hint__(self) -> int:
        return self._upper_bound - self._position


class SubsetRange(Generic[T]):
    """
    Exclusive ownership of the positions [position, high).

    A range must not be advanced or split from two threads at once, but the
    two halves produced by `try_split` are independent and may be consumed
    concurrently.
    """

    def __init__(self, elements: tuple, capability: Capability,
                 low: int, high: int) -> None:
        assert 0 <= low <= high <= 1 << len(elements)
        self._elements = elements
        self._capability = capability
        self._position = low
        self._high = high

    @property
    def position(self) -> int:
        return self._position

    @property
    def high(self) -> int:
        return self._high

    def try_split(self) -> Optional[SubsetRange[T]]:
        """
        Hand the lower half of the remaining positions to a new range and
        keep the upper half. Returns None when fewer than two positions remain.
        """
        if self._high - self._position < 2:
            return None
        mid = (self._position + self._high) // 2
        head: SubsetRange[T] = SubsetRange(self._elements, self._capability,
                                           self._position, mid)
        self._position = mid
        return head

    def try_advance(self, consumer: Callable[[MutableSet[T]], Any]) -> bool:
        if self._position == self._high:
            return False
        subset = decode(self._position, self._elements, self._capability)
        consumer(subset)
        self._position += 1
        return True

    def for_each_remaining(self, consumer: Callable[[MutableSet[T]], Any]) -> None:
        while self.try_advance(consumer):
            pass

    def __iter__(self) -> Iterator[MutableSet[T]]:
        """Drain the range, yielding its subsets in position order."""
        while self._position < self._high:
            subset = decode(self._position, self._elements, self._capability)
            self._position += 1
            yield subset

    def estimate_size(self) -> int:
        """Number of positions left. Exact, despite the name."""
        return self._high - self._position

    def characteristics(self) -> Characteristics:
        flags = (Characteristics.DISTINCT | Characteristics.IMMUTABLE
                 | Characteristics.NONNULL | Characteristics.SIZED
                 | Characteristics.SUBSIZED)
        if self._capability.ordered:
            flags |= Characteristics.ORDERED
        return flags

    def has_characteristics(self, flags: Characteristics) -> bool:
        return (self.characteristics() & flags) == flags

    def __repr__(self) -> str:
        return f"SubsetRange([{self._position}, {self._high}))"


class Subsets(Generic[T]):
    """
    All subsets of a collection of at most 62 distinct elements.

    The elements are captured when the object is built, in the iteration
    order of `collection`; later changes to `collection` have no effect.
    When no capability is given one is detected from `collection` (see
    `python_subsets.capability.detect`), so that sorted inputs give sorted
    subsets with the same key and closed-domain inputs give closed-domain
    subsets over the same domain.

    Raises:
        NullInput: `collection` or an explicitly passed capability is None.
        SizeExceeded: `collection` has more than 62 elements.
        DuplicateElements: `collection` yields an element twice.
    """

    def __init__(self, collection: Iterable[T], capability: Any = _DETECT) -> None:
        if collection is None:
            raise NullInput("collection is None")
        if capability is None:
            raise NullInput("capability is None")
        if capability is _DETECT:
            capability = detect(collection)
        elif not isinstance(capability, Capability):
            raise TypeError(f"Expected a capability descriptor, got {capability!r}")

        elements = tuple(collection)
        if len(elements) > MAX_SIZE:
            raise SizeExceeded(
                f"Cannot enumerate the subsets of {len(elements)} elements "
                f"(at most {MAX_SIZE} are supported)")
        if not isinstance(collection, AbstractSet) and len(set(elements)) != len(elements):
            raise DuplicateElements("The elements of the collection must be distinct")

        self._elements: tuple = elements
        self._capability: Capability = capability
        logger.debug("Enumerating subsets of %d elements with %s",
                     len(elements), capability)

    @property
    def elements(self) -> tuple:
        return self._elements

    @property
    def size(self) -> int:
        return len(self._elements)

    @property
    def capability(self) -> Capability:
        return self._capability

    @property
    def ordered(self) -> bool:
        return self._capability.ordered

    def __len__(self) -> int:
        return 1 << len(self._elements)

    def iterator(self) -> SubsetIterator[T]:
        return SubsetIterator(self._elements, self._capability)

    def __iter__(self) -> SubsetIterator[T]:
        return self.iterator()

    def as_list(self) -> List[MutableSet[T]]:
        """
        All subsets in generation order. Only for small inputs: raises
        ListTooLarge for more than 30 elements.
        """
        if len(self._elements) > MAX_LIST_SIZE:
            raise ListTooLarge(
                f"Refusing to materialize the {2 ** len(self._elements)} subsets of "
                f"{len(self._elements)} elements (at most {MAX_LIST_SIZE} elements)")
        return list(self.iterator())

    def range(self) -> SubsetRange[T]:
        """A splittable range covering every position."""
        return SubsetRange(self._elements, self._capability, 0, len(self))

    def traverse(self, parallel: bool = True) -> Traversal[T]:
        """A traversal of all subsets, executed in parallel unless told otherwise."""
        from python_subsets.traversal import Traversal
        return Traversal(self.range(), parallel=parallel)

    def __repr__(self) -> str:
        return f"Subsets({list(self._elements)!r}, {self._capability!r})"
