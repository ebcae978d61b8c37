"""
A set over a closed, fixed domain, stored as a bit vector.

The domain is an ordered tuple of distinct members fixed when the set is
created (for instance the members of an `enum.Enum` class). Membership of the
i-th domain member is bit i of an integer, and iteration follows domain order
whatever order the members were added in.
"""

from collections.abc import Hashable, Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any, MutableSet, TypeVar

from python_subsets.utils import iter_set_bits

T = TypeVar('T', bound=Hashable)


@lru_cache(maxsize=128)
def _domain_index(domain: tuple) -> Mapping[Any, int]:
    index = {member: i for i, member in enumerate(domain)}
    if len(index) != len(domain):
        raise ValueError("Domain members must be distinct")
    return MappingProxyType(index)


class DomainSet(MutableSet[T]):
    """
    A mutable set whose possible members are fixed by its domain. Adding a
    value outside the domain raises ValueError.
    """

    __slots__ = ("_domain", "_index", "_bits")

    def __init__(self, domain: Iterable[T], members: Iterable[T] = ()) -> None:
        self._domain: tuple[T, ...] = tuple(domain)
        self._index = _domain_index(self._domain)
        self._bits = 0
        for m in members:
            self.add(m)

    @classmethod
    def none_of(cls, domain: Iterable[T]) -> 'DomainSet[T]':
        return cls(domain)

    @classmethod
    def all_of(cls, domain: Iterable[T]) -> 'DomainSet[T]':
        s = cls(domain)
        s._bits = (1 << len(s._domain)) - 1
        return s

    @classmethod
    def of(cls, domain: Iterable[T], *members: T) -> 'DomainSet[T]':
        return cls(domain, members)

    @property
    def domain(self) -> tuple[T, ...]:
        return self._domain

    @property
    def bits(self) -> int:
        """The membership bit vector, bit i standing for domain[i]."""
        return self._bits

    def same_domain(self, other: 'DomainSet[Any]') -> bool:
        return self._domain == other._domain

    def empty_copy(self) -> 'DomainSet[T]':
        """A new empty set over the same domain."""
        s = object.__new__(type(self))
        s._domain = self._domain
        s._index = self._index
        s._bits = 0
        return s

    def __contains__(self, value: object) -> bool:
        try:
            i = self._index.get(value)
        except TypeError:  # unhashable
            return False
        return i is not None and bool(self._bits >> i & 1)

    def __iter__(self) -> Iterator[T]:
        return (self._domain[i] for i in iter_set_bits(self._bits))

    def __len__(self) -> int:
        return self._bits.bit_count()

    def add(self, value: T) -> None:
        i = self._index.get(value)
        if i is None:
            raise ValueError(f"{value!r} is not in the domain of this set")
        self._bits |= 1 << i

    def discard(self, value: T) -> None:
        i = self._index.get(value)
        if i is not None:
            self._bits &= ~(1 << i)

    def clear(self) -> None:
        self._bits = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self)!r})"
