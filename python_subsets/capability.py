"""
Capability descriptors: what kind of container holds each generated subset.

The output of an enumeration mirrors the structural class of its input:

* `Unordered`: a plain `set`;
* `Ordered(key)`: a `sortedcontainers.SortedSet` using the same key function
  (`None` for natural ordering);
* `EnumLike(domain)`: a `DomainSet` over the same closed domain.

A descriptor is chosen once, either explicitly or with `detect`, and is
immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, ClassVar, MutableSet, Optional

from sortedcontainers import SortedSet

from python_subsets.domain_set import DomainSet


class Capability:
    """Base class of the capability descriptors."""
    __slots__ = ()
    # whether the generation order of subsets carries meaning
    ordered: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Unordered(Capability):
    pass


@dataclass(frozen=True, slots=True)
class Ordered(Capability):
    ordered: ClassVar[bool] = True
    key: Optional[Callable[[Any], Any]] = None

    @classmethod
    def from_comparator(cls, cmp: Callable[[Any, Any], int]) -> Ordered:
        """Build an ordering from an old-style three-way comparison function."""
        return cls(cmp_to_key(cmp))


@dataclass(frozen=True, slots=True)
class EnumLike(Capability):
    ordered: ClassVar[bool] = True
    domain: tuple


def detect(collection: Any) -> Capability:
    """
    Pick the capability mirroring the structural class of `collection`.
    """
    match collection:
        case DomainSet():
            return EnumLike(collection.domain)
        case SortedSet():
            return Ordered(collection.key)
        case _:
            return Unordered()


def new_container(capability: Capability) -> MutableSet[Any]:
    """Return a fresh, empty output container for `capability`."""
    match capability:
        case Unordered():
            return set()
        case Ordered(key=key):
            return SortedSet(key=key)
        case EnumLike(domain=domain):
            return DomainSet.none_of(domain)
    raise TypeError(f"Unknown capability: {capability!r}")
