"""
Enumerate every subset of a collection of at most 62 elements, one at a time,
as a list, or in parallel over splittable position ranges.
"""

from python_subsets.capability import Capability, EnumLike, Ordered, Unordered, detect
from python_subsets.domain_set import DomainSet
from python_subsets.errors import (
    DuplicateElements, ExhaustedError, ListTooLarge, NullInput, SizeExceeded,
    SubsetsError, TraversalConsumed
)
from python_subsets.subsets import (
    MAX_LIST_SIZE, MAX_SIZE, Characteristics, SubsetIterator, SubsetRange, Subsets, decode
)
from python_subsets.traversal import Traversal

__all__ = [
    "Subsets",
    "SubsetIterator",
    "SubsetRange",
    "Traversal",
    "Characteristics",
    "decode",
    "MAX_SIZE",
    "MAX_LIST_SIZE",
    "Capability",
    "Unordered",
    "Ordered",
    "EnumLike",
    "detect",
    "DomainSet",
    "SubsetsError",
    "SizeExceeded",
    "NullInput",
    "DuplicateElements",
    "ExhaustedError",
    "ListTooLarge",
    "TraversalConsumed",
]
