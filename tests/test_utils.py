from enum import Enum
from typing import Any, List

from python_subsets.subsets import SubsetRange
from python_subsets.traversal import split_range


class Color(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4


def drain(rng: SubsetRange) -> List[Any]:
    """Advance `rng` one subset at a time until it is exhausted."""
    out: List[Any] = []
    while rng.try_advance(out.append):
        pass
    return out


def drain_positions(rng: SubsetRange) -> List[int]:
    """The positions `rng` still covers, consuming it."""
    positions = []
    while rng.try_advance(lambda _: positions.append(rng.position)):
        pass
    return positions


def split_completely(rng: SubsetRange) -> List[SubsetRange]:
    """Split `rng` until no piece can be split any further."""
    return split_range(rng, threshold=1)


def expected_order(elements: List[Any]) -> List[set]:
    """The subsets of `elements` in the order positions enumerate them."""
    n = len(elements)
    return [{elements[i] for i in range(n) if p >> i & 1} for p in range(1 << n)]
