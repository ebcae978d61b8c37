"""
Counting helpers used to cross-check enumerations. The enumeration engine
never calls them.
"""

import math
from fractions import Fraction
from typing import List


def comb(m: int, n: int) -> int:
    """
    The number of ways to choose n out of m elements, i.e. the number of
    subsets of size n of a set of size m.
    """
    if m < 0 or n < 0 or n > m:
        raise ValueError(f"Invalid arguments for comb: m={m}, n={n} (need 0 <= n <= m)")
    return math.comb(m, n)


def size_counts(m: int) -> List[int]:
    """Number of subsets of each size 0..m of a set of m elements."""
    if m < 0:
        raise ValueError(f"Invalid set size: {m}")
    return [comb(m, n) for n in range(m + 1)]


def size_fractions(m: int) -> List[Fraction]:
    """Exact share of the 2^m subsets that have each size 0..m."""
    counts = size_counts(m)
    total = 1 << m
    return [Fraction(c, total) for c in counts]
