import time
import logging
from contextlib import contextmanager
from typing import Dict, List, Iterator

_TIMINGS: Dict[str, List[float]] = {}


def iter_set_bits(value: int) -> Iterator[int]:
    """
    Yield the indices of the bits set in `value`, lowest first. E.g. for 24,
    yields 3 and then 4.
    """
    if value < 0:
        raise ValueError("Negative values are not supported")
    while value:
        lowest = value & -value
        yield lowest.bit_length() - 1
        value ^= lowest


@contextmanager
def timed(label: str) -> Iterator[None]:
    """
    Context manager that measures the execution time of the enclosed block,
    logs the duration, and stores the sample in _TIMINGS.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        dur = time.perf_counter() - start
        logging.getLogger(__name__).info("%s took %.3f s", label, dur)
        _TIMINGS.setdefault(label, []).append(dur)


def timings() -> Dict[str, List[float]]:
    """Return all collected timing samples."""
    return _TIMINGS
