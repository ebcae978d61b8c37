"""
Parallel traversal of a SubsetRange.

The root range is bisected recursively, lower half first, into pieces that
are drained by a thread pool. Partial results are combined in piece order,
which is also position order, but callers should only rely on that order
when the range reports `Characteristics.ORDERED`.
"""

from __future__ import annotations

import functools
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Generic, List, MutableSet, Optional, Sequence, TypeVar

from python_subsets.config import get as get_config
from python_subsets.errors import TraversalConsumed
from python_subsets.subsets import SubsetRange
from python_subsets.utils import timed

T = TypeVar('T')
R = TypeVar('R')
A = TypeVar('A')

Predicate = Callable[[MutableSet[T]], bool]

logger = logging.getLogger(__name__)


def split_range(rng: SubsetRange[T], threshold: int = 1) -> List[SubsetRange[T]]:
    """
    Split `rng` until every piece has at most `threshold` positions or cannot
    be split any more. The pieces are returned in position order and together
    cover exactly the positions `rng` covered.
    """
    if rng.estimate_size() <= threshold:
        return [rng]
    head = rng.try_split()
    if head is None:
        return [rng]
    return split_range(head, threshold) + split_range(rng, threshold)


def _default_workers() -> int:
    # same default as ThreadPoolExecutor
    return min(32, (os.cpu_count() or 1) + 4)


class Traversal(Generic[T]):
    """
    A single-use pipeline over the subsets of a range.

    Intermediate operations (`filter`, `sequential`, `parallel`) return a new
    Traversal and retire this one; terminal operations (`reduce`, `fold`,
    `count`, `collect`, `for_each`) drain the range. Using a retired or
    drained traversal raises TraversalConsumed.
    """

    def __init__(self, root: SubsetRange[T], *, parallel: bool = True,
                 predicates: Sequence[Predicate] = ()) -> None:
        self._root: Optional[SubsetRange[T]] = root
        self._parallel = parallel
        self._predicates = tuple(predicates)

    @property
    def is_parallel(self) -> bool:
        return self._parallel

    def _take_root(self) -> SubsetRange[T]:
        if self._root is None:
            raise TraversalConsumed("This traversal has already been used")
        root, self._root = self._root, None
        return root

    def _accepts(self, subset: MutableSet[T]) -> bool:
        return all(p(subset) for p in self._predicates)

    # -----------------------------------------------------------------------#
    # Intermediate operations
    # -----------------------------------------------------------------------#
    def filter(self, predicate: Predicate) -> Traversal[T]:
        return Traversal(self._take_root(), parallel=self._parallel,
                         predicates=self._predicates + (predicate,))

    def sequential(self) -> Traversal[T]:
        return Traversal(self._take_root(), parallel=False,
                         predicates=self._predicates)

    def parallel(self) -> Traversal[T]:
        return Traversal(self._take_root(), parallel=True,
                         predicates=self._predicates)

    # -----------------------------------------------------------------------#
    # Execution
    # -----------------------------------------------------------------------#
    def _run(self, task: Callable[[SubsetRange[T]], R]) -> List[R]:
        """Apply `task` to every piece of the root range; results in piece order."""
        root = self._take_root()
        if not self._parallel:
            return [task(root)]

        cfg = get_config()
        workers = cfg.workers or _default_workers()
        # aim for about four pieces per worker
        threshold = max(cfg.min_chunk, -(-root.estimate_size() // (workers * 4)))
        pieces = split_range(root, threshold)
        logger.debug("Traversing %d positions in %d pieces with %d workers",
                     sum(p.estimate_size() for p in pieces), len(pieces), workers)
        if len(pieces) == 1:
            return [task(pieces[0])]
        with timed("parallel traversal"):
            with ThreadPoolExecutor(max_workers=min(workers, len(pieces))) as pool:
                return list(pool.map(task, pieces))

    # -----------------------------------------------------------------------#
    # Terminal operations
    # -----------------------------------------------------------------------#
    def reduce(self, identity: A,
               accumulator: Callable[[A, MutableSet[T]], A],
               combiner: Callable[[A, A], A]) -> A:
        """
        Immutable reduction. Each piece is folded from `identity` with
        `accumulator`, and the partial results are merged with `combiner`, so
        `identity` must be neutral for `combiner`.
        """
        def fold_piece(piece: SubsetRange[T]) -> A:
            result = identity
            for subset in piece:
                if self._accepts(subset):
                    result = accumulator(result, subset)
            return result

        return functools.reduce(combiner, self._run(fold_piece), identity)

    def fold(self, supplier: Callable[[], A],
             accumulator: Callable[[A, MutableSet[T]], Any],
             combiner: Callable[[A, A], Any]) -> A:
        """
        Mutable reduction. Every piece gets a fresh container from `supplier`
        that `accumulator` updates in place; `combiner(a, b)` merges b into a.
        """
        def fold_piece(piece: SubsetRange[T]) -> A:
            container = supplier()
            for subset in piece:
                if self._accepts(subset):
                    accumulator(container, subset)
            return container

        partials = self._run(fold_piece)
        result = partials[0]
        for p in partials[1:]:
            combiner(result, p)
        return result

    def count(self, predicate: Optional[Predicate] = None) -> int:
        def count_piece(piece: SubsetRange[T]) -> int:
            return sum(1 for s in piece
                       if self._accepts(s) and (predicate is None or predicate(s)))
        return sum(self._run(count_piece))

    def collect(self) -> List[MutableSet[T]]:
        partials = self._run(lambda piece: [s for s in piece if self._accepts(s)])
        return [s for part in partials for s in part]

    def for_each(self, consumer: Callable[[MutableSet[T]], Any]) -> None:
        """Call `consumer` on every subset; may run on several threads at once."""
        def consume_piece(piece: SubsetRange[T]) -> None:
            for subset in piece:
                if self._accepts(subset):
                    consumer(subset)
        self._run(consume_piece)
