"""
Search core: finds a falsifying value, then shrinks it.
"""

import itertools
import logging
import time
import zlib
from collections import deque
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from ..domain.results import Falsification, GeneratedValue, SearchResult
from ..utilities.constants import AttemptsExhaustedError
from .distribution import BoundarySkewedDistribution, ForcedDistribution
from .property import Property
from .shrinker import Shrinker
from .strategy import Strategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Core(Generic[T]):
    """
    Runs one property search.

    Values come from a boundary-skewed distribution, with any traces proposed
    by guidance visited first. Values whose trace fingerprint was already
    seen are skipped without counting as examples.
    """

    def __init__(self, strategy: Strategy, clock: Callable[[], float] = time.monotonic):
        self._strategy = strategy
        self._clock = clock
        self._examples_used = 0
        self._visited: set[int] = set()

    @property
    def examples_used(self) -> int:
        return self._examples_used

    def run(self, prop: Property[T]) -> SearchResult[T]:
        """
        Search for and shrink a falsifying value.

        Returns:
            SearchResult with falsifying values ordered smallest first, or
            flagged as exhausted when generation ran out of attempts
        """
        falsifying: list[T] = []
        cause: BaseException | None = None
        try:
            found = self.find_falsifying_value(prop)
            if found is not None:
                falsification, generated = found
                falsifying.append(falsification.value)
                cause = falsification.cause
                logger.info(f"Property falsified after {self._examples_used} example(s), shrinking")
                shrinker = Shrinker(self._strategy, prop)
                shrunk = shrinker.shrink(generated)
                if shrunk:
                    falsifying.extend(shrunk)
                    cause = shrinker.smallest_cause
        except AttemptsExhaustedError:
            logger.info(f"Generation attempts exhausted after {self._examples_used} example(s)")
            return SearchResult(True, self._examples_used)

        falsifying.reverse()
        return SearchResult(False, self._examples_used, falsifying, cause)

    def find_falsifying_value(
        self, prop: Property[T]
    ) -> tuple[Falsification[T], GeneratedValue[T]] | None:
        guidance = self._strategy.guidance()
        distribution = BoundarySkewedDistribution(self._strategy, prop.gen)
        to_visit: deque[list[int]] = deque()
        start = self._clock()

        for execution in self._executions():
            if execution > 0 and self._out_of_time(start):
                logger.debug(f"Testing time used up after {self._examples_used} example(s)")
                break

            if to_visit:
                forced = to_visit.popleft()
                generated = ForcedDistribution(self._strategy, prop.gen, forced).generate()
            else:
                generated = distribution.generate()

            if self._already_visited(generated):
                continue

            self._examples_used += 1
            guidance.new_example(generated.precursor)
            falsification = prop.try_falsification(generated.value)
            guidance.example_executed()

            if falsification is not None:
                return falsification, generated

            suggestions = guidance.suggest_values(execution, generated.precursor)
            to_visit.extend(list(trace) for trace in suggestions)
            guidance.example_complete()

        return None

    def _executions(self) -> Iterable[int]:
        if self._strategy.examples < 0:
            return itertools.count()
        return range(self._strategy.examples)

    def _out_of_time(self, start: float) -> bool:
        limit = self._strategy.testing_time_millis
        if limit <= 0:
            return False
        return (self._clock() - start) * 1000 >= limit

    def _already_visited(self, generated: GeneratedValue[T]) -> bool:
        fingerprint = zlib.crc32(generated.precursor.bytes())
        if fingerprint in self._visited:
            return True
        self._visited.add(fingerprint)
        return False
