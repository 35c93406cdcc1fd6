"""
Runs a property against a generator and reports the outcome.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..domain.results import SearchResult
from .gen import Gen
from .property import Property
from .search import Core
from .strategy import Strategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TheoryRunner(Generic[T]):
    """
    Checks one property under a Strategy.

    Falsifications and exhausted searches are handed to the strategy's
    reporter, which decides how the caller learns about them.
    """

    def __init__(
        self,
        strategy: Strategy,
        gen: Gen[T],
        to_string: Callable[[T], str] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._strategy = strategy
        self._gen = gen
        self._to_string = to_string or gen.as_string
        self._clock = clock

    def check(self, predicate: Callable[[T], bool]) -> None:
        """
        Check that ``predicate`` holds for generated values.

        Args:
            predicate: Property to test; raising counts as returning False

        Raises:
            ConfigurationError: If the strategy settings are inconsistent
        """
        result = self.run_search(predicate)
        if result.is_falsified:
            self._report_falsification(result)
        elif result.exhausted:
            self._strategy.reporter.values_exhausted(result.executed_examples)

    def run_search(self, predicate: Callable[[T], bool]) -> SearchResult[T]:
        self._strategy.validate()
        logger.debug(
            f"Checking property with seed {self._strategy.seed} "
            f"over {self._strategy.examples} example(s)"
        )
        core: Core[T] = Core(self._strategy, self._clock)
        return core.run(Property(predicate, self._gen))

    def _report_falsification(self, result: SearchResult[T]) -> None:
        others: list[Any] = list(result.others)
        self._strategy.reporter.falsification(
            self._strategy.seed,
            result.executed_examples,
            result.smallest,
            result.smallest_cause,
            others,
            self._to_string,
        )
