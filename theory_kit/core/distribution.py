"""
Distributions deciding which trace, if any, shapes the next generated value.
"""

from collections import deque
from collections.abc import Sequence
from typing import Generic, TypeVar

from ..domain.results import GeneratedValue
from .data_source import ShapedDataSource
from .gen import Gen
from .strategy import Strategy

T = TypeVar("T")


def generate_with(strategy: Strategy, gen: Gen[T], forced: Sequence[int] = ()) -> GeneratedValue[T]:
    """Generate one value through a fresh ShapedDataSource and capture its trace."""
    source = ShapedDataSource(strategy.prng, forced, strategy.generate_attempts)
    value = gen.generate(source)
    return GeneratedValue(source.captured_precursor, source.failed_assumptions, value)


class RandomDistribution(Generic[T]):
    """Purely random generation, never forced."""

    def __init__(self, strategy: Strategy, gen: Gen[T]):
        self._strategy = strategy
        self._gen = gen

    def generate(self) -> GeneratedValue[T]:
        return generate_with(self._strategy, self._gen)


class ForcedDistribution(Generic[T]):
    """Generation forced by one trace; draws past its end fall back to the PRNG."""

    def __init__(self, strategy: Strategy, gen: Gen[T], forced: Sequence[int]):
        self._strategy = strategy
        self._gen = gen
        self._forced = list(forced)

    def generate(self) -> GeneratedValue[T]:
        return generate_with(self._strategy, self._gen, self._forced)


class BoundarySkewedDistribution(Generic[T]):
    """
    Visits likely boundaries before switching to random generation.

    On construction one unforced value is generated as a reference. Its trace
    yields three forced traces visited in order: every draw at its shrink
    target, every draw at its minimum, every draw at its maximum.
    """

    def __init__(self, strategy: Strategy, gen: Gen[T]):
        self._strategy = strategy
        self._gen = gen
        self._to_visit: deque[list[int]] = self._find_boundaries()

    @property
    def pending(self) -> int:
        return len(self._to_visit)

    def generate(self) -> GeneratedValue[T]:
        forced = self._to_visit.popleft() if self._to_visit else []
        return generate_with(self._strategy, self._gen, forced)

    def _find_boundaries(self) -> deque[list[int]]:
        reference = generate_with(self._strategy, self._gen).precursor
        return deque(
            [
                reference.shrink_target_trace(),
                reference.min_limit(),
                reference.max_limit(),
            ]
        )
