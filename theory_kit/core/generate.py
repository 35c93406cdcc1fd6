"""
Primitive generators built directly on constrained draws.
"""

import bisect
import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from ..domain.constraint import Constraint
from .gen import Gen, default_as_string
from .types import RandomnessSource

T = TypeVar("T")


def constant(value: T | Callable[[], T]) -> Gen[T]:
    """Generator that never draws; callables are invoked per value."""
    if callable(value):
        return Gen(lambda source: value())
    return Gen(lambda source: value)


def range_(start: int, end: int, shrink_target: int = 0) -> Gen[int]:
    constraint = Constraint.between(start, end).with_shrink_point(shrink_target)
    return Gen(lambda source: source.next(constraint))


def long_range(start: int, end: int, shrink_target: int = 0) -> Gen[int]:
    return range_(start, end, shrink_target)


def range_with_no_shrink_point(start: int, end: int) -> Gen[int]:
    constraint = Constraint.between(start, end).with_no_shrink_point()
    return Gen(lambda source: source.next(constraint))


def pick(values: Sequence[T]) -> Gen[T]:
    """Choose an element, shrinking towards the first one."""
    if not values:
        raise ValueError("Cannot pick from an empty sequence")
    items = list(values)
    return range_(0, len(items) - 1).map(lambda index: items[index])


def pick_with_no_shrink_point(values: Sequence[T]) -> Gen[T]:
    if not values:
        raise ValueError("Cannot pick from an empty sequence")
    items = list(values)
    return range_with_no_shrink_point(0, len(items) - 1).map(lambda index: items[index])


def one_of(first: Gen[T], *others: Gen[T]) -> Gen[T]:
    generators = [first, *others]
    index = range_(0, len(generators) - 1)
    return Gen(lambda source: generators[index.generate(source)].generate(source))


def booleans() -> Gen[bool]:
    return pick([False, True])


def frequency(weighted: Sequence[tuple[int, Gen[T]]]) -> Gen[T]:
    """
    Choose among generators in proportion to their weights.

    Args:
        weighted: (weight, generator) pairs; non-positive weights are ignored

    Raises:
        ValueError: If no pairs are given or no weight is positive
    """
    return _frequency(weighted, shrink=True)


def frequency_with_no_shrink_point(weighted: Sequence[tuple[int, Gen[T]]]) -> Gen[T]:
    return _frequency(weighted, shrink=False)


def _frequency(weighted: Sequence[tuple[int, Gen[T]]], shrink: bool) -> Gen[T]:
    if not weighted:
        raise ValueError("List of generators must not be empty")

    positive = [(weight, gen) for weight, gen in weighted if weight > 0]
    if not positive:
        raise ValueError("At least one generator must have a positive weight")

    total = sum(weight for weight, _ in positive)
    common = math.gcd(total, *(weight for weight, _ in positive))

    # Each generator owns the slots from its start up to the next start
    starts: list[int] = []
    generators: list[Gen[T]] = []
    next_start = 0
    for weight, gen in positive:
        starts.append(next_start)
        generators.append(gen)
        next_start += weight // common

    upper = total // common - 1
    index = range_(0, upper) if shrink else range_with_no_shrink_point(0, upper)

    def choose(source: RandomnessSource) -> T:
        slot = index.generate(source)
        return generators[bisect.bisect_right(starts, slot) - 1].generate(source)

    return Gen(choose, generators[0].as_string)


def lists_of(values: Gen[T], sizes: Gen[int]) -> Gen[list[T]]:
    """Lists whose length is drawn from ``sizes`` before their elements."""

    def generate_list(source: RandomnessSource) -> list[T]:
        size = sizes.generate(source)
        return [values.generate(source) for _ in range(size)]

    return Gen(generate_list, lambda items: _describe_items(values, items))


def tuples_of(*generators: Gen[Any]) -> Gen[tuple]:
    """Draw one value from each generator, in order."""

    def generate_tuple(source: RandomnessSource) -> tuple:
        return tuple(gen.generate(source) for gen in generators)

    def describe(values: tuple) -> str:
        return ", ".join(gen.as_string(value) for gen, value in zip(generators, values))

    return Gen(generate_tuple, describe)


def _describe_items(values: Gen[T], items: list[T] | None) -> str:
    if items is None:
        return default_as_string(items)
    return "[" + ", ".join(values.as_string(item) for item in items) + "]"
