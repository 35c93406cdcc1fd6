"""
Generator combinators.

A Gen turns a RandomnessSource into a value. Because every draw goes through
the source, any composition of generators can be replayed and shrunk by
editing the recorded trace, without generators knowing how to shrink.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..domain.constraint import Constraint
from .types import RandomnessSource

T = TypeVar("T")
R = TypeVar("R")


def default_as_string(value: Any) -> str:
    if value is None:
        return "None"
    return str(value)


class Gen(Generic[T]):
    """Composable, replayable value generator."""

    def __init__(
        self,
        generator: Callable[[RandomnessSource], T],
        describer: Callable[[T], str] | None = None,
    ):
        self._generator = generator
        self._describer = describer

    def generate(self, source: RandomnessSource) -> T:
        return self._generator(source)

    def as_string(self, value: T) -> str:
        """Render a generated value for failure reports."""
        if self._describer is None:
            return default_as_string(value)
        return self._describer(value)

    def described_as(self, describer: Callable[[T], str]) -> "Gen[T]":
        return Gen(self._generator, describer)

    def map(self, mapper: Callable[[T], R]) -> "Gen[R]":
        return Gen(lambda source: mapper(self.generate(source)))

    def map2(self, mapper: Callable[[T, T], R]) -> "Gen[R]":
        """Map two successive draws of this generator into one value."""
        return Gen(lambda source: mapper(self.generate(source), self.generate(source)))

    def map3(self, mapper: Callable[[T, T, T], R]) -> "Gen[R]":
        return Gen(
            lambda source: mapper(
                self.generate(source), self.generate(source), self.generate(source)
            )
        )

    def mutate(self, mod: Callable[[T, RandomnessSource], R]) -> "Gen[R]":
        """Map a value with access to the source, allowing further draws."""
        return Gen(lambda source: mod(self.generate(source), source))

    def flat_map(self, mapper: Callable[[T], "Gen[R]"]) -> "Gen[R]":
        return Gen(lambda source: mapper(self.generate(source)).generate(source))

    def zip(self, other: "Gen[Any]", mapping: Callable[[T, Any], R]) -> "Gen[R]":
        return Gen(lambda source: mapping(self.generate(source), other.generate(source)))

    def zip3(
        self, b: "Gen[Any]", c: "Gen[Any]", mapping: Callable[[T, Any, Any], R]
    ) -> "Gen[R]":
        return Gen(
            lambda source: mapping(
                self.generate(source), b.generate(source), c.generate(source)
            )
        )

    def assuming(self, predicate: Callable[[T], bool]) -> "Gen[T]":
        """
        Filter generated values.

        Each attempt runs against a detached checkpoint of the source.
        Accepted attempts keep their draws; rejected attempts are rolled back
        so they leave no trace, and are counted against the source's attempt
        budget, which ends the loop by raising AttemptsExhaustedError.

        Args:
            predicate: Condition every produced value must satisfy

        Returns:
            Generator that only yields values satisfying ``predicate``
        """

        def generate_filtered(source: RandomnessSource) -> T:
            while True:
                detached = source.detach()
                value = self.generate(detached)
                if predicate(value):
                    detached.commit()
                    return value
                detached.rollback()
                detached.register_failed_assumption()

        return Gen(generate_filtered, self._describer)

    def mix(self, other: "Gen[T]", weight: int | None = None) -> "Gen[T]":
        """
        Choose between this generator and ``other`` for each value.

        Without a weight one draw from [0, 1] picks the side, so shrinking
        prefers this generator. With a weight, one draw from [0, 99] picks
        ``other`` when it falls below ``weight``, so weights of 0 or less never
        pick it and weights of 100 or more always do.
        """
        if weight is None:

            def pick_side(source: RandomnessSource) -> T:
                if source.next(Constraint.zero_to_one()) == 0:
                    return self.generate(source)
                return other.generate(source)

            return Gen(pick_side)

        def pick_weighted(source: RandomnessSource) -> T:
            picked = source.next(Constraint.between(0, 99))
            if picked < weight:
                return other.generate(source)
            return self.generate(source)

        return Gen(pick_weighted)

    def to_optionals(self, percent_empty: int) -> "Gen[T | None]":
        """Yield ``None`` for roughly ``percent_empty`` percent of values."""

        def to_optional(value: T, source: RandomnessSource) -> T | None:
            if source.next(Constraint.between(0, 100)) < percent_empty:
                return None
            return value

        return self.mutate(to_optional)
