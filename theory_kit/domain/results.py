"""
Result types produced by generation and search.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .precursor import Precursor

T = TypeVar("T")


@dataclass(frozen=True)
class GeneratedValue(Generic[T]):
    """A generated value together with the trace that produced it."""

    precursor: Precursor
    failed_assumptions: int
    value: T


@dataclass(frozen=True)
class Falsification(Generic[T]):
    """A value that falsified a property, with the exception it raised if any."""

    value: T
    cause: BaseException | None = None


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """
    Outcome of searching for and shrinking a falsifying value.

    ``falsifying_values`` is ordered smallest first.
    """

    exhausted: bool
    executed_examples: int
    falsifying_values: list[T] = field(default_factory=list)
    smallest_cause: BaseException | None = None

    @property
    def is_falsified(self) -> bool:
        return bool(self.falsifying_values)

    @property
    def smallest(self) -> Any:
        if not self.falsifying_values:
            raise ValueError("No falsifying value was found")
        return self.falsifying_values[0]

    @property
    def others(self) -> list[T]:
        return self.falsifying_values[1:]
