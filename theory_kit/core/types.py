"""
Shared protocol types for structural typing across the engine.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence
from typing import Any, Protocol, runtime_checkable

from ..domain.constraint import Constraint
from ..domain.precursor import Precursor


@runtime_checkable
class PseudoRandom(Protocol):
    """Seeded source of 64-bit pseudo random values."""

    @property
    def initial_seed(self) -> int: ...

    def next_long(self, start: int | None = None, end: int | None = None) -> int: ...

    def next_int(self, start: int, end: int) -> int: ...


@runtime_checkable
class RandomnessSource(Protocol):
    """Source of constrained draws handed to generators.

    Generators only ever see this contract, which lets the engine record,
    force and replay every draw without generator cooperation.
    """

    def next(self, constraint: Constraint) -> int: ...

    def detach(self) -> DetachedSource: ...

    def register_failed_assumption(self) -> None: ...


@runtime_checkable
class DetachedSource(RandomnessSource, Protocol):
    """Checkpointed view of a source whose draws can be kept or discarded."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class Guidance(Protocol):
    """Observer that can steer the search towards interesting inputs."""

    def new_example(self, precursor: Precursor) -> None: ...

    def example_executed(self) -> None: ...

    def suggest_values(self, execution: int, precursor: Precursor) -> Collection[Sequence[int]]: ...

    def example_complete(self) -> None: ...


GuidanceFactory = Callable[[PseudoRandom], Guidance]


@runtime_checkable
class Reporter(Protocol):
    """Receives the outcome of a theory run."""

    def falsification(
        self,
        seed: int,
        examples_used: int,
        smallest: Any,
        cause: BaseException | None,
        others: list[Any],
        to_string: Callable[[Any], str],
    ) -> None: ...

    def values_exhausted(self, examples_used: int) -> None: ...
