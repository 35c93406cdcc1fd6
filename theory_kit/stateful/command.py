"""
Command protocol shared by sequential and parallel model checking.
"""

from typing import Protocol, TypeVar, runtime_checkable

SUT = TypeVar("SUT", contravariant=True)
M = TypeVar("M")


@runtime_checkable
class Command(Protocol[SUT, M]):
    """An operation applied both to a live system and to its model.

    ``next_state`` must be pure: it is called many times while enumerating
    orderings and must not touch the live system.
    """

    def run(self, sut: SUT) -> None: ...

    def next_state(self, state: M) -> M: ...
