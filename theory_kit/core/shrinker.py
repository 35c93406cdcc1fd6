"""
Trace-based shrinking.

The shrinker never asks a generator how to shrink. It edits the recorded
trace of a falsifying value, replays the edited trace through the same
generator and keeps the result when it still falsifies the property and its
trace is simpler than the current one.
"""

import logging
from collections.abc import Iterator, Sequence
from typing import Generic, Protocol, TypeVar

from ..domain.precursor import Precursor
from ..domain.results import GeneratedValue
from ..utilities.constants import SHRINK_RANDOM_MOVES, AttemptsExhaustedError
from .distribution import generate_with
from .property import Property
from .strategy import Strategy
from .types import PseudoRandom

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ShrinkStrategy(Protocol):
    """Proposes candidate traces derived from a falsifying trace."""

    def candidates(self, prng: PseudoRandom, precursor: Precursor) -> Iterator[list[int]]: ...


def _towards(value: int, target: int) -> list[int]:
    """Values between ``value`` and ``target``: the target, the midpoint, one step closer."""
    distance = value - target
    if distance == 0:
        return []
    half = distance // 2 if distance > 0 else -((-distance) // 2)
    step = value - 1 if distance > 0 else value + 1
    moves: list[int] = []
    for move in (target, target + half, step):
        if move != value and move not in moves:
            moves.append(move)
    return moves


class TargetedShrink:
    """
    Deterministic candidates first, then a run of random moves.

    Candidates, in order:
    - the trace with its trailing half dropped, then with its last draw dropped
    - per position, the value moved to its shrink target, half way there,
      then one step closer
    - ``random_moves`` random moves of a single position towards its shrink
      target, or anywhere in its range when it has none; a move that leaves
      the trace unchanged is retried as two moves
    """

    def __init__(self, random_moves: int = SHRINK_RANDOM_MOVES):
        self.random_moves = random_moves

    def candidates(self, prng: PseudoRandom, precursor: Precursor) -> Iterator[list[int]]:
        values = precursor.current()
        if not values:
            return

        if len(values) > 1:
            yield values[: len(values) // 2]
        yield values[:-1]

        for index, value in enumerate(values):
            target = precursor.shrink_target(index)
            if target is None:
                continue
            for move in _towards(value, target):
                candidate = list(values)
                candidate[index] = move
                yield candidate

        for _ in range(self.random_moves):
            candidate = self.random_move(prng, precursor)
            if candidate == values:
                candidate = self.random_move(prng, precursor, candidate)
                candidate = self.random_move(prng, precursor, candidate)
            yield candidate

    @staticmethod
    def random_move(
        prng: PseudoRandom, precursor: Precursor, values: list[int] | None = None
    ) -> list[int]:
        """Move one random position of ``values`` (default: the trace) towards its target."""
        values = precursor.current() if values is None else list(values)
        index = prng.next_int(0, len(values) - 1)
        current = values[index]
        target = precursor.shrink_target(index)
        if target is None:
            # Equal-sized values still need varying, e.g. choices between commands
            target = prng.next_long(precursor.min(index), precursor.max(index))
        if current != target:
            values[index] = prng.next_long(min(current, target), max(current, target))
        return values


class Shrinker(Generic[T]):
    """
    Searches for a simpler falsifying value within a replay budget.

    A candidate replaces the current value when:
    - it has not been tried before
    - its replay hit no more failed assumptions than the current value
    - the property still fails for it
    - its trace is strictly simpler (shorter, then closer to shrink targets)

    Each cycle takes the first accepted candidate. Shrinking stops when the
    budget of ``strategy.shrink_cycles`` replays is spent or a whole cycle,
    random moves included, finds nothing better.
    """

    def __init__(
        self,
        strategy: Strategy,
        prop: Property[T],
        shrink_strategy: ShrinkStrategy | None = None,
    ):
        self._strategy = strategy
        self._prop = prop
        self._shrink_strategy = shrink_strategy or TargetedShrink()
        self.smallest_cause: BaseException | None = None

    def shrink(self, falsified: GeneratedValue[T]) -> list[T]:
        """
        Shrink a falsifying value.

        Args:
            falsified: The first falsifying value and its trace

        Returns:
            Accepted falsifying values in the order found, smallest last
        """
        current = falsified
        found: list[T] = []
        tried: set[tuple[int, ...]] = {tuple(current.precursor.current())}
        budget = self._strategy.shrink_cycles
        replays = 0

        try:
            while replays < budget and not current.precursor.is_empty():
                accepted = None
                for candidate in self._shrink_strategy.candidates(
                    self._strategy.prng, current.precursor
                ):
                    if replays >= budget:
                        break
                    key = tuple(candidate)
                    if key in tried:
                        continue
                    tried.add(key)
                    replays += 1
                    accepted = self._try_candidate(candidate, current)
                    if accepted is not None:
                        break

                if accepted is None:
                    break
                current = accepted
                found.append(accepted.value)
                logger.debug(f"Shrunk to trace {current.precursor.current()}")
        except AttemptsExhaustedError:
            logger.warning(
                f"Ran out of generation attempts after {replays} shrink replays, "
                f"keeping {len(found)} shrunk value(s)"
            )

        logger.info(f"Shrinking finished after {replays} replays with {len(found)} improvement(s)")
        return found

    def _try_candidate(
        self, candidate: Sequence[int], current: GeneratedValue[T]
    ) -> GeneratedValue[T] | None:
        try:
            replay = generate_with(self._strategy, self._prop.gen, candidate)
        except AttemptsExhaustedError:
            raise
        except Exception as e:
            logger.debug(f"Discarding shrink candidate {list(candidate)}: {e!r}")
            return None

        if replay.failed_assumptions > current.failed_assumptions:
            return None

        falsification = self._prop.try_falsification(replay.value)
        if falsification is None:
            return None

        # Traces may grow while the property runs, so compare afterwards
        if not replay.precursor.simpler_than(current.precursor):
            return None

        self.smallest_cause = falsification.cause
        return replay
