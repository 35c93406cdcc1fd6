"""
Replayable randomness sources.

A ShapedDataSource answers generator draws from a forced trace first and the
PRNG afterwards, recording every answer into a Precursor. Detached views let
filters try a candidate and discard its draws when the candidate is rejected.
"""

import logging
from collections.abc import Sequence

from ..domain.constraint import Constraint
from ..domain.precursor import Precursor
from ..utilities.constants import DEFAULT_GENERATE_ATTEMPTS, AttemptsExhaustedError
from .types import PseudoRandom

logger = logging.getLogger(__name__)


class ShapedDataSource:
    """
    Randomness source shaped by an optional forced trace.

    Forced values are consumed in order while they fit the requested
    constraint. A forced value that falls outside the constraint is left in
    place and the draw is answered by the PRNG instead.
    """

    def __init__(
        self,
        prng: PseudoRandom,
        forced: Sequence[int] = (),
        max_tries: int = DEFAULT_GENERATE_ATTEMPTS,
    ):
        self._prng = prng
        self._forced = list(forced)
        self._forced_index = 0
        self._max_tries = max_tries
        self._failed_assumptions = 0
        self._precursor = Precursor()

    @property
    def captured_precursor(self) -> Precursor:
        return self._precursor

    @property
    def failed_assumptions(self) -> int:
        return self._failed_assumptions

    def next(self, constraint: Constraint) -> int:
        value = self._try_next(constraint)
        self._precursor.store(constraint, value)
        return value

    def detach(self) -> "DetachedSource":
        return DetachedSource(self)

    def register_failed_assumption(self) -> None:
        """
        Record a rejected candidate.

        Raises:
            AttemptsExhaustedError: Once the rejection budget is used up
        """
        self._failed_assumptions += 1
        if self._max_tries - self._failed_assumptions <= 0:
            logger.debug(f"Rejection budget of {self._max_tries} used up")
            raise AttemptsExhaustedError(self._failed_assumptions)

    def _try_next(self, constraint: Constraint) -> int:
        if self._forced_index < len(self._forced):
            forced = self._forced[self._forced_index]
            if constraint.allowed(forced):
                self._forced_index += 1
                return forced
        return self._prng.next_long(constraint.min, constraint.max)


class DetachedSource:
    """
    Checkpoint over a ShapedDataSource.

    Draws go straight into the owner's trace; the checkpoint remembers the
    trace length at creation so ``rollback`` can discard them again.
    ``commit`` keeps them and needs no work.
    """

    def __init__(self, owner: ShapedDataSource):
        self._owner = owner
        self._mark = len(owner.captured_precursor)

    def next(self, constraint: Constraint) -> int:
        return self._owner.next(constraint)

    def detach(self) -> "DetachedSource":
        return DetachedSource(self._owner)

    def register_failed_assumption(self) -> None:
        self._owner.register_failed_assumption()

    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        self._owner.captured_precursor.truncate(self._mark)
