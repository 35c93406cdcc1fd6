"""
Drives a stateful theory from inside a property.
"""

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..core.gen import Gen
from ..core.generate import long_range
from ..core.strategy import Strategy
from ..core.types import RandomnessSource
from ..domain.constraint import Constraint
from .stateful_theory import StatefulTheory

logger = logging.getLogger(__name__)

S = TypeVar("S")


class StatefulCore(Generic[S]):
    """
    One generated run of a stateful theory.

    The core keeps the randomness source it was generated from, so the steps
    it draws while running become part of the example's trace and can be
    shrunk like any other draw.
    """

    def __init__(self, source: RandomnessSource, theory: StatefulTheory[S]):
        self._source = source
        self.theory = theory

    @staticmethod
    def generator(theory_factory: Callable[[], StatefulTheory[Any]]) -> Gen["StatefulCore[Any]"]:
        """Generator of cores, each around a fresh theory, described by its step history."""

        def generate_core(source: RandomnessSource) -> StatefulCore[Any]:
            # Consume one draw so traces of otherwise identical cores differ;
            # it has no shrink target so shrinking never moves it alone
            source.next(Constraint.none().with_no_shrink_point())
            return StatefulCore(source, theory_factory())

        return Gen(generate_core, lambda core: core.theory.formatted_history())

    def run(self, strategy: Strategy) -> bool:
        """
        Initialise the theory, run its setup steps, then a drawn number of steps.

        The step count is drawn from
        [strategy.min_stateful_steps, strategy.max_stateful_steps] and shrinks
        towards the minimum. Teardown runs however the run ends.

        Returns:
            False as soon as a step fails, True otherwise
        """
        theory = self.theory
        theory.init()
        try:
            for setup in theory.setup_steps():
                if not theory.execute_step(setup.generate(self._source)):
                    logger.debug("Setup step failed")
                    return False

            minimum = strategy.min_stateful_steps
            step_count = long_range(minimum, strategy.max_stateful_steps, minimum).generate(
                self._source
            )
            for index in range(step_count):
                if not theory.execute_step(theory.steps().generate(self._source)):
                    logger.debug(f"Step {index + 1} of {step_count} failed")
                    return False
        finally:
            theory.teardown()
        return True
