"""
Entry point for writing theories.

``qt()`` starts from the system strategy; ``with_*`` calls adjust it and
``for_all`` binds generators to a property::

    qt().with_examples(200).for_all(range_(0, 100), range_(0, 100)).check(
        lambda a, b: a + b == b + a
    )
"""

from collections.abc import Callable, Hashable
from typing import Any

from ..config.configuration import system_strategy
from ..config.profiles import ProfileRegistry
from ..core.gen import Gen
from ..core.generate import tuples_of
from ..core.strategy import Strategy
from ..core.theory_runner import TheoryRunner
from ..core.types import GuidanceFactory, Reporter
from ..stateful.stateful_core import StatefulCore
from ..stateful.stateful_theory import StatefulTheory
from ..utilities.constants import STATEFUL_GENERATE_ATTEMPTS

StrategySupplier = Callable[[], Strategy]


class QuickTheory:
    """
    Lazily configured theory entry point.

    The strategy is only built when a check runs, so environment settings
    and profiles are resolved at that point.
    """

    def __init__(self, state: StrategySupplier):
        self._state = state

    def _adjusted(self, adjust: Callable[[Strategy], Strategy]) -> "QuickTheory":
        state = self._state
        return QuickTheory(lambda: adjust(state()))

    def with_registered_profiles(self, registry: ProfileRegistry, scope: Hashable) -> "QuickTheory":
        """Start from the system strategy with ``scope``'s default profile applied, if any."""
        return QuickTheory(lambda: registry.apply_default_profile(scope, system_strategy()))

    def with_profile(self, registry: ProfileRegistry, scope: Hashable, name: str) -> "QuickTheory":
        """Start from the system strategy with a named profile of ``scope`` applied."""
        return QuickTheory(lambda: registry.apply_profile(scope, name, system_strategy()))

    def with_fixed_seed(self, seed: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_fixed_seed(seed))

    def with_examples(self, examples: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_examples(examples))

    def with_unlimited_examples(self) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_unlimited_examples())

    def with_testing_time(self, seconds: float) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_testing_time(seconds))

    def with_unlimited_testing_time(self) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_unlimited_testing_time())

    def with_shrink_cycles(self, shrink_cycles: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_shrink_cycles(shrink_cycles))

    def with_min_stateful_steps(self, steps: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_min_stateful_steps(steps))

    def with_max_stateful_steps(self, steps: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_max_stateful_steps(steps))

    def with_generate_attempts(self, attempts: int) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_generate_attempts(attempts))

    def with_guidance(self, factory: GuidanceFactory) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_guidance(factory))

    def with_reporter(self, reporter: Reporter) -> "QuickTheory":
        return self._adjusted(lambda s: s.with_reporter(reporter))

    def for_all(self, *gens: Gen[Any]) -> "TheoryBuilder":
        """
        Bind generators to a property.

        Args:
            *gens: One generator per property argument

        Raises:
            ValueError: If no generator is given
        """
        if not gens:
            raise ValueError("At least one generator is required")
        return TheoryBuilder(self._state, gens)

    def with_stateful_model(
        self, theory_factory: Callable[[], StatefulTheory[Any]]
    ) -> "StatefulTheoryBuilder":
        return StatefulTheoryBuilder(self._state, theory_factory)

    def stateful(self, theory_factory: Callable[[], StatefulTheory[Any]]) -> None:
        self.with_stateful_model(theory_factory).check_stateful()


class TheoryBuilder:
    """Generators bound to a property, with optional assumptions on their values."""

    def __init__(
        self,
        state: StrategySupplier,
        gens: tuple[Gen[Any], ...],
        assumptions: tuple[Callable[..., bool], ...] = (),
    ):
        self._state = state
        self._gens = gens
        self._assumptions = assumptions

    def assuming(self, assumption: Callable[..., bool]) -> "TheoryBuilder":
        """Only check value combinations for which ``assumption(*values)`` holds."""
        return TheoryBuilder(self._state, self._gens, (*self._assumptions, assumption))

    def check(self, predicate: Callable[..., bool]) -> None:
        """
        Check ``predicate(*values)`` for generated values.

        Raises:
            PropertyFalsifiedError: If a falsifying combination was found
            ValuesExhaustedError: If too few combinations satisfied the assumptions
        """
        combined = self._combined()
        runner = TheoryRunner(self._state(), combined)
        runner.check(lambda values: predicate(*values))

    def check_assert(self, consumer: Callable[..., Any]) -> None:
        """Check that ``consumer(*values)`` never raises, for example through ``assert``."""

        def run_consumer(*values: Any) -> bool:
            consumer(*values)
            return True

        self.check(run_consumer)

    def _combined(self) -> Gen[tuple]:
        combined = tuples_of(*self._gens)
        if not self._assumptions:
            return combined
        assumptions = self._assumptions
        return combined.assuming(lambda values: all(assume(*values) for assume in assumptions))


class StatefulTheoryBuilder(QuickTheory):
    """QuickTheory bound to a stateful model."""

    def __init__(
        self, state: StrategySupplier, theory_factory: Callable[[], StatefulTheory[Any]]
    ):
        super().__init__(state)
        self._theory_factory = theory_factory

    def _adjusted(self, adjust: Callable[[Strategy], Strategy]) -> "StatefulTheoryBuilder":
        state = self._state
        return StatefulTheoryBuilder(lambda: adjust(state()), self._theory_factory)

    def check_stateful(self) -> None:
        """
        Run the stateful theory, shrinking failing step sequences.

        Generation attempts are raised so steps with preconditions can be
        selected reliably.
        """
        strategy = self._state().with_generate_attempts(STATEFUL_GENERATE_ATTEMPTS)
        runner = TheoryRunner(strategy, StatefulCore.generator(self._theory_factory))
        runner.check(lambda core: core.run(strategy))


def qt(strategy: Strategy | StrategySupplier | None = None) -> QuickTheory:
    """
    Start a theory.

    Args:
        strategy: Strategy or strategy supplier, defaults to the system strategy
    """
    if strategy is None:
        return QuickTheory(system_strategy)
    if isinstance(strategy, Strategy):
        return QuickTheory(lambda: strategy)
    return QuickTheory(strategy)
