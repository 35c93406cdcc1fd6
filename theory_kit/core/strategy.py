"""
Strategy value object bundling every knob of a theory run.
"""

from dataclasses import dataclass, replace

from ..utilities.constants import (
    DEFAULT_MAX_STATEFUL_STEPS,
    DEFAULT_MIN_STATEFUL_STEPS,
    ConfigurationError,
)
from .guidance import no_guidance
from .prng import XorShiftPRNG
from .types import Guidance, GuidanceFactory, PseudoRandom, Reporter


@dataclass(frozen=True)
class Strategy:
    """
    Immutable run configuration.

    Every ``with_*`` method returns a new Strategy; values are validated on
    construction so a bad configuration fails before any example runs.
    ``examples`` may be -1 for an unlimited run bounded only by
    ``testing_time_millis``.
    """

    prng: PseudoRandom
    examples: int
    shrink_cycles: int
    generate_attempts: int
    reporter: Reporter
    guidance_factory: GuidanceFactory = no_guidance
    testing_time_millis: int = 0
    min_stateful_steps: int = DEFAULT_MIN_STATEFUL_STEPS
    max_stateful_steps: int = DEFAULT_MAX_STATEFUL_STEPS

    def __post_init__(self):
        """Validate run sizes."""
        if self.examples < -1 or self.examples == 0:
            raise ConfigurationError(f"Examples must be positive or -1, got: {self.examples}")
        if self.shrink_cycles < 0:
            raise ConfigurationError(f"Shrink cycles cannot be negative, got: {self.shrink_cycles}")
        if self.generate_attempts < 0:
            raise ConfigurationError(
                f"Generate attempts cannot be negative, got: {self.generate_attempts}"
            )
        if self.min_stateful_steps < 0:
            raise ConfigurationError(
                f"Minimum stateful steps cannot be negative, got: {self.min_stateful_steps}"
            )
        if self.max_stateful_steps < 0:
            raise ConfigurationError(
                f"Maximum stateful steps cannot be negative, got: {self.max_stateful_steps}"
            )

    def validate(self) -> None:
        """
        Check settings that depend on each other.

        Run when a check starts, so ``with_*`` calls can be chained in any order.

        Raises:
            ConfigurationError: If the combined settings cannot produce a run
        """
        if self.examples == -1 and self.testing_time_millis <= 0:
            raise ConfigurationError("Unlimited examples require a positive testing time")
        if self.max_stateful_steps < self.min_stateful_steps:
            raise ConfigurationError(
                f"Maximum stateful steps {self.max_stateful_steps} is below "
                f"minimum {self.min_stateful_steps}"
            )

    @property
    def seed(self) -> int:
        return self.prng.initial_seed

    def with_fixed_seed(self, seed: int) -> "Strategy":
        return replace(self, prng=XorShiftPRNG(seed))

    def with_examples(self, examples: int) -> "Strategy":
        return replace(self, examples=examples)

    def with_unlimited_examples(self) -> "Strategy":
        return replace(self, examples=-1)

    def with_shrink_cycles(self, shrink_cycles: int) -> "Strategy":
        return replace(self, shrink_cycles=shrink_cycles)

    def with_generate_attempts(self, generate_attempts: int) -> "Strategy":
        return replace(self, generate_attempts=generate_attempts)

    def with_testing_time(self, seconds: float) -> "Strategy":
        """Bound the search by wall-clock time; zero or less removes the bound."""
        return replace(self, testing_time_millis=max(0, int(seconds * 1000)))

    def with_unlimited_testing_time(self) -> "Strategy":
        return replace(self, testing_time_millis=0)

    def with_min_stateful_steps(self, steps: int) -> "Strategy":
        return replace(self, min_stateful_steps=steps)

    def with_max_stateful_steps(self, steps: int) -> "Strategy":
        return replace(self, max_stateful_steps=steps)

    def with_guidance(self, factory: GuidanceFactory) -> "Strategy":
        return replace(self, guidance_factory=factory)

    def with_reporter(self, reporter: Reporter) -> "Strategy":
        return replace(self, reporter=reporter)

    def guidance(self) -> Guidance:
        """Build a fresh guidance instance for one check."""
        return self.guidance_factory(self.prng)
