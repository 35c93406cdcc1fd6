"""
Search guidance.

Guidance observes each executed example and may propose extra forced traces
that the search visits before returning to pure random generation. The
default guidance proposes nothing.
"""

import logging
from collections.abc import Collection, Sequence

from ..domain.precursor import Precursor
from .types import Guidance, GuidanceFactory, PseudoRandom

logger = logging.getLogger(__name__)


class NoGuidance:
    """Guidance that observes nothing and suggests nothing."""

    def new_example(self, precursor: Precursor) -> None:
        pass

    def example_executed(self) -> None:
        pass

    def suggest_values(self, execution: int, precursor: Precursor) -> Collection[Sequence[int]]:
        return []

    def example_complete(self) -> None:
        pass


def no_guidance(prng: PseudoRandom) -> Guidance:
    return NoGuidance()


class GuidanceRegistry:
    """
    Explicit registry selecting the default guidance factory.

    The first registered factory wins; later registrations are ignored.
    With nothing registered, ``NoGuidance`` is used.
    """

    def __init__(self):
        self._factory: GuidanceFactory | None = None

    def register(self, factory: GuidanceFactory) -> bool:
        """
        Register a guidance factory.

        Args:
            factory: Callable building a fresh Guidance for one check

        Returns:
            True if the factory became the default, False if one was already set
        """
        if self._factory is not None:
            logger.warning(
                f"Guidance factory {factory!r} ignored, {self._factory!r} already registered"
            )
            return False
        self._factory = factory
        logger.debug(f"Registered guidance factory {factory!r}")
        return True

    def factory(self) -> GuidanceFactory:
        if self._factory is None:
            return no_guidance
        return self._factory

    def clear(self) -> None:
        self._factory = None
