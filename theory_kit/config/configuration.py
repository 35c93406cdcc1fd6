"""
Builds the system Strategy from environment settings.
"""

from collections.abc import Mapping

from ..core.guidance import GuidanceRegistry
from ..core.prng import XorShiftPRNG
from ..core.strategy import Strategy
from ..core.types import PseudoRandom, Reporter
from ..services.reporter import ExceptionReporter
from .environment import get_environment_config


def default_prng(seed: int) -> PseudoRandom:
    return XorShiftPRNG(seed)


def system_strategy(
    environ: Mapping[str, str] | None = None,
    reporter: Reporter | None = None,
    guidance_registry: GuidanceRegistry | None = None,
) -> Strategy:
    """
    Create the Strategy used when a theory is not given one explicitly.

    Args:
        environ: Environment to read QT_* variables from, defaults to ``os.environ``
        reporter: Reporter to use, defaults to ExceptionReporter
        guidance_registry: Registry supplying the guidance factory, defaults to no guidance

    Raises:
        ConfigurationError: If an environment value is invalid
    """
    env = get_environment_config(environ)
    strategy = Strategy(
        prng=default_prng(env.seed),
        examples=env.examples,
        shrink_cycles=env.shrink_cycles,
        generate_attempts=env.generate_attempts,
        reporter=reporter or ExceptionReporter(),
    )
    if guidance_registry is not None:
        strategy = strategy.with_guidance(guidance_registry.factory())
    return strategy
