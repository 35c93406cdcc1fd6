"""
Environment-driven run settings.

Reads the QT_* variables once so a CI job can fix the seed or scale a whole
suite without touching test code.
"""

import logging
import os
import time
from collections.abc import Mapping
from dataclasses import dataclass

from ..utilities.constants import (
    DEFAULT_EXAMPLES,
    DEFAULT_GENERATE_ATTEMPTS,
    DEFAULT_SHRINK_MULTIPLIER,
    ENV_ATTEMPTS,
    ENV_EXAMPLES,
    ENV_SEED,
    ENV_SHRINKS,
    ConfigurationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentConfig:
    """Run settings resolved from the environment."""

    seed: int
    examples: int
    shrink_cycles: int
    generate_attempts: int


def _read_int(environ: Mapping[str, str], name: str) -> int | None:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got: {raw!r}") from e


def get_environment_config(environ: Mapping[str, str] | None = None) -> EnvironmentConfig:
    """
    Resolve run settings from environment variables.

    Args:
        environ: Variables to read, defaults to ``os.environ``

    Returns:
        EnvironmentConfig with defaults applied for unset variables

    Raises:
        ConfigurationError: If a variable is set to a non-integer value
    """
    if environ is None:
        environ = os.environ

    seed = _read_int(environ, ENV_SEED)
    if seed is None:
        seed = time.time_ns()
    else:
        logger.info(f"Using fixed seed {seed} from {ENV_SEED}")

    examples = _read_int(environ, ENV_EXAMPLES)
    if examples is None:
        examples = DEFAULT_EXAMPLES

    shrink_cycles = _read_int(environ, ENV_SHRINKS)
    if shrink_cycles is None:
        shrink_cycles = examples * DEFAULT_SHRINK_MULTIPLIER

    generate_attempts = _read_int(environ, ENV_ATTEMPTS)
    if generate_attempts is None:
        generate_attempts = DEFAULT_GENERATE_ATTEMPTS

    return EnvironmentConfig(seed, examples, shrink_cycles, generate_attempts)
