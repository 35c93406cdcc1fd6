"""
Shared constants, defaults and exception types for theory_kit.

Keeps environment variable names, default run sizes and the exception
taxonomy in one place so every layer reports failures consistently.
"""

# Signed 64-bit bounds used by constraints and the PRNG
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
LONG_MASK = 2**64 - 1

# Environment variables read by the system configuration
ENV_SEED = "QT_SEED"
ENV_EXAMPLES = "QT_EXAMPLES"
ENV_SHRINKS = "QT_SHRINKS"
ENV_ATTEMPTS = "QT_ATTEMPTS"

# Run defaults
DEFAULT_EXAMPLES = 1000
DEFAULT_SHRINK_MULTIPLIER = 100
DEFAULT_GENERATE_ATTEMPTS = 10
DEFAULT_MIN_STATEFUL_STEPS = 1
DEFAULT_MAX_STATEFUL_STEPS = 50
STATEFUL_GENERATE_ATTEMPTS = 100

# Shrinking
SHRINK_RANDOM_MOVES = 200

# Reporting
MAX_REPORTED_OTHER_VALUES = 10

# Parallel model checking
DEFAULT_PARALLEL_TIMEOUT = 1.0


class TheoryKitError(Exception):
    """Base class for theory_kit errors."""


class ConfigurationError(TheoryKitError, ValueError):
    """Raised when a strategy or environment value is invalid."""


class AttemptsExhaustedError(TheoryKitError):
    """Raised when a generator rejects too many candidate values in one generation."""

    def __init__(self, attempts: int):
        super().__init__("Gave up trying to find values matching assumptions")
        self.attempts = attempts


class ValuesExhaustedError(TheoryKitError):
    """Raised when too few values satisfied the assumptions to run a theory."""

    def __init__(self, examples: int):
        super().__init__(
            f"Gave up after finding only {examples} example(s) matching the assumptions"
        )
        self.examples = examples


class PropertyFalsifiedError(AssertionError):
    """Raised when a property was falsified by at least one generated value."""

    def __init__(self, message: str, seed: int, examples: int, smallest: object):
        super().__init__(message)
        self.seed = seed
        self.examples = examples
        self.smallest = smallest


class ParallelExecutionError(TheoryKitError):
    """Raised when the concurrent phase of a model check could not complete."""
