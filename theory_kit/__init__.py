"""
theory_kit - property-based testing with trace-based shrinking.

Generators draw every value through a recording randomness source, so any
composition of generators can be replayed and shrunk without writing shrink
logic. Stateful theories and sequential/parallel model checks build on the
same engine.
"""

from .config.profiles import ProfileRegistry
from .core import generate
from .core.gen import Gen
from .core.guidance import GuidanceRegistry, NoGuidance
from .core.strategy import Strategy
from .domain.constraint import Constraint
from .dsl.quick_theory import QuickTheory, qt
from .services.reporter import ConsoleReporter, ExceptionReporter
from .stateful.parallel import Parallel
from .stateful.sequential import Sequential
from .stateful.stateful_theory import StatefulTheory, Step, StepBased, WithHistory, builder
from .utilities.constants import (
    AttemptsExhaustedError,
    ConfigurationError,
    ParallelExecutionError,
    PropertyFalsifiedError,
    TheoryKitError,
    ValuesExhaustedError,
)

__version__ = "0.1.0"

__all__ = [
    "AttemptsExhaustedError",
    "ConfigurationError",
    "ConsoleReporter",
    "Constraint",
    "ExceptionReporter",
    "Gen",
    "GuidanceRegistry",
    "NoGuidance",
    "Parallel",
    "ParallelExecutionError",
    "ProfileRegistry",
    "PropertyFalsifiedError",
    "QuickTheory",
    "Sequential",
    "StatefulTheory",
    "Step",
    "StepBased",
    "Strategy",
    "TheoryKitError",
    "ValuesExhaustedError",
    "WithHistory",
    "builder",
    "generate",
    "qt",
]
