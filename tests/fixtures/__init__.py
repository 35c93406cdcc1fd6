"""
Test fixtures package for theory_kit tests.

Provides counter models, commands and stateful theories shared across
suites.
"""

from .models import (
    PLUS_1,
    SET_0,
    SET_42,
    TIMES_2,
    Counter,
    CounterCommand,
    CounterTheory,
    RacyCounter,
)

__all__ = [
    "PLUS_1",
    "SET_0",
    "SET_42",
    "TIMES_2",
    "Counter",
    "CounterCommand",
    "CounterTheory",
    "RacyCounter",
]
