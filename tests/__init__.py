"""
Test package for theory_kit.

Unit, property and integration suites for the generation, shrinking and
stateful model-checking engine.
"""

__all__ = [
    "conftest",  # Pytest configuration and fixtures
    "fixtures",  # Model and command fixtures
    "integration",  # Whole-theory test suite
    "mocks",  # Recording collaborators
    "property",  # Hypothesis test suite
    "unit",  # Unit test suite
]
