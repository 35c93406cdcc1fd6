"""
Pytest configuration and shared fixtures for theory_kit tests.

Provides markers, deterministic strategies and recording collaborators
shared by the unit, property and integration suites.
"""

from collections.abc import Generator
from unittest.mock import Mock

import pytest

from theory_kit.config.profiles import ProfileRegistry
from theory_kit.core.guidance import GuidanceRegistry
from theory_kit.core.prng import XorShiftPRNG
from theory_kit.core.strategy import Strategy
from theory_kit.core.types import Reporter

from .mocks.collaborator_mocks import FakeClock, RecordingReporter

FIXED_SEED = 0x5EED


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (fast, isolated)")
    config.addinivalue_line("markers", "property: mark test as hypothesis property test")
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (runs whole theories)"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "property" in path:
            item.add_marker(pytest.mark.property)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)


# Randomness fixtures
@pytest.fixture
def prng() -> XorShiftPRNG:
    """Create deterministic PRNG."""
    return XorShiftPRNG(FIXED_SEED)


# Collaborator fixtures
@pytest.fixture
def recording_reporter() -> RecordingReporter:
    """Reporter that records outcomes instead of raising."""
    return RecordingReporter()


@pytest.fixture
def mock_reporter() -> Mock:
    """Mock reporter for call verification."""
    return Mock(spec=Reporter)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock returning scripted readings in seconds."""
    return FakeClock()


# Strategy fixtures
@pytest.fixture
def strategy(recording_reporter: RecordingReporter) -> Strategy:
    """Create deterministic strategy with a recording reporter."""
    return Strategy(
        prng=XorShiftPRNG(FIXED_SEED),
        examples=100,
        shrink_cycles=1000,
        generate_attempts=10,
        reporter=recording_reporter,
    )


@pytest.fixture
def mock_strategy(mock_reporter: Mock) -> Strategy:
    """Create deterministic strategy reporting to a mock."""
    return Strategy(
        prng=XorShiftPRNG(FIXED_SEED),
        examples=100,
        shrink_cycles=1000,
        generate_attempts=10,
        reporter=mock_reporter,
    )


# Registry fixtures
@pytest.fixture
def profile_registry() -> Generator[ProfileRegistry, None, None]:
    """Create profile registry cleared after the test."""
    registry = ProfileRegistry()
    yield registry
    registry.clear()


@pytest.fixture
def guidance_registry() -> Generator[GuidanceRegistry, None, None]:
    """Create guidance registry cleared after the test."""
    registry = GuidanceRegistry()
    yield registry
    registry.clear()


# Environment fixtures
@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove QT_* variables from the environment."""
    for name in ("QT_SEED", "QT_EXAMPLES", "QT_SHRINKS", "QT_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
