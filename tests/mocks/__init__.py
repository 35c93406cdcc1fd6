"""
Mock utilities package for theory_kit tests.

Provides recording reporters, scripted guidance, fake clocks and scripted
randomness sources.
"""

from .collaborator_mocks import (
    FakeClock,
    RecordingGuidance,
    RecordingReporter,
    ScriptedPRNG,
    ScriptedSource,
)

__all__ = [
    "FakeClock",
    "RecordingGuidance",
    "RecordingReporter",
    "ScriptedPRNG",
    "ScriptedSource",
]
