"""
Decision trace recorded while generating a single value.

A precursor holds every constrained draw made during one generation, in
order. Replaying its values through the same generator reproduces the value,
and editing them is how shrinking explores simpler inputs.
"""

import struct
from collections.abc import Iterator

from .constraint import Constraint

_LONG = struct.Struct(">q")


class Precursor:
    """Ordered, append-only list of (constraint, value) draws."""

    def __init__(self, entries: list[tuple[Constraint, int]] | None = None):
        self._entries: list[tuple[Constraint, int]] = list(entries) if entries else []

    def store(self, constraint: Constraint, value: int) -> None:
        self._entries.append((constraint, value))

    def truncate(self, length: int) -> None:
        """Discard every draw recorded after the first ``length`` entries."""
        if length < 0 or length > len(self._entries):
            raise ValueError(f"Cannot truncate trace of {len(self._entries)} draws to {length}")
        del self._entries[length:]

    def combine(self, other: "Precursor") -> "Precursor":
        """Return a new precursor holding this trace followed by ``other``."""
        return Precursor(self._entries + other._entries)

    def copy(self) -> "Precursor":
        return Precursor(self._entries)

    def current(self) -> list[int]:
        return [value for _, value in self._entries]

    def constraints(self) -> list[Constraint]:
        return [constraint for constraint, _ in self._entries]

    def bytes(self) -> bytes:
        """Encode the values as consecutive 8-byte big-endian signed longs."""
        return b"".join(_LONG.pack(value) for _, value in self._entries)

    def min(self, index: int) -> int:
        return self._entries[index][0].min

    def max(self, index: int) -> int:
        return self._entries[index][0].max

    def shrink_target(self, index: int) -> int | None:
        return self._entries[index][0].shrink_target

    def shrink_target_trace(self) -> list[int]:
        """Shrink target of every draw, falling back to its minimum when absent."""
        return [
            constraint.min if constraint.shrink_target is None else constraint.shrink_target
            for constraint, _ in self._entries
        ]

    def min_limit(self) -> list[int]:
        return [constraint.min for constraint, _ in self._entries]

    def max_limit(self) -> list[int]:
        return [constraint.max for constraint, _ in self._entries]

    def distances(self) -> list[int]:
        """
        Distance of each value from its shrink target.

        Draws without a shrink target count as zero so they never make a
        trace look more complex.
        """
        return [
            0 if constraint.shrink_target is None else abs(value - constraint.shrink_target)
            for constraint, value in self._entries
        ]

    def simpler_than(self, other: "Precursor") -> bool:
        """Shortlex comparison: shorter traces first, then closer to the targets."""
        return (len(self), self.distances()) < (len(other), other.distances())

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Constraint, int]]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Precursor):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"Precursor({self.current()})"
