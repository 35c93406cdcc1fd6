"""
Constraint value object describing the legal range of a single draw.

A constraint carries inclusive bounds and an optional shrink target that
shrinking moves values towards.
"""

from dataclasses import dataclass

from ..utilities.constants import LONG_MAX, LONG_MIN


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Constraint:
    """
    Immutable inclusive range with an optional shrink target.

    Two constraints with the same bounds but different shrink targets are
    distinct values; only the bounds decide whether a draw is allowed.
    """

    min: int
    max: int
    shrink_target: int | None = 0

    def __post_init__(self):
        """Validate bounds and clamp the shrink target into range."""
        if self.min > self.max:
            raise ValueError(f"Constraint minimum {self.min} exceeds maximum {self.max}")
        if self.min < LONG_MIN or self.max > LONG_MAX:
            raise ValueError(f"Constraint bounds {self.min}..{self.max} exceed the 64-bit range")
        if self.shrink_target is not None:
            object.__setattr__(
                self, "shrink_target", _clamp(self.shrink_target, self.min, self.max)
            )

    @classmethod
    def between(cls, low: int, high: int) -> "Constraint":
        """
        Create a constraint over [low, high] shrinking towards zero.

        The shrink target is clamped into range, so a range not containing
        zero shrinks towards its nearest bound.
        """
        if low == 0 and high == 1:
            return ZERO_TO_ONE
        return cls(low, high, 0)

    @classmethod
    def none(cls) -> "Constraint":
        """Create an unconstrained draw over the full 64-bit range."""
        return cls(LONG_MIN, LONG_MAX, 0)

    @classmethod
    def zero_to_one(cls) -> "Constraint":
        return ZERO_TO_ONE

    def with_shrink_point(self, point: int) -> "Constraint":
        """
        Return a constraint shrinking towards ``point`` (clamped into range).

        Returns ``self`` when the clamped point is already the shrink target.
        """
        target = _clamp(point, self.min, self.max)
        if target == self.shrink_target:
            return self
        return Constraint(self.min, self.max, target)

    def with_no_shrink_point(self) -> "Constraint":
        if self.shrink_target is None:
            return self
        return Constraint(self.min, self.max, None)

    def allowed(self, value: int) -> bool:
        """Check whether ``value`` lies within the inclusive bounds."""
        return self.min <= value <= self.max

    def __str__(self) -> str:
        return f"[{self.min}..{self.max}] -> {self.shrink_target}"


ZERO_TO_ONE = Constraint(0, 1, 0)
