"""
Seeded xorshift64* pseudo random number generator.

All arithmetic is carried out in signed 64-bit wrap-around form so that a
given seed produces the same sequence on every platform.
"""

from ..utilities.constants import LONG_MASK, LONG_MAX, LONG_MIN

_MULTIPLIER = 2685821657736338717


def to_signed_long(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= LONG_MASK
    if value > LONG_MAX:
        return value - (1 << 64)
    return value


def _truncated_remainder(dividend: int, divisor: int) -> int:
    """Remainder whose sign follows the dividend."""
    remainder = abs(dividend) % divisor
    return -remainder if dividend < 0 else remainder


class XorShiftPRNG:
    """
    xorshift64* generator.

    A seed of zero would lock the generator at zero forever, so it is
    remapped to one. ``initial_seed`` reports the seed after remapping.
    """

    def __init__(self, seed: int):
        seed = to_signed_long(seed)
        if seed == 0:
            seed = 1
        self._initial_seed = seed
        self._state = seed

    @property
    def initial_seed(self) -> int:
        return self._initial_seed

    def next_long(self, start: int | None = None, end: int | None = None) -> int:
        """
        Draw the next pseudo random value.

        Args:
            start: Inclusive lower bound, or None for the full 64-bit range
            end: Inclusive upper bound, or None for the full 64-bit range

        Returns:
            Signed 64-bit value within [start, end]

        Raises:
            ValueError: If end is below start
        """
        if start is None and end is None:
            return self._next()
        if start is None or end is None:
            raise ValueError("Both bounds must be supplied for a bounded draw")
        if end < start:
            raise ValueError(f"Invalid range {start} to {end}")

        if self._range_fits(start, end):
            temp = self._next()
            remainder = _truncated_remainder(temp, (end - start) + 1)
            if remainder < 0:
                return remainder + end + 1
            return remainder + start

        result = self._next()
        while result < start or result > end:
            result = self._next()
        return result

    def next_int(self, start: int, end: int) -> int:
        return self.next_long(start, end)

    def _next(self) -> int:
        s = self._state
        s ^= s >> 12
        s = to_signed_long(s ^ (s << 25))
        s ^= s >> 27
        self._state = s
        return to_signed_long(s * _MULTIPLIER)

    @staticmethod
    def _range_fits(x: int, y: int) -> bool:
        # True when y - x + 1 is representable as a signed 64-bit value
        return (
            (1 <= x and y <= LONG_MAX)
            or (LONG_MIN <= x and y <= -2)
            or (LONG_MIN + 1 <= x and y <= -1)
            or (-LONG_MAX < x <= 0 and 0 <= y < LONG_MAX + x)
        )

    def __repr__(self) -> str:
        return f"XorShiftPRNG(seed={self._initial_seed})"
