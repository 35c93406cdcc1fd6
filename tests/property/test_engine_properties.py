"""
Property-based tests for the generation engine.

Uses Hypothesis to check the invariants of constraints, traces, bounded
draws and filtered generation over arbitrary inputs.
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, precondition, rule

from theory_kit.core.data_source import ShapedDataSource
from theory_kit.core.generate import lists_of, range_
from theory_kit.core.prng import XorShiftPRNG, to_signed_long
from theory_kit.domain.constraint import Constraint
from theory_kit.domain.precursor import Precursor
from theory_kit.utilities.constants import LONG_MAX, LONG_MIN

longs = st.integers(min_value=LONG_MIN, max_value=LONG_MAX)


@st.composite
def constraints(draw):
    """Generate constraints with and without shrink targets."""
    low = draw(longs)
    high = draw(st.integers(min_value=low, max_value=LONG_MAX))
    constraint = Constraint.between(low, high)
    if draw(st.booleans()):
        return constraint.with_no_shrink_point()
    return constraint.with_shrink_point(draw(longs))


@st.composite
def precursors(draw, max_size=10):
    """Generate traces of values that fit their constraints."""
    precursor = Precursor()
    for constraint in draw(st.lists(constraints(), max_size=max_size)):
        precursor.store(
            constraint, draw(st.integers(min_value=constraint.min, max_value=constraint.max))
        )
    return precursor


class TestConstraintProperties:
    """Property-based tests for Constraint."""

    @given(constraints())
    def test_shrink_target_within_bounds(self, constraint):
        """Test that shrink targets always lie inside the range."""
        target = constraint.shrink_target
        assert target is None or constraint.min <= target <= constraint.max

    @given(constraints(), longs)
    def test_allowed_matches_bounds(self, constraint, value):
        """Test that legality is exactly range membership."""
        assert constraint.allowed(value) == (constraint.min <= value <= constraint.max)


class TestPrngProperties:
    """Property-based tests for bounded draws."""

    @given(longs, constraints())
    def test_draws_respect_bounds(self, seed, constraint):
        """Test that every draw lies within the requested range."""
        prng = XorShiftPRNG(seed)
        for _ in range(20):
            value = prng.next_long(constraint.min, constraint.max)
            assert constraint.min <= value <= constraint.max

    @given(longs)
    def test_seeded_sequences_repeat(self, seed):
        """Test determinism for every seed."""
        first, second = XorShiftPRNG(seed), XorShiftPRNG(seed)
        assert [first.next_long() for _ in range(5)] == [second.next_long() for _ in range(5)]

    @given(st.integers())
    def test_signed_wrap_is_idempotent(self, value):
        """Test that wrapping lands in range and is stable."""
        wrapped = to_signed_long(value)
        assert LONG_MIN <= wrapped <= LONG_MAX
        assert to_signed_long(wrapped) == wrapped
        assert (wrapped - value) % 2**64 == 0


class TestPrecursorProperties:
    """Property-based tests for traces."""

    @given(precursors())
    def test_encoding_length(self, precursor):
        """Test that each draw encodes to eight bytes."""
        assert len(precursor.bytes()) == 8 * len(precursor)

    @given(precursors(), precursors())
    def test_combine_preserves_both(self, first, second):
        """Test that combining concatenates values in order."""
        combined = first.combine(second)
        assert combined.current() == first.current() + second.current()
        assert len(combined) == len(first) + len(second)

    @given(precursors())
    def test_boundary_traces_fit_constraints(self, precursor):
        """Test that boundary traces are valid forced traces."""
        for index, constraint in enumerate(precursor.constraints()):
            assert constraint.allowed(precursor.min_limit()[index])
            assert constraint.allowed(precursor.max_limit()[index])
            assert constraint.allowed(precursor.shrink_target_trace()[index])

    @given(precursors(), precursors())
    def test_simplicity_is_asymmetric(self, first, second):
        """Test that two traces are never simpler than each other."""
        assert not (first.simpler_than(second) and second.simpler_than(first))

    @given(precursors())
    def test_nothing_simpler_than_itself(self, precursor):
        """Test that simplicity is strict."""
        assert not precursor.simpler_than(precursor.copy())

    @given(precursors(), st.data())
    def test_truncate(self, precursor, data):
        """Test that truncation keeps the requested prefix."""
        values = precursor.current()
        length = data.draw(st.integers(min_value=0, max_value=len(values)))
        precursor.truncate(length)
        assert precursor.current() == values[:length]


class TestGenerationProperties:
    """Property-based tests for generators over real sources."""

    @given(
        longs,
        st.integers(min_value=-1000, max_value=1000),
        st.integers(min_value=0, max_value=50),
    )
    def test_range_values_and_trace(self, seed, low, width):
        """Test that ranges stay in bounds and record one draw."""
        source = ShapedDataSource(XorShiftPRNG(seed))
        value = range_(low, low + width).generate(source)
        assert low <= value <= low + width
        assert source.captured_precursor.current() == [value]

    @given(longs, st.integers(min_value=0, max_value=9))
    @settings(max_examples=50)
    def test_assuming_never_yields_rejected_values(self, seed, modulus_offset):
        """Test that filtered generation only returns accepted values."""
        source = ShapedDataSource(XorShiftPRNG(seed), max_tries=10_000)
        gen = range_(0, 100).assuming(lambda value: value % 10 == modulus_offset)
        for _ in range(10):
            assert gen.generate(source) % 10 == modulus_offset
        assert len(source.captured_precursor) == 10

    @given(longs)
    def test_replay_reproduces_lists(self, seed):
        """Test that forcing a captured trace regenerates the same value."""
        gen = lists_of(range_(-50, 50), range_(0, 8))
        original = ShapedDataSource(XorShiftPRNG(seed))
        value = gen.generate(original)
        replay = ShapedDataSource(XorShiftPRNG(seed + 1), original.captured_precursor.current())
        assert gen.generate(replay) == value

    @given(longs, st.lists(longs, max_size=5))
    def test_forced_values_used_only_when_allowed(self, seed, forced):
        """Test that out-of-range forced values never reach generators."""
        assume(any(not -10 <= value <= 10 for value in forced))
        source = ShapedDataSource(XorShiftPRNG(seed), forced)
        values = [range_(-10, 10).generate(source) for _ in range(5)]
        assert all(-10 <= value <= 10 for value in values)


class DetachedSourceMachine(RuleBasedStateMachine):
    """State machine checking checkpoints against a list model of the trace."""

    def __init__(self):
        super().__init__()
        self.source = ShapedDataSource(XorShiftPRNG(17))
        self.checkpoints = []
        self.model: list[int] = []
        self.marks: list[int] = []

    @rule()
    def draw(self):
        target = self.checkpoints[-1] if self.checkpoints else self.source
        self.model.append(target.next(Constraint.between(-100, 100)))

    @rule()
    def detach(self):
        parent = self.checkpoints[-1] if self.checkpoints else self.source
        self.checkpoints.append(parent.detach())
        self.marks.append(len(self.model))

    @precondition(lambda self: self.checkpoints)
    @rule()
    def commit(self):
        self.checkpoints.pop().commit()
        self.marks.pop()

    @precondition(lambda self: self.checkpoints)
    @rule()
    def rollback(self):
        self.checkpoints.pop().rollback()
        del self.model[self.marks.pop():]

    @invariant()
    def trace_matches_model(self):
        assert self.source.captured_precursor.current() == self.model


TestDetachedSourceMachine = DetachedSourceMachine.TestCase
