"""
Unit tests for the qt() entry point and theory builders.
"""

from unittest.mock import Mock

import pytest

from theory_kit import qt
from theory_kit.core.generate import pick, range_
from theory_kit.dsl.quick_theory import StatefulTheoryBuilder
from theory_kit.utilities.constants import PropertyFalsifiedError, ValuesExhaustedError

from ..fixtures.models import CounterTheory


class ProfiledTests:
    """Scope for profile lookups."""


class TestForAll:
    """Test cases for checking properties of generated values."""

    def test_passing_property(self, strategy, recording_reporter):
        """Test that a true property reports nothing."""
        qt(strategy).for_all(range_(0, 100), range_(0, 100)).check(lambda a, b: a + b == b + a)
        assert recording_reporter.passed

    def test_values_are_reported_as_tuples(self, strategy, recording_reporter):
        """Test that the smallest falsifying value holds one entry per generator."""
        qt(strategy).for_all(range_(0, 100)).check(lambda value: value <= 3)
        assert recording_reporter.smallest == (4,)

    def test_two_generators_shrink_independently(self, strategy, recording_reporter):
        """Test shrinking of a two-argument property."""
        qt(strategy).for_all(range_(0, 100), range_(0, 100)).check(lambda a, b: a + b < 10)
        a, b = recording_reporter.smallest
        assert a + b == 10

    @pytest.mark.parametrize("seed", [6, 7, 9, 17])
    def test_filtered_values_shrink_fully(self, clean_env, recording_reporter, seed):
        """Test that only-odd values shrink to the smallest odd counterexample."""
        (
            qt()
            .with_fixed_seed(seed)
            .with_reporter(recording_reporter)
            .for_all(range_(0, 100))
            .assuming(lambda value: value % 2 == 1)
            .check(lambda value: value <= 3)
        )
        assert recording_reporter.smallest == (5,)

    def test_description_joins_arguments(self, strategy, recording_reporter):
        """Test that multi-argument values render as a comma-separated list."""
        qt(strategy).for_all(range_(5, 9), pick(["x"])).check(lambda n, s: False)
        assert recording_reporter.falsifications[0]["description"] == "5, x"

    def test_assumptions_filter_values(self, strategy, recording_reporter):
        """Test that only values satisfying every assumption are checked."""
        seen = []

        def record(a, b):
            seen.append((a, b))
            return True

        (
            qt(strategy)
            .for_all(range_(0, 20), range_(0, 20))
            .assuming(lambda a, b: a < b)
            .assuming(lambda a, b: a % 2 == 0)
            .check(record)
        )
        assert seen
        assert all(a < b and a % 2 == 0 for a, b in seen)

    def test_impossible_assumption_reports_exhaustion(self, strategy, recording_reporter):
        """Test that unsatisfiable assumptions exhaust the search."""
        qt(strategy).for_all(range_(0, 10)).assuming(lambda value: value > 10).check(
            lambda value: True
        )
        assert recording_reporter.exhausted

    def test_check_assert(self, strategy, recording_reporter):
        """Test that assertion failures falsify the property."""

        def consumer(value):
            assert value < 50

        qt(strategy).for_all(range_(0, 100)).check_assert(consumer)
        report = recording_reporter.falsifications[0]
        assert report["smallest"] == (50,)
        assert isinstance(report["cause"], AssertionError)

    def test_for_all_needs_generators(self, strategy):
        """Test that at least one generator is required."""
        with pytest.raises(ValueError, match="At least one generator"):
            qt(strategy).for_all()


class TestConfiguration:
    """Test cases for adjusting the strategy."""

    def test_with_calls_adjust_strategy(self, strategy, recording_reporter):
        """Test that with_* settings reach the run."""
        qt(strategy).with_fixed_seed(9).with_examples(10).for_all(range_(0, 100)).check(
            lambda value: value < 100
        )
        report = recording_reporter.falsifications[0]
        assert report["seed"] == 9
        assert report["examples_used"] == 2

    def test_strategy_supplier_is_lazy(self, strategy):
        """Test that a supplier is only called when a check runs."""
        supplier = Mock(return_value=strategy)
        theory = qt(supplier).with_examples(5).for_all(range_(0, 10))
        supplier.assert_not_called()
        theory.check(lambda value: True)
        supplier.assert_called_once()

    def test_default_strategy_raises(self, clean_env, monkeypatch):
        """Test that qt() fails tests through the exception reporter."""
        monkeypatch.setenv("QT_SEED", "31")
        monkeypatch.setenv("QT_EXAMPLES", "50")
        with pytest.raises(PropertyFalsifiedError) as excinfo:
            qt().for_all(range_(0, 100)).check(lambda value: value <= 3)
        assert excinfo.value.seed == 31
        assert excinfo.value.smallest == (4,)
        assert "Seed was 31" in str(excinfo.value)

    def test_default_strategy_exhaustion_raises(self, clean_env):
        """Test that exhaustion fails tests through the exception reporter."""
        with pytest.raises(ValuesExhaustedError):
            qt().with_examples(10).for_all(range_(0, 10)).assuming(lambda v: False).check(
                lambda v: True
            )

    def test_testing_time(self, strategy, recording_reporter):
        """Test an unlimited run bounded by time."""
        qt(strategy).with_unlimited_examples().with_testing_time(0.05).for_all(
            range_(0, 1000)
        ).check(lambda value: True)
        assert recording_reporter.passed

    def test_named_profile(self, clean_env, profile_registry, recording_reporter):
        """Test applying a registered profile on top of the system strategy."""
        profile_registry.register_profile(
            ProfiledTests, "quiet", lambda s: s.with_reporter(recording_reporter)
        )
        qt().with_profile(profile_registry, ProfiledTests, "quiet").for_all(range_(0, 9)).check(
            lambda value: value < 5
        )
        assert recording_reporter.smallest == (5,)

    def test_registered_default_profile(self, clean_env, profile_registry, recording_reporter):
        """Test that the scope's default profile is applied."""
        profile_registry.register_default_profile(
            ProfiledTests, lambda s: s.with_reporter(recording_reporter).with_examples(7)
        )
        qt().with_registered_profiles(profile_registry, ProfiledTests).for_all(
            range_(-1000, 1000)
        ).check(lambda value: True)
        assert recording_reporter.passed


class TestStatefulTheories:
    """Test cases for stateful checks through qt()."""

    def test_correct_system_passes(self, strategy, recording_reporter):
        """Test a stateful theory of a working counter."""
        qt(strategy).with_examples(20).stateful(CounterTheory)
        assert recording_reporter.passed

    def test_bug_found_and_described(self, strategy, recording_reporter):
        """Test that a failing step sequence is reported by its history."""
        qt(strategy).with_max_stateful_steps(20).stateful(lambda: CounterTheory(limit=5))
        description = recording_reporter.falsifications[0]["description"]
        assert description.startswith("S1 = reset()")
        assert "add(" in description

    def test_builder_keeps_model_through_settings(self, strategy, recording_reporter):
        """Test that with_* calls on a stateful builder keep the model."""
        builder = qt(strategy).with_stateful_model(CounterTheory).with_examples(5)
        assert isinstance(builder, StatefulTheoryBuilder)
        builder.check_stateful()
        assert recording_reporter.passed
