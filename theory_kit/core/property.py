"""
Property under test: a generator paired with a predicate.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from ..domain.results import Falsification
from ..utilities.constants import AttemptsExhaustedError
from .gen import Gen

T = TypeVar("T")


class Property(Generic[T]):
    """Predicate over generated values."""

    def __init__(self, predicate: Callable[[T], bool], gen: Gen[T]):
        self.predicate = predicate
        self.gen = gen

    def try_falsification(self, value: T) -> Falsification[T] | None:
        """
        Evaluate the predicate for one value.

        Returns:
            Falsification if the predicate returned false or raised, None otherwise

        Raises:
            AttemptsExhaustedError: If the predicate ran out of generation attempts
        """
        try:
            if not self.predicate(value):
                return Falsification(value)
        except AttemptsExhaustedError:
            raise
        except Exception as e:
            return Falsification(value, e)
        return None
