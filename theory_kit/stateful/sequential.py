"""
Sequential model checking.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from .command import Command

logger = logging.getLogger(__name__)

S = TypeVar("S")
M = TypeVar("M")


class Sequential:
    """Checks a live system against its model one command at a time."""

    @staticmethod
    def model_check(
        initial_state: M,
        commands: Sequence[Command[Any, M]],
        model_to_sut: Callable[[M], S],
        sut_to_model: Callable[[S], M],
    ) -> None:
        """
        Apply each command to the system and the model, comparing after every step.

        Args:
            initial_state: Model state the system is built from
            commands: Commands to apply in order
            model_to_sut: Builds a live system in the given model state
            sut_to_model: Observes the model state of a live system

        Raises:
            AssertionError: On the first step where observed and expected states differ
        """
        state = initial_state
        sut = model_to_sut(initial_state)
        completed = 0
        for command in commands:
            command.run(sut)
            state = command.next_state(state)
            real_state = sut_to_model(sut)
            if real_state != state:
                logger.debug(f"Model check failed after {completed} step(s) at {command}")
                raise AssertionError(
                    f"Expected {real_state} to be {state} after {command}\n"
                    f" Ran {completed} steps before failure."
                )
            completed += 1
