"""
Parallel model checking.

Threads are used to flush out concurrency bugs, not for speed: commands run
concurrently against one shared system and the final state must match the
end state of at least one serial ordering of the same commands.
"""

import itertools
import logging
from collections.abc import Callable, Hashable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, TypeVar

from ..utilities.constants import DEFAULT_PARALLEL_TIMEOUT, ParallelExecutionError
from .command import Command
from .sequential import Sequential

logger = logging.getLogger(__name__)

S = TypeVar("S")
M = TypeVar("M", bound=Hashable)


class Parallel:
    """Linearizability check of a system against a model."""

    def __init__(self, timeout: float = DEFAULT_PARALLEL_TIMEOUT):
        """
        Args:
            timeout: Seconds to wait for each concurrent command to finish
        """
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive, got: {timeout}")
        self.timeout = timeout

    def parallel_check(
        self,
        initial_state: M,
        commands: Sequence[Command[Any, M]],
        to_sut: Callable[[M], S],
        read_state: Callable[[S], M],
        threads: int,
    ) -> None:
        """
        Check the commands sequentially, then concurrently.

        Every ordering of the commands is enumerated to find the valid end
        states, so keep command lists short (around ten at most). Models must
        implement ``__eq__`` and ``__hash__``.

        Args:
            initial_state: Model state the system is built from
            commands: Commands to run
            to_sut: Builds a live system in the given model state
            read_state: Observes the model state of a live system
            threads: Worker threads running the commands

        Raises:
            AssertionError: If the sequential check fails or the concurrent
                final state is not reachable by any serial ordering
            ParallelExecutionError: If a command times out or raises while
                running concurrently
        """
        Sequential.model_check(initial_state, commands, to_sut, read_state)

        sut = to_sut(initial_state)
        valid_end_states = self.calculate_possible_end_states(initial_state, commands)

        executor = ThreadPoolExecutor(max_workers=threads)
        try:
            futures = [executor.submit(command.run, sut) for command in commands]
            self._wait_for_completion(futures)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        final_state = read_state(sut)
        if final_state not in valid_end_states:
            allowable = ", ".join(str(state) for state in valid_end_states)
            raise AssertionError(
                f"Final state {final_state} not valid.\n Allowable states :- {allowable}"
            )

    @staticmethod
    def calculate_possible_end_states(
        initial_state: M, commands: Sequence[Command[Any, M]]
    ) -> set[M]:
        """End states of the model over every ordering of ``commands``."""
        end_states: set[M] = set()
        for ordering in itertools.permutations(commands):
            state = initial_state
            for command in ordering:
                state = command.next_state(state)
            end_states.add(state)
        return end_states

    def _wait_for_completion(self, futures: list[Future]) -> None:
        for future in futures:
            try:
                future.result(timeout=self.timeout)
            except FutureTimeoutError as e:
                logger.error(f"Command did not complete within {self.timeout}s")
                raise ParallelExecutionError("Error executing step: timed out") from e
            except Exception as e:
                logger.error(f"Command raised while running concurrently: {e!r}")
                raise ParallelExecutionError("Error executing step") from e
