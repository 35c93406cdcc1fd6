"""
Stateful theories: sequences of generated steps run against a live system.

A theory supplies setup steps, a generator of steps and a way to execute a
step. StepBased theories are assembled from StepBuilder generators with
optional pre- and postconditions.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..core.gen import Gen
from ..core.generate import frequency_with_no_shrink_point
from ..core.types import RandomnessSource
from ..utilities.formatters import format_history

S = TypeVar("S")

Condition = Callable[[], bool]


class StatefulTheory(ABC, Generic[S]):
    """Model of a stateful system exercised one step at a time."""

    def setup_steps(self) -> Iterator[Gen[S]]:
        return iter(())

    @abstractmethod
    def steps(self) -> Gen[S]:
        """Generator of the steps executed after setup."""

    @abstractmethod
    def execute_step(self, step: S) -> bool:
        """Execute one step, returning False when the system misbehaved."""

    def init(self) -> None:
        pass

    def teardown(self) -> None:
        pass

    def history(self) -> list[S]:
        return []

    def formatted_history(self) -> str:
        return format_history([str(step) for step in self.history()])


class WithHistory(StatefulTheory[S]):
    """Theory recording every step it executes."""

    def __init__(self):
        self._history: list[S] = []

    @abstractmethod
    def perform_step(self, step: S) -> bool: ...

    def execute_step(self, step: S) -> bool:
        self._history.append(step)
        return self.perform_step(step)

    def history(self) -> list[S]:
        return list(self._history)


@dataclass(frozen=True)
class Step:
    """A described, executable action with optional conditions."""

    desc: str
    arg_string: str
    action: Callable[[], Any]
    precondition: Condition | None = None
    postcondition: Condition | None = None

    def run(self) -> None:
        self.action()

    def postcondition_valid(self) -> bool:
        return self.postcondition is None or bool(self.postcondition())

    def __str__(self) -> str:
        return f"{self.desc}({self.arg_string})"


class StepBased(WithHistory[Step]):
    """
    Theory built from weighted step generators.

    Subclasses register their steps in ``init_steps``, which runs on
    ``init`` so each example starts from freshly built generators.
    """

    def __init__(self):
        super().__init__()
        self._setup_steps: list[Gen[Step]] = []
        self._steps: list[tuple[int, Gen[Step]]] = []

    def setup_steps(self) -> Iterator[Gen[Step]]:
        return iter(self._setup_steps)

    def steps(self) -> Gen[Step]:
        # Builders yield None when their precondition fails
        return frequency_with_no_shrink_point(self._steps).assuming(lambda step: step is not None)

    def perform_step(self, step: Step) -> bool:
        """
        Run a step and check its postcondition.

        A step whose action raises fails without its postcondition being
        consulted.
        """
        try:
            step.run()
        except Exception:
            return False
        return step.postcondition_valid()

    def add_setup_step(self, step: Gen[Step]) -> None:
        self._setup_steps.append(step)

    def add_step(self, step: Gen[Step], weight: int = 1) -> None:
        self._steps.append((weight, step))

    def init(self) -> None:
        self.init_steps()

    @abstractmethod
    def init_steps(self) -> None:
        """Register setup steps and steps."""


GenSource = Gen[Any] | Callable[[], Gen[Any]]


class StepBuilder:
    """Builds a step generator from a description, an action and argument generators."""

    def __init__(self, desc: str, action: Callable[..., Any], *args: GenSource):
        self.desc = desc
        self._action = action
        self._args = args
        self._precondition: Condition | None = None
        self._postcondition: Condition | None = None

    def precondition(self, precondition: Condition) -> "StepBuilder":
        self._precondition = precondition
        return self

    def postcondition(self, postcondition: Condition) -> "StepBuilder":
        self._postcondition = postcondition
        return self

    def build(self) -> Gen[Step | None]:
        """
        Create the step generator.

        The generator yields None without drawing when the precondition
        fails. Argument generators given as suppliers are only resolved
        once the precondition has passed.
        """

        def generate_step(source: RandomnessSource) -> Step | None:
            if not self._allowed():
                return None
            gens = [_resolve(arg) for arg in self._args]
            values = [gen.generate(source) for gen in gens]
            arg_string = ", ".join(gen.as_string(value) for gen, value in zip(gens, values))
            action = self._action
            return Step(
                self.desc,
                arg_string,
                lambda: action(*values),
                self._precondition,
                self._postcondition,
            )

        return Gen(generate_step)

    def _allowed(self) -> bool:
        return self._precondition is None or bool(self._precondition())


def _resolve(arg: GenSource) -> Gen[Any]:
    if isinstance(arg, Gen):
        return arg
    return arg()


def builder(desc: str, action: Callable[..., Any], *args: GenSource) -> StepBuilder:
    """
    Start building a step.

    Args:
        desc: Name shown in the step history
        action: Called with one value drawn from each argument generator
        *args: Argument generators, or zero-argument callables returning one
    """
    return StepBuilder(desc, action, *args)
