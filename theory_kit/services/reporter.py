"""
Reporters turning theory outcomes into test failures.

ExceptionReporter raises; ConsoleReporter renders a rich summary first and
then raises the same way, so either can back a test suite.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, ClassVar

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..utilities.constants import PropertyFalsifiedError, ValuesExhaustedError
from ..utilities.formatters import distinct_others, format_falsification

logger = logging.getLogger(__name__)


class ExceptionReporter:
    """Reports falsification and exhaustion by raising."""

    def falsification(
        self,
        seed: int,
        examples_used: int,
        smallest: Any,
        cause: BaseException | None,
        others: Sequence[Any],
        to_string: Callable[[Any], str],
    ) -> None:
        """
        Raise a PropertyFalsifiedError describing the smallest falsifying value.

        Args:
            seed: Seed that reproduces the run
            examples_used: Number of distinct examples executed
            smallest: Smallest falsifying value found
            cause: Exception raised by the property, if any
            others: Other falsifying values found while shrinking
            to_string: Renders values for the message

        Raises:
            PropertyFalsifiedError: Always; chained to ``cause`` when present
        """
        message = format_falsification(seed, examples_used, smallest, cause, others, to_string)
        logger.debug(f"Reporting falsification found with seed {seed}")
        raise PropertyFalsifiedError(message, seed, examples_used, smallest) from cause

    def values_exhausted(self, examples_used: int) -> None:
        raise ValuesExhaustedError(examples_used)


class ConsoleReporter(ExceptionReporter):
    """Prints a rich summary of the outcome before raising."""

    COLORS: ClassVar[dict[str, str]] = {
        "header": "#ff6b6b",
        "value": "#ffd93d",
        "muted": "#6c757d",
        "warning": "#ffa500",
    }

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def falsification(
        self,
        seed: int,
        examples_used: int,
        smallest: Any,
        cause: BaseException | None,
        others: Sequence[Any],
        to_string: Callable[[Any], str],
    ) -> None:
        panel = self._build_falsification_panel(
            seed, examples_used, smallest, cause, others, to_string
        )
        self.console.print(panel)
        super().falsification(seed, examples_used, smallest, cause, others, to_string)

    def values_exhausted(self, examples_used: int) -> None:
        self.console.print(
            Panel(
                Text(
                    f"Gave up after finding only {examples_used} example(s) "
                    "matching the assumptions",
                    style=self.COLORS["warning"],
                ),
                title="[bold]VALUES EXHAUSTED",
                border_style=self.COLORS["warning"],
            )
        )
        super().values_exhausted(examples_used)

    def _build_falsification_panel(
        self,
        seed: int,
        examples_used: int,
        smallest: Any,
        cause: BaseException | None,
        others: Sequence[Any],
        to_string: Callable[[Any], str],
    ) -> Panel:
        """Build the summary panel with the smallest value and other findings."""
        summary = Table(show_header=False, box=None, padding=(0, 1))
        summary.add_column(style=self.COLORS["muted"])
        summary.add_column()
        summary.add_row("Examples", str(examples_used))
        summary.add_row("Seed", str(seed))
        summary.add_row("Smallest", Text(to_string(smallest), style=f"bold {self.COLORS['value']}"))
        if cause is not None:
            summary.add_row("Cause", Text(repr(cause), style=self.COLORS["header"]))

        shown = distinct_others(smallest, others, to_string)
        if shown:
            summary.add_row("Others", "\n".join(shown))

        return Panel(
            summary,
            title="[bold]PROPERTY FALSIFIED",
            border_style=self.COLORS["header"],
        )
