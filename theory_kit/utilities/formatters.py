"""
Formatting utilities for failure reports.

Provides the plain-text rendering shared by every reporter so console and
exception output describe a falsification the same way.
"""

import traceback
from collections.abc import Callable, Sequence
from typing import Any

from .constants import MAX_REPORTED_OTHER_VALUES


def format_cause(cause: BaseException | None) -> str:
    """Format the exception that falsified a property, or nothing when it returned False."""
    if cause is None:
        return ""
    trace = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
    return f"\nCause was :-\n{trace}"


def distinct_others(
    smallest: Any,
    others: Sequence[Any],
    to_string: Callable[[Any], str],
    limit: int = MAX_REPORTED_OTHER_VALUES,
) -> list[str]:
    """
    Render up to ``limit`` other falsifying values.

    Values rendering the same as the smallest value, or as an earlier other
    value, are skipped.
    """
    seen = {to_string(smallest)}
    rendered: list[str] = []
    for value in others:
        if len(rendered) >= limit:
            break
        text = to_string(value)
        if text not in seen:
            seen.add(text)
            rendered.append(text)
    return rendered


def format_others(
    smallest: Any,
    others: Sequence[Any],
    to_string: Callable[[Any], str],
    limit: int = MAX_REPORTED_OTHER_VALUES,
) -> str:
    """Format distinct other falsifying values, one per line."""
    return "\n".join(distinct_others(smallest, others, to_string, limit))


def format_falsification(
    seed: int,
    examples_used: int,
    smallest: Any,
    cause: BaseException | None,
    others: Sequence[Any],
    to_string: Callable[[Any], str],
) -> str:
    """Build the full falsification report."""
    return (
        f"Property falsified after {examples_used} example(s) \n"
        f"Smallest found falsifying value(s) :-\n"
        f"{to_string(smallest)}{format_cause(cause)}\n"
        f"Other found falsifying value(s) :- \n"
        f"{format_others(smallest, others, to_string)}\n"
        f" \n"
        f"Seed was {seed}"
    )


def format_history(descriptions: Sequence[str]) -> str:
    """Number executed steps as ``S1 = ...`` lines."""
    return "\n".join(
        f"S{index} = {description}" for index, description in enumerate(descriptions, 1)
    )
