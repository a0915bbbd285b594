"""
Severity gate.

The configured severity name is turned into a threshold one below that
severity's ordinal, so a single `severity > threshold` comparison means
"at or above the configured level" for both display filtering and the exit
code.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from .errors import ConfigurationError
from .types import Severity
from .types import Violation

DISPLAY_ALL = "all"
DISPLAY_BLOCKING = "blocking"
DISPLAY_MODES = (DISPLAY_ALL, DISPLAY_BLOCKING)

SEVERITY_NAMES: dict[str, Severity] = {
    "ignore": Severity.IGNORE,
    "info": Severity.INFO,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
}


def resolve_threshold(name: str) -> int:
    try:
        severity = SEVERITY_NAMES[name]
    except KeyError:
        raise ConfigurationError(
            f"Invalid severity limit {name!r}; "
            f"expected one of: {', '.join(SEVERITY_NAMES)}"
        ) from None
    return int(severity) - 1


def validate_display(mode: str) -> Literal["all", "blocking"]:
    if mode not in DISPLAY_MODES:
        raise ConfigurationError(
            f"Invalid display mode {mode!r}; "
            f"expected one of: {', '.join(DISPLAY_MODES)}"
        )
    return mode  # type: ignore[return-value]


def is_blocking(violation: Violation, threshold: int) -> bool:
    return int(violation.severity) > threshold


def filter_for_display(
    violations: Sequence[Violation],
    display: str,
    threshold: int,
) -> list[Violation]:
    """
    Violations to hand to the reporter.

    `all` keeps everything; `blocking` keeps only what fails the run.
    Relative order is preserved.
    """
    if validate_display(display) == DISPLAY_ALL:
        return list(violations)
    return [v for v in violations if is_blocking(v, threshold)]


def decide_exit_code(violations: Sequence[Violation], threshold: int) -> int:
    """
    0 if nothing is above the threshold, else 1.

    Must be given the unfiltered violations: the display mode never changes
    the outcome.
    """
    for violation in violations:
        if is_blocking(violation, threshold):
            return 1
    return 0
