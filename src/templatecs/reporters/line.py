"""
One-line-per-violation formats for editors and CI runners.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from ..types import Severity
from ..types import Violation
from .base import Reporter


class EmacsReporter(Reporter):
    """`path:line:column: severity - message`"""

    def report(self, output: TextIO, violations: Sequence[Violation]) -> None:
        for v in violations:
            output.write(
                f"{v.source_path}:{v.line}:{v.column}: "
                f"{v.severity.label} - {v.message}\n"
            )


# GitHub only knows these annotation levels.
_GITHUB_LEVELS = {
    Severity.IGNORE: "notice",
    Severity.INFO: "notice",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class GithubReporter(Reporter):
    """GitHub Actions workflow commands (`::error file=...::message`)."""

    def report(self, output: TextIO, violations: Sequence[Violation]) -> None:
        for v in violations:
            level = _GITHUB_LEVELS[v.severity]
            # GitHub columns are 1-based.
            output.write(
                f"::{level} file={_escape_property(v.source_path)},"
                f"line={v.line},col={v.column + 1}::{_escape_data(v.message)}\n"
            )
