"""
Human-readable report rendered with rich.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from rich.console import Console
from rich.text import Text

from ..types import Severity
from ..types import Violation
from .base import Reporter
from .base import group_by_file

SEVERITY_STYLES = {
    Severity.IGNORE: "dim",
    Severity.INFO: "blue",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


class ConsoleReporter(Reporter):
    def __init__(self, *, force_terminal: bool | None = None):
        self.force_terminal = force_terminal

    def report(self, output: TextIO, violations: Sequence[Violation]) -> None:
        console = Console(
            file=output,
            force_terminal=self.force_terminal,
            highlight=False,
            soft_wrap=True,
        )

        for path, file_violations in group_by_file(violations).items():
            console.print(Text(path, style="bold"))
            for v in file_violations:
                line = Text()
                line.append(f"l.{v.line} c.{v.column} : ")
                line.append(v.severity.name, style=SEVERITY_STYLES[v.severity])
                line.append(f" {v.message}")
                console.print(line)
            console.print()

        if violations:
            console.print(
                Text(f"{len(violations)} violation(s) found", style="bold red")
            )
        else:
            console.print(Text("No violation found.", style="green"))
