from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Sequence
from typing import TextIO

from ..types import Violation


class Reporter(ABC):
    """Renders the (display-filtered) violations of a run."""

    @abstractmethod
    def report(self, output: TextIO, violations: Sequence[Violation]) -> None: ...


def group_by_file(violations: Sequence[Violation]) -> dict[str, list[Violation]]:
    """Group violations per source path, keeping first-seen file order."""
    grouped: dict[str, list[Violation]] = {}
    for violation in violations:
        grouped.setdefault(violation.source_path, []).append(violation)
    return grouped
