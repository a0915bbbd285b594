"""
Rule interface.

A rule inspects one token stream and returns its violations in template
order. Rules are instantiated per validation pass, so instance attributes
never carry state from one file to the next.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import ClassVar

from ..types import Severity
from ..types import TemplateToken
from ..types import TokenStream
from ..types import Violation


class Rule(ABC):
    rule_id: ClassVar[str] = "unknown"

    def __init__(self, severity: Severity = Severity.ERROR):
        self.severity = severity

    @abstractmethod
    def check(self, stream: TokenStream) -> list[Violation]: ...

    def violation(
        self,
        stream: TokenStream,
        token: TemplateToken,
        message: str,
        *,
        offset: int = 0,
        severity: Severity | None = None,
    ) -> Violation:
        """Build a violation located `offset` characters into `token.raw`."""
        line = token.line + token.raw.count("\n", 0, offset)
        newline = token.raw.rfind("\n", 0, offset)
        column = token.column + offset if newline == -1 else offset - newline - 1
        return Violation(
            source_path=stream.path,
            line=line,
            column=column,
            message=message,
            severity=self.severity if severity is None else severity,
            rule_id=self.rule_id,
        )
