"""
JSON report.

Payload models are pydantic so the wire shape is declared in one place:

    {"failures": 2,
     "files": [{"file": "...", "violations": [
         {"line": 1, "column": 3, "severity": 3, "type": "error",
          "message": "...", "rule": "..."}]}]}
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from pydantic import BaseModel

from ..types import Violation
from .base import Reporter
from .base import group_by_file


class ViolationPayload(BaseModel):
    line: int
    column: int
    severity: int
    type: str
    message: str
    rule: str


class FilePayload(BaseModel):
    file: str
    violations: list[ViolationPayload]


class ReportPayload(BaseModel):
    failures: int
    files: list[FilePayload]

    @classmethod
    def from_violations(cls, violations: Sequence[Violation]) -> ReportPayload:
        return cls(
            failures=len(violations),
            files=[
                FilePayload(
                    file=path,
                    violations=[
                        ViolationPayload(
                            line=v.line,
                            column=v.column,
                            severity=int(v.severity),
                            type=v.severity.label,
                            message=v.message,
                            rule=v.rule_id,
                        )
                        for v in file_violations
                    ],
                )
                for path, file_violations in group_by_file(violations).items()
            ],
        )


class JsonReporter(Reporter):
    def report(self, output: TextIO, violations: Sequence[Violation]) -> None:
        payload = ReportPayload.from_violations(violations)
        output.write(payload.model_dump_json(indent=2))
        output.write("\n")
