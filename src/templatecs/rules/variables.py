"""
Rules about template variables bound by tags.
"""

from __future__ import annotations

from ..types import Severity
from ..types import TokenStream
from ..types import Violation
from .base import Rule
from .bindings import bound_names
from .bindings import referenced_names


class LowerCaseVariable(Rule):
    rule_id = "lower_case_variable"

    def check(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        for token in stream.tags():
            for binding in bound_names(token):
                if binding.name == binding.name.lower():
                    continue
                violations.append(
                    self.violation(
                        stream,
                        token,
                        f'The "{binding.name}" variable should be in lower case '
                        "(use _ as a separator).",
                        offset=binding.offset,
                    )
                )
        return violations


class UnusedVariable(Rule):
    """
    A variable bound by a tag must be referenced by a later tag or variable.

    Names starting with `_` are treated as intentionally unused.
    """

    rule_id = "unused_variable"

    def __init__(self, severity: Severity = Severity.WARNING):
        super().__init__(severity)

    def check(self, stream: TokenStream) -> list[Violation]:
        tokens = list(stream)
        # references[i] = every name referenced by tokens after index i
        references: list[set[str]] = [set() for _ in tokens]
        seen: set[str] = set()
        for i in range(len(tokens) - 1, -1, -1):
            references[i] = set(seen)
            seen |= referenced_names(tokens[i])

        violations: list[Violation] = []
        for i, token in enumerate(tokens):
            for binding in bound_names(token):
                if binding.name.startswith("_"):
                    continue
                if binding.name in references[i]:
                    continue
                violations.append(
                    self.violation(
                        stream,
                        token,
                        f'Unused variable "{binding.name}".',
                        offset=binding.offset,
                    )
                )
        return violations
