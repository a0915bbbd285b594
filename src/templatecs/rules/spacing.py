"""
Whitespace inside tag delimiters and filter expressions.
"""

from __future__ import annotations

from ..template_syntax.filter_syntax import _unquoted_positions
from ..types import TokenStream
from ..types import Violation
from .base import Rule

_CLOSERS = {"{%": "%}", "{{": "}}"}


class DelimiterSpacing(Rule):
    """`{% tag %}` / `{{ var }}`: exactly one space inside each delimiter."""

    rule_id = "delimiter_spacing"

    def check(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        for token in stream:
            if token.kind not in ("block", "var"):
                continue
            opener = token.raw[:2]
            closer = _CLOSERS[opener]
            inner = token.raw[2:-2]

            leading = len(inner) - len(inner.lstrip(" "))
            if leading != 1:
                violations.append(
                    self.violation(
                        stream,
                        token,
                        f'There should be 1 space after the "{opener}".',
                    )
                )

            trailing = len(inner) - len(inner.rstrip(" "))
            if trailing != 1:
                violations.append(
                    self.violation(
                        stream,
                        token,
                        f'There should be 1 space before the "{closer}".',
                        offset=len(token.raw) - 2,
                    )
                )
        return violations


class FilterSpacing(Rule):
    """`value|filter:arg`: no whitespace around the pipe or the argument colon."""

    rule_id = "filter_spacing"

    def check(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        for token in stream:
            if token.kind not in ("block", "var"):
                continue
            raw = token.raw
            # Only the inner part of the tag; delimiters never contain `|`/`:`.
            inner_start = 2
            inner = raw[inner_start:-2]
            pipes = _unquoted_positions(inner, "|")
            if not pipes:
                continue
            # Colons only separate filter arguments after the first pipe.
            colons = [
                pos for pos in _unquoted_positions(inner, ":") if pos > pipes[0]
            ]
            for pos, char in sorted(
                [(p, "|") for p in pipes] + [(p, ":") for p in colons]
            ):
                before = inner[pos - 1] if pos > 0 else ""
                after = inner[pos + 1] if pos + 1 < len(inner) else ""
                if before.isspace():
                    violations.append(
                        self.violation(
                            stream,
                            token,
                            f'There should be no space before the "{char}".',
                            offset=inner_start + pos,
                        )
                    )
                if after.isspace():
                    violations.append(
                        self.violation(
                            stream,
                            token,
                            f'There should be no space after the "{char}".',
                            offset=inner_start + pos,
                        )
                    )
        return violations
