from __future__ import annotations

import re

from ..types import TokenStream
from ..types import Violation
from .base import Rule

_TRAILING_RE = re.compile(r"[ \t]+(?=\r?\n)")
_TRAILING_EOF_RE = re.compile(r"[ \t]+\Z")


class TrailingSpace(Rule):
    rule_id = "trailing_space"

    def check(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        tokens = stream.tokens
        for i, token in enumerate(tokens):
            if token.kind != "text":
                continue
            matches = list(_TRAILING_RE.finditer(token.raw))
            if i == len(tokens) - 1:
                matches.extend(_TRAILING_EOF_RE.finditer(token.raw))
            for match in matches:
                violations.append(
                    self.violation(
                        stream,
                        token,
                        "A line should not end with blank space(s).",
                        offset=match.start(),
                    )
                )
        return violations
