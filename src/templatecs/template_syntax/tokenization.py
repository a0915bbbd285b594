"""
Template tokenization.

This module defines the canonical token stream consumed by rules. Keeping
tokenization in one place keeps the rules independent of Django's lexer and
makes the tokenizer swappable (see `Tokenizer`).
"""

from __future__ import annotations

import re
from typing import Protocol

from django.template.base import DebugLexer
from django.template.base import TokenType
from django.template.base import tag_re

from ..overrides import DEFAULT_OPAQUE_BLOCKS
from ..types import OpaqueBlockSpec
from ..types import Source
from ..types import SyntaxFailure
from ..types import TemplateToken
from ..types import TokenizeResult
from ..types import Tokenized
from ..types import TokenStream
from ..types import resolve_opaque_blocks

# Opening delimiters that Django leaves in TEXT when the tag is never closed on
# the same line.
_UNCLOSED_RE = re.compile(r"\{%|\{\{|\{#")
_UNCLOSED_MESSAGES = {
    "{%": "Unclosed block tag",
    "{{": "Unclosed variable tag",
    "{#": "Unclosed comment tag",
}

_KINDS = {
    TokenType.TEXT: "text",
    TokenType.VAR: "var",
    TokenType.BLOCK: "block",
    TokenType.COMMENT: "comment",
}


class Tokenizer(Protocol):
    """Turns a source into a token stream, or reports why it cannot."""

    def tokenize(self, source: Source) -> TokenizeResult: ...


class _Failure(Exception):
    def __init__(self, offset: int, message: str):
        super().__init__(message)
        self.offset = offset
        self.message = message


class DjangoTokenizer:
    """
    Tokenizer backed by `django.template.base.DebugLexer`.

    The lexer never fails on its own (unparseable markup is left as text), so
    the conditions Django's parser would reject at compile time are detected
    here and returned as a `SyntaxFailure`.
    """

    def __init__(self, opaque_blocks: dict[str, OpaqueBlockSpec] | None = None):
        self.opaque_blocks = resolve_opaque_blocks(
            opaque_blocks, defaults=DEFAULT_OPAQUE_BLOCKS
        )

    def tokenize(self, source: Source) -> TokenizeResult:
        template = source.content
        try:
            tokens = tokenize_template(template, opaque_blocks=self.opaque_blocks)
        except _Failure as e:
            line, column = _line_and_column(template, e.offset)
            return SyntaxFailure(
                source_path=source.display_path,
                line=line,
                column=column,
                message=e.message,
            )
        return Tokenized(TokenStream(source=source, tokens=tuple(tokens)))


def tokenize_template(
    template: str,
    *,
    opaque_blocks: dict[str, OpaqueBlockSpec] | None = None,
) -> list[TemplateToken]:
    """
    Tokenize a template into TEXT/BLOCK/VAR/COMMENT tokens, honoring opaque
    blocks.

    Raises `_Failure` (internal) on the first syntax error; `DjangoTokenizer`
    converts it into a `SyntaxFailure` result.
    """
    out: list[TemplateToken] = []
    opaque_blocks = resolve_opaque_blocks(opaque_blocks)
    opaque_stack: list[tuple[OpaqueBlockSpec, str, int, str]] = []

    for token in DebugLexer(template).tokenize():
        start, end = token.position
        raw = template[start:end]
        column = _column(template, start)
        kind = _KINDS[token.token_type]

        if opaque_stack:
            spec, suffix, _, _ = opaque_stack[-1]
            if kind == "block" and _closes_opaque(token.contents, spec, suffix):
                bits = token.split_contents()
                out.append(
                    TemplateToken(
                        kind="block",
                        line=token.lineno,
                        column=column,
                        contents=token.contents,
                        raw=raw,
                        split=bits,
                        name=bits[0],
                    )
                )
                opaque_stack.pop()
                continue
            out.append(
                TemplateToken(
                    kind="text",
                    line=token.lineno,
                    column=column,
                    contents=raw,
                    raw=raw,
                )
            )
            continue

        if kind == "text":
            # Tags Django demoted to text inside `{% verbatim %}` are complete.
            if not tag_re.fullmatch(raw):
                match = _UNCLOSED_RE.search(raw)
                if match:
                    raise _Failure(
                        start + match.start(), _UNCLOSED_MESSAGES[match.group(0)]
                    )
            out.append(
                TemplateToken(
                    kind="text",
                    line=token.lineno,
                    column=column,
                    contents=token.contents,
                    raw=raw,
                )
            )
            continue

        if kind == "var":
            if not token.contents:
                raise _Failure(start, "Empty variable tag")
            out.append(
                TemplateToken(
                    kind="var",
                    line=token.lineno,
                    column=column,
                    contents=token.contents,
                    raw=raw,
                )
            )
            continue

        if kind == "comment":
            out.append(
                TemplateToken(
                    kind="comment",
                    line=token.lineno,
                    column=column,
                    contents=token.contents,
                    raw=raw,
                )
            )
            continue

        bits = token.split_contents()
        if not bits:
            raise _Failure(start, "Empty block tag")
        name = bits[0]
        out.append(
            TemplateToken(
                kind="block",
                line=token.lineno,
                column=column,
                contents=token.contents,
                raw=raw,
                split=bits,
                name=name,
            )
        )

        spec = opaque_blocks.get(name)
        if spec:
            suffix = token.contents[len(name) :].strip() if spec.match_suffix else ""
            opaque_stack.append((spec, suffix, start, name))

    if opaque_stack:
        _, _, start, name = opaque_stack[0]
        raise _Failure(start, f"Unclosed '{name}' tag")

    return out


def _closes_opaque(contents: str, spec: OpaqueBlockSpec, suffix: str) -> bool:
    name = contents.split(None, 1)[0] if contents.strip() else ""
    if spec.match_suffix:
        return name in spec.end_tags and contents[len(name) :].strip() == suffix
    # `skip_past("endtag foo")` matches full contents, not just the tag name.
    return contents in spec.end_tags or name in spec.end_tags


def _column(template: str, offset: int) -> int:
    return offset - (template.rfind("\n", 0, offset) + 1)


def _line_and_column(template: str, offset: int) -> tuple[int, int]:
    return template.count("\n", 0, offset) + 1, _column(template, offset)
