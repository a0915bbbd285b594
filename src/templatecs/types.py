"""
Shared types for tokenization, validation and reporting.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from enum import IntEnum
from typing import Literal

from .errors import TemplateSyntaxError


class Severity(IntEnum):
    """Violation severity. The integer order is significant for gating."""

    IGNORE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Source:
    """
    One template file to lint.

    `display_path` is what reporters show; it is computed once at discovery
    time (e.g. the path relative to the requested directory).
    """

    content: str
    real_path: str
    display_path: str


@dataclass(frozen=True, slots=True)
class Violation:
    """A single reported issue. Equality ignores `rule_id`."""

    source_path: str
    line: int
    column: int
    message: str
    severity: Severity = Severity.ERROR
    rule_id: str = field(default="unknown", compare=False)


@dataclass(frozen=True, slots=True)
class TemplateToken:
    """
    A lexed template token.

    - `contents` matches Django's `Token.contents` (no delimiters, stripped
      for tags; verbatim for text).
    - `raw` is the exact source slice, delimiters included.
    - `split` matches `Token.split_contents()` for BLOCK tokens.
    - `column` is the 0-based offset of the token start within its line.
    - Tags inside opaque regions (`{% comment %}`, `{% verbatim %}`) are
      emitted as `text` tokens.
    """

    kind: Literal["text", "block", "var", "comment"]
    line: int
    column: int
    contents: str
    raw: str
    split: list[str] | None = None
    name: str | None = None

    @property
    def args(self) -> list[str]:
        """Tag arguments (split contents without the tag name)."""
        return self.split[1:] if self.split else []


@dataclass(frozen=True, slots=True)
class TokenStream:
    """The ordered tokens of one source."""

    source: Source
    tokens: tuple[TemplateToken, ...] = ()

    @property
    def path(self) -> str:
        return self.source.display_path

    def __iter__(self) -> Iterator[TemplateToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def tags(self) -> Iterator[TemplateToken]:
        """Block tags, in template order."""
        for token in self.tokens:
            if token.kind == "block" and token.name:
                yield token


@dataclass(frozen=True, slots=True)
class Tokenized:
    """Successful tokenizer result."""

    stream: TokenStream


@dataclass(frozen=True, slots=True)
class SyntaxFailure:
    """Failed tokenizer result: where and why the template could not be lexed."""

    source_path: str
    line: int
    column: int
    message: str

    def to_violation(self) -> Violation:
        return Violation(
            source_path=self.source_path,
            line=self.line,
            column=self.column,
            message=self.message,
            severity=Severity.ERROR,
            rule_id="syntax",
        )

    def to_error(self) -> TemplateSyntaxError:
        return TemplateSyntaxError(
            self.source_path, self.line, self.column, self.message
        )


TokenizeResult = Tokenized | SyntaxFailure


@dataclass
class OpaqueBlockSpec:
    """Spec for tags that skip parsing of their inner content."""

    end_tags: list[str]
    match_suffix: bool = False


@dataclass(frozen=True)
class BlockTagSpec:
    """
    Structural spec for block tags.

    These tags introduce "delimiter" tags in templates:
    - end tags like `endif`, `endfor`, `endblock`, ...
    - middle tags like `else`, `elif`, `empty`, ...
    """

    start_tags: tuple[str, ...]
    end_tags: tuple[str, ...]
    middle_tags: tuple[str, ...] = ()
    repeatable_middle_tags: tuple[str, ...] = ()
    terminal_middle_tags: tuple[str, ...] = ()
    end_suffix_from_start_index: int | None = None


# ---------------------------------------------------------------------------
# Opaque block utilities
# ---------------------------------------------------------------------------


def merge_opaque_blocks(
    base: dict[str, OpaqueBlockSpec],
    extra: dict[str, OpaqueBlockSpec],
) -> dict[str, OpaqueBlockSpec]:
    """
    Merge opaque-block specs.

    Semantics:
    - `end_tags` are unioned and sorted
    - `match_suffix` is combined via logical-or
    """
    merged = dict(base)
    for name, spec in extra.items():
        existing = merged.get(name)
        if existing is None:
            merged[name] = spec
            continue
        merged[name] = OpaqueBlockSpec(
            end_tags=sorted(set(existing.end_tags + spec.end_tags)),
            match_suffix=existing.match_suffix or spec.match_suffix,
        )
    return merged


def resolve_opaque_blocks(
    opaque_blocks: dict[str, OpaqueBlockSpec] | None,
    *,
    defaults: dict[str, OpaqueBlockSpec] | None = None,
) -> dict[str, OpaqueBlockSpec]:
    """
    Normalize an optional opaque-block mapping with optional defaults.
    """
    base = dict(defaults or {})
    if not opaque_blocks:
        return base
    return merge_opaque_blocks(base, opaque_blocks)
