"""
Lint orchestration.

Drives the tokenizer and ruleset over every discovered source, in discovery
order, and aggregates the violations. This module performs no I/O of its
own: sources are read by `discovery.iter_sources()` and rendering is the
reporter's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path

from .discovery import iter_sources
from .errors import ConfigurationError
from .ruleset import Ruleset
from .template_syntax.tokenization import Tokenizer
from .types import Source
from .types import SyntaxFailure
from .types import Violation


def lint_sources(
    sources: Iterable[Source | SyntaxFailure],
    tokenizer: Tokenizer,
    ruleset: Ruleset,
    *,
    tolerate_syntax_errors: bool = True,
) -> list[Violation]:
    """
    Lint `sources` and return all violations.

    Violations are ordered by source, then by the order the ruleset emitted
    them. A source that fails to tokenize either aborts the run with
    `TemplateSyntaxError` (strict) or contributes a single ERROR violation
    carrying the syntax error's location and message (tolerant). A
    `SyntaxFailure` given in place of a source (a file that could not be
    read) is handled the same way, without tokenizing.
    """
    if not isinstance(ruleset, Ruleset):
        raise ConfigurationError(
            f"Ruleset must be an instance of {Ruleset.__qualname__}, "
            f"got {type(ruleset).__qualname__}"
        )

    violations: list[Violation] = []
    for source in sources:
        if isinstance(source, SyntaxFailure):
            result = source
        else:
            result = tokenizer.tokenize(source)
        if isinstance(result, SyntaxFailure):
            if not tolerate_syntax_errors:
                raise result.to_error()
            violations.append(result.to_violation())
            continue
        violations.extend(ruleset.validate(result.stream))
    return violations


def lint_files(
    files: Mapping[str, list[Path]],
    tokenizer: Tokenizer,
    ruleset: Ruleset,
    *,
    tolerate_syntax_errors: bool = True,
) -> list[Violation]:
    """`lint_sources()` over the output of `discovery.discover_files()`."""
    return lint_sources(
        iter_sources(files),
        tokenizer,
        ruleset,
        tolerate_syntax_errors=tolerate_syntax_errors,
    )
