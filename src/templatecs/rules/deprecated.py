"""
Version-aware checks for tags, filters and tag libraries that Django has
deprecated or removed.

The severity depends on the configured Django major version: WARNING once the
feature is deprecated, ERROR once it is removed. A major version is taken to
include every release in its series.
"""

from __future__ import annotations

from ..overrides import DEPRECATED_FILTERS
from ..overrides import DEPRECATED_LIBRARIES
from ..overrides import DEPRECATED_TAGS
from ..overrides import RELEASE_NOTES
from ..template_syntax.filter_syntax import _extract_filter_exprs_from_token
from ..template_syntax.filter_syntax import _parse_filter_chain
from ..types import Severity
from ..types import TemplateToken
from ..types import TokenStream
from ..types import Violation
from .base import Rule


class DeprecatedSyntax(Rule):
    rule_id = "deprecated_syntax"

    def __init__(self, template_version: int):
        super().__init__(Severity.ERROR)
        self.template_version = template_version

    def check(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        for token in stream:
            if token.kind == "block" and token.name:
                self._check_name(
                    stream, token, "tag", token.name, DEPRECATED_TAGS, violations
                )
                if token.name == "load":
                    for library in _loaded_libraries(token):
                        self._check_name(
                            stream,
                            token,
                            "library",
                            library,
                            DEPRECATED_LIBRARIES,
                            violations,
                        )
            if token.kind in ("block", "var"):
                for name in _filter_names(token):
                    self._check_name(
                        stream, token, "filter", name, DEPRECATED_FILTERS, violations
                    )
        return violations

    def _check_name(
        self,
        stream: TokenStream,
        token: TemplateToken,
        what: str,
        name: str,
        table: dict[str, tuple[int, int]],
        violations: list[Violation],
    ) -> None:
        if name not in table:
            return
        deprecated_in, removed_in = table[name]
        deprecated_release, removed_release = RELEASE_NOTES.get(
            name, (str(deprecated_in), str(removed_in))
        )
        offset = max(token.raw.find(name), 0)
        if self.template_version >= removed_in:
            violations.append(
                self.violation(
                    stream,
                    token,
                    f'The "{name}" {what} was removed in Django {removed_release}.',
                    offset=offset,
                    severity=Severity.ERROR,
                )
            )
        elif self.template_version >= deprecated_in:
            violations.append(
                self.violation(
                    stream,
                    token,
                    f'The "{name}" {what} is deprecated since Django '
                    f"{deprecated_release}.",
                    offset=offset,
                    severity=Severity.WARNING,
                )
            )


def _loaded_libraries(token: TemplateToken) -> list[str]:
    # `{% load a b %}` or `{% load x y from lib %}`
    args = token.args
    if len(args) >= 3 and args[-2] == "from":
        return [args[-1]]
    return args


def _filter_names(token: TemplateToken) -> list[str]:
    if token.kind == "var":
        return [name for name, _ in _parse_filter_chain(token.contents)]
    names: list[str] = []
    for bit in token.args:
        for expr in _extract_filter_exprs_from_token(bit):
            names.extend(name for name, _ in _parse_filter_chain(expr))
    return names
