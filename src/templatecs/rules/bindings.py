"""
Helpers for locating template variables bound or referenced by tags.

Binding forms recognised:
- `{% for a, b in items %}`
- `{% with a=x b=y %}` and legacy `{% with x as a %}`
- `... as name` / `... as name silent` on any other tag (`url`, `cycle`, ...)
- `{% blocktranslate asvar name %}`
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..template_syntax.filter_syntax import _split_first_unquoted
from ..template_syntax.filter_syntax import _strip_quoted
from ..types import TemplateToken

_IDENTIFIER_RE = re.compile(r"[A-Za-z_]\w*")
# Identifiers that are not attribute lookups or filter names.
_REFERENCE_RE = re.compile(r"(?<![\w.|])[A-Za-z_]\w*")

# Tags where `as` is part of an expression rather than a binding.
_NO_AS_BINDING = {"if", "elif"}


@dataclass(frozen=True)
class Binding:
    name: str
    token: TemplateToken
    offset: int  # offset of the name within `token.raw`


def bound_names(token: TemplateToken) -> list[Binding]:
    if token.kind != "block" or not token.split or not token.name:
        return []
    bits = token.split
    names: list[str] = []

    if token.name == "for":
        if "in" in bits:
            targets = " ".join(bits[1 : bits.index("in")])
            names.extend(n.strip() for n in targets.split(",") if n.strip())
    elif token.name == "with":
        if len(bits) == 4 and bits[2] == "as":
            names.append(bits[3])
        else:
            for bit in bits[1:]:
                key, value = _split_first_unquoted(bit, "=")
                if value is not None:
                    names.append(key)
    elif token.name not in _NO_AS_BINDING:
        for i, bit in enumerate(bits[:-1]):
            if bit == "asvar" or (bit == "as" and i > 0):
                names.append(bits[i + 1])

    out: list[Binding] = []
    search_from = 2 + len(token.raw[2:]) - len(token.raw[2:].lstrip())
    search_from += len(token.name)
    for name in names:
        if not _IDENTIFIER_RE.fullmatch(name):
            continue
        offset = _find_word(token.raw, name, search_from)
        if offset < 0:
            offset = 0
        else:
            search_from = offset + len(name)
        out.append(Binding(name=name, token=token, offset=offset))
    return out


def referenced_names(token: TemplateToken) -> set[str]:
    """Root names of variables used by a VAR or BLOCK token."""
    if token.kind == "var":
        text = token.contents
    elif token.kind == "block" and token.split:
        text = " ".join(token.split[1:])
    else:
        return set()
    return set(_REFERENCE_RE.findall(_strip_quoted(text)))


def _find_word(raw: str, word: str, start: int) -> int:
    match = re.compile(rf"(?<!\w){re.escape(word)}(?!\w)").search(raw, start)
    return match.start() if match else -1
