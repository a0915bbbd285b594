"""
Run configuration.

Defaults can be set in the `[tool.templatecs]` table of a `pyproject.toml`;
command-line flags override them.

    [tool.templatecs]
    paths = ["templates"]
    exclude = ["vendor"]
    severity = "error"
    template_version = 4
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
from pathlib import Path
from typing import Any

from .discovery import DEFAULT_PATTERNS
from .errors import ConfigurationError
from .ruleset import DEFAULT_TEMPLATE_VERSION

PYPROJECT = "pyproject.toml"


@dataclass(frozen=True)
class LintConfig:
    paths: list[str] = field(default_factory=lambda: ["."])
    exclude: list[str] = field(default_factory=list)
    patterns: list[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    severity: str = "warning"
    reporter: str = "console"
    display: str = "all"
    throw_syntax_error: bool = False
    ruleset: str = "official"
    template_version: int = DEFAULT_TEMPLATE_VERSION

    def merge(self, **overrides: Any) -> LintConfig:
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# Expected type of each table key; list values are lists of strings.
_FIELD_TYPES: dict[str, type] = {
    "paths": list,
    "exclude": list,
    "patterns": list,
    "severity": str,
    "reporter": str,
    "display": str,
    "throw_syntax_error": bool,
    "ruleset": str,
    "template_version": int,
}


def load_config(path: Path | None = None) -> LintConfig:
    """
    Load `[tool.templatecs]` from `path` (default: `./pyproject.toml`).

    A missing file or table yields the defaults. Keys use either `snake_case`
    or `kebab-case`.
    """
    if path is None:
        path = Path.cwd() / PYPROJECT
        if not path.is_file():
            return LintConfig()
    elif not path.is_file():
        raise ConfigurationError(f"Config file {str(path)!r} does not exist")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    table = data.get("tool", {}).get("templatecs", {})
    return LintConfig().merge(**_parse_table(table, path))


def _parse_table(table: dict[str, Any], path: Path) -> dict[str, Any]:
    known = {f.name for f in fields(LintConfig)}
    values: dict[str, Any] = {}
    for raw_key, value in table.items():
        key = raw_key.replace("-", "_")
        if key not in known:
            raise ConfigurationError(
                f"Unknown option {raw_key!r} in [tool.templatecs] of {path}"
            )
        expected = _FIELD_TYPES[key]
        # bool is a subclass of int; `template_version = true` is still wrong.
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise ConfigurationError(
                f"Option {raw_key!r} in {path} must be of type {expected.__name__}"
            )
        if expected is list and not all(isinstance(item, str) for item in value):
            raise ConfigurationError(
                f"Option {raw_key!r} in {path} must be a list of strings"
            )
        values[key] = value
    return values
