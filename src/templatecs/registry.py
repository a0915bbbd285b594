"""
Registries of the pluggable rulesets and reporters, keyed by the names
accepted on the command line and in configuration.

Keys are validated up front; an unknown key or a factory that does not
produce the expected type is a `ConfigurationError`.
"""

from __future__ import annotations

from collections.abc import Callable

from .errors import ConfigurationError
from .reporters.base import Reporter
from .reporters.checkstyle import CheckstyleReporter
from .reporters.console import ConsoleReporter
from .reporters.json_report import JsonReporter
from .reporters.line import EmacsReporter
from .reporters.line import GithubReporter
from .ruleset import Minimal
from .ruleset import Official
from .ruleset import Ruleset

RulesetFactory = Callable[[int], Ruleset]
ReporterFactory = Callable[[], Reporter]

RULESETS: dict[str, RulesetFactory] = {
    "official": Official,
    "minimal": Minimal,
}

REPORTERS: dict[str, ReporterFactory] = {
    "console": ConsoleReporter,
    "json": JsonReporter,
    "checkstyle": CheckstyleReporter,
    "emacs": EmacsReporter,
    "github": GithubReporter,
}


def resolve_ruleset(
    name: str,
    template_version: int,
    *,
    registry: dict[str, RulesetFactory] | None = None,
) -> Ruleset:
    registry = RULESETS if registry is None else registry
    factory = registry.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown ruleset {name!r}; expected one of: {', '.join(registry)}"
        )
    ruleset = factory(template_version)
    if not isinstance(ruleset, Ruleset):
        raise ConfigurationError(
            f"Ruleset {name!r} must produce a {Ruleset.__qualname__}, "
            f"got {type(ruleset).__qualname__}"
        )
    return ruleset


def resolve_reporter(
    name: str,
    *,
    registry: dict[str, ReporterFactory] | None = None,
) -> Reporter:
    registry = REPORTERS if registry is None else registry
    factory = registry.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown reporter {name!r}; expected one of: {', '.join(registry)}"
        )
    reporter = factory()
    if not isinstance(reporter, Reporter):
        raise ConfigurationError(
            f"Reporter {name!r} must produce a {Reporter.__qualname__}, "
            f"got {type(reporter).__qualname__}"
        )
    return reporter
