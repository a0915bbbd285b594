"""
Rulesets: versioned bundles of rules exposing a single `validate()` pass.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod

from .rules.base import Rule
from .rules.deprecated import DeprecatedSyntax
from .rules.spacing import DelimiterSpacing
from .rules.spacing import FilterSpacing
from .rules.structure import BlockStructure
from .rules.variables import LowerCaseVariable
from .rules.variables import UnusedVariable
from .rules.whitespace import TrailingSpace
from .types import Severity
from .types import TokenStream
from .types import Violation

DEFAULT_TEMPLATE_VERSION = 5


class Ruleset(ABC):
    """
    Base class (and marker) for rulesets.

    `get_rules()` must build new rule instances on every call; `validate()`
    relies on it so that each file gets a fresh pass.
    """

    def __init__(self, template_version: int = DEFAULT_TEMPLATE_VERSION):
        self.template_version = template_version

    @abstractmethod
    def get_rules(self) -> list[Rule]: ...

    def validate(self, stream: TokenStream) -> list[Violation]:
        violations: list[Violation] = []
        for rule in self.get_rules():
            violations.extend(rule.check(stream))
        return violations


class Official(Ruleset):
    """Every stock rule: structure, deprecations, and coding style."""

    def get_rules(self) -> list[Rule]:
        return [
            DelimiterSpacing(Severity.ERROR),
            FilterSpacing(Severity.ERROR),
            LowerCaseVariable(Severity.ERROR),
            UnusedVariable(Severity.WARNING),
            TrailingSpace(Severity.ERROR),
            BlockStructure(Severity.ERROR),
            DeprecatedSyntax(self.template_version),
        ]


class Minimal(Ruleset):
    """Correctness only: block structure and deprecations."""

    def get_rules(self) -> list[Rule]:
        return [
            BlockStructure(Severity.ERROR),
            DeprecatedSyntax(self.template_version),
        ]
