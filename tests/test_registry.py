from __future__ import annotations

import pytest

from templatecs.errors import ConfigurationError
from templatecs.registry import REPORTERS
from templatecs.registry import RULESETS
from templatecs.registry import resolve_reporter
from templatecs.registry import resolve_ruleset
from templatecs.reporters.base import Reporter
from templatecs.reporters.json_report import JsonReporter
from templatecs.ruleset import Minimal
from templatecs.ruleset import Official


def test_stock_names():
    assert list(RULESETS) == ["official", "minimal"]
    assert list(REPORTERS) == ["console", "json", "checkstyle", "emacs", "github"]


def test_resolve_ruleset_passes_template_version():
    ruleset = resolve_ruleset("minimal", 3)
    assert isinstance(ruleset, Minimal)
    assert ruleset.template_version == 3


@pytest.mark.parametrize("name", list(REPORTERS))
def test_resolve_every_reporter(name):
    assert isinstance(resolve_reporter(name), Reporter)


def test_unknown_ruleset():
    with pytest.raises(ConfigurationError, match="Unknown ruleset 'strict'"):
        resolve_ruleset("strict", 5)


def test_unknown_reporter():
    with pytest.raises(ConfigurationError, match="Unknown reporter 'xml'"):
        resolve_reporter("xml")


def test_custom_registry():
    registry = {"team": Official}
    assert isinstance(resolve_ruleset("team", 4, registry=registry), Official)
    assert isinstance(resolve_reporter("j", registry={"j": JsonReporter}), JsonReporter)


def test_factory_must_produce_a_ruleset():
    with pytest.raises(ConfigurationError, match="must produce a Ruleset"):
        resolve_ruleset("bad", 5, registry={"bad": lambda version: object()})


def test_factory_must_produce_a_reporter():
    with pytest.raises(ConfigurationError, match="must produce a Reporter"):
        resolve_reporter("bad", registry={"bad": dict})
