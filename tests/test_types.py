from __future__ import annotations

from templatecs.errors import ConfigurationError
from templatecs.errors import TemplatecsError
from templatecs.types import OpaqueBlockSpec
from templatecs.types import Severity
from templatecs.types import Violation
from templatecs.types import merge_opaque_blocks
from templatecs.types import resolve_opaque_blocks


def test_severity_order():
    assert Severity.IGNORE < Severity.INFO < Severity.WARNING < Severity.ERROR
    assert [s.label for s in Severity] == ["ignore", "info", "warning", "error"]


def test_violation_equality_ignores_rule_id():
    a = Violation("t.html", 1, 2, "m", Severity.INFO, rule_id="a")
    b = Violation("t.html", 1, 2, "m", Severity.INFO, rule_id="b")
    assert a == b
    assert a != Violation("t.html", 1, 2, "m", Severity.ERROR)


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, TemplatecsError)
    assert issubclass(ConfigurationError, ValueError)


def test_merge_opaque_blocks():
    merged = merge_opaque_blocks(
        {"raw": OpaqueBlockSpec(end_tags=["endraw"])},
        {
            "raw": OpaqueBlockSpec(end_tags=["end_raw"], match_suffix=True),
            "code": OpaqueBlockSpec(end_tags=["endcode"]),
        },
    )
    assert merged == {
        "raw": OpaqueBlockSpec(end_tags=["end_raw", "endraw"], match_suffix=True),
        "code": OpaqueBlockSpec(end_tags=["endcode"]),
    }


def test_resolve_opaque_blocks_defaults():
    defaults = {"comment": OpaqueBlockSpec(end_tags=["endcomment"])}
    assert resolve_opaque_blocks(None, defaults=defaults) == defaults
    assert resolve_opaque_blocks(None) == {}
