from __future__ import annotations

import pytest

from templatecs.rules.deprecated import DeprecatedSyntax
from templatecs.types import Severity
from templatecs.types import Violation

PATH = "templates/page.html"
IFEQUAL = "{% ifequal a b %}x{% endifequal %}"


def test_removed_tag_is_an_error(stream):
    violations = DeprecatedSyntax(5).check(stream(IFEQUAL))
    assert violations == [
        Violation(
            PATH, 1, 3, 'The "ifequal" tag was removed in Django 4.0.', Severity.ERROR
        ),
        Violation(
            PATH,
            1,
            21,
            'The "endifequal" tag was removed in Django 4.0.',
            Severity.ERROR,
        ),
    ]
    assert {v.rule_id for v in violations} == {"deprecated_syntax"}


def test_deprecated_tag_is_a_warning(stream):
    violations = DeprecatedSyntax(3).check(stream(IFEQUAL))
    assert [(v.message, v.severity) for v in violations] == [
        ('The "ifequal" tag is deprecated since Django 3.1.', Severity.WARNING),
        ('The "endifequal" tag is deprecated since Django 3.1.', Severity.WARNING),
    ]


def test_tag_before_deprecation_is_accepted(stream):
    assert DeprecatedSyntax(2).check(stream(IFEQUAL)) == []


@pytest.mark.parametrize(
    "version,message,severity",
    [
        (4, 'The "length_is" filter is deprecated since Django 4.2.', Severity.WARNING),
        (5, 'The "length_is" filter was removed in Django 5.1.', Severity.ERROR),
    ],
)
def test_length_is_filter(stream, version, message, severity):
    violations = DeprecatedSyntax(version).check(stream("{{ items|length_is:3 }}"))
    assert violations == [Violation(PATH, 1, 9, message, severity)]


def test_filter_inside_tag_arguments(stream):
    template = "{% if items|length_is:3 %}{% endif %}"
    assert DeprecatedSyntax(5).check(stream(template)) == [
        Violation(PATH, 1, 12, 'The "length_is" filter was removed in Django 5.1.'),
    ]


@pytest.mark.parametrize(
    "template,column",
    [
        ("{% load staticfiles %}", 8),
        ("{% load static from staticfiles %}", 20),
    ],
)
def test_removed_library(stream, template, column):
    assert DeprecatedSyntax(3).check(stream(template)) == [
        Violation(
            PATH, 1, column, 'The "staticfiles" library was removed in Django 3.0.'
        ),
    ]


def test_deprecated_library(stream):
    violations = DeprecatedSyntax(2).check(stream("{% load admin_static %}"))
    assert [(v.message, v.severity) for v in violations] == [
        ('The "admin_static" library is deprecated since Django 2.1.', Severity.WARNING),
    ]


def test_current_syntax_is_accepted(stream):
    template = "{% load static %}{% if items|length > 1 %}{{ x|default:'y' }}{% endif %}"
    assert DeprecatedSyntax(5).check(stream(template)) == []
