from __future__ import annotations

import pytest

from templatecs.rules.structure import BlockStructure
from templatecs.types import BlockTagSpec
from templatecs.types import Violation

PATH = "templates/page.html"


def _messages(violations: list[Violation]) -> list[str]:
    return [v.message for v in violations]


@pytest.mark.parametrize(
    "template",
    [
        "{% if a %}x{% elif b %}y{% elif c %}z{% else %}w{% endif %}",
        "{% for x in y %}{{ x }}{% empty %}none{% endfor %}",
        "{% block content %}{% block inner %}{% endblock %}{% endblock content %}",
        "{% blocktranslate count n=1 %}one{% plural %}many{% endblocktranslate %}",
        "{% with a=1 %}{% spaceless %}{% endspaceless %}{% endwith %}",
        "{% comment %}{% else %}{% endcomment %}",
    ],
)
def test_balanced_templates(stream, template):
    assert BlockStructure().check(stream(template)) == []


def test_duplicate_terminal_delimiter(stream):
    template = "{% if a %}x{% else %}y{% else %}z{% endif %}"
    violations = BlockStructure().check(stream(template))
    assert violations == [
        Violation(PATH, 1, 22, "Duplicate 'else' inside 'if' block"),
    ]
    assert violations[0].rule_id == "block_structure"


def test_duplicate_empty(stream):
    template = "{% for x in y %}{% empty %}{% empty %}{% endfor %}"
    assert BlockStructure().check(stream(template)) == [
        Violation(PATH, 1, 27, "Duplicate 'empty' inside 'for' block"),
    ]


def test_delimiter_after_terminal(stream):
    template = "{% if a %}{% else %}{% elif b %}{% endif %}"
    assert _messages(BlockStructure().check(stream(template))) == [
        "Unexpected 'elif' after terminal delimiter in 'if' block",
    ]


@pytest.mark.parametrize(
    "template,message",
    [
        ("{% else %}", "Unexpected 'else' outside any block"),
        ("{% endfor %}", "Unexpected 'endfor' outside any block"),
        (
            "{% if a %}{% empty %}{% endif %}",
            "Unexpected 'empty' inside 'if' block",
        ),
    ],
)
def test_misplaced_tags(stream, template, message):
    assert _messages(BlockStructure().check(stream(template))) == [message]


def test_mismatched_end_tag_leaves_block_open(stream):
    violations = BlockStructure().check(stream("{% for x in y %}{% endif %}"))
    assert violations == [
        Violation(PATH, 1, 16, "Mismatched 'endif' inside 'for' block"),
        Violation(PATH, 1, 0, "Unclosed 'for' block"),
    ]


def test_unclosed_blocks_innermost_first(stream):
    violations = BlockStructure().check(stream("{% if a %}\n{% for x in y %}"))
    assert violations == [
        Violation(PATH, 2, 0, "Unclosed 'for' block"),
        Violation(PATH, 1, 0, "Unclosed 'if' block"),
    ]


def test_endblock_suffix_mismatch(stream):
    template = "{% block content %}{% endblock sidebar %}"
    assert BlockStructure().check(stream(template)) == [
        Violation(
            PATH,
            1,
            19,
            "End tag 'endblock' suffix mismatch (expected 'content', got 'sidebar')",
        ),
    ]


def test_endblock_too_many_arguments(stream):
    template = "{% block a %}{% endblock a b %}"
    assert BlockStructure().check(stream(template)) == [
        Violation(PATH, 1, 13, "End tag 'endblock' has too many arguments"),
    ]


def test_implicit_end_tag_blocks(stream):
    template = (
        "{% for x in y %}"
        "{% ifequal a b %}{% else %}{% endifequal %}"
        "{% empty %}"
        "{% endfor %}"
    )
    assert BlockStructure().check(stream(template)) == []


def test_custom_block_specs(stream):
    rule = BlockStructure(
        block_specs=[
            BlockTagSpec(
                start_tags=("switch",),
                end_tags=("endswitch",),
                middle_tags=("case",),
                repeatable_middle_tags=("case",),
            )
        ]
    )
    template = "{% switch x %}{% case 1 %}{% case 2 %}{% endswitch %}"
    assert rule.check(stream(template)) == []


def test_named_end_tag_for_unnamed_block(stream):
    template = "{% block %}{% endblock x %}"
    assert BlockStructure().check(stream(template)) == [
        Violation(
            PATH,
            1,
            11,
            "End tag 'endblock' names 'x' but the 'block' tag has no name",
        ),
    ]
