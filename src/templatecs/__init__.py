"""
templatecs - coding standards checker for Django templates.

Templates are tokenized with Django's own lexer, checked against a ruleset of
style/correctness rules, and the resulting violations are gated on a
configurable severity so the exit code can be used in CI.
"""

from __future__ import annotations

__version__ = "0.1.0"
