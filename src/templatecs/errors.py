"""
Error taxonomy.

- `ConfigurationError`: bad run configuration, always fatal and raised before
  (or independently of) file processing.
- `TemplateSyntaxError`: a template could not be tokenized and the run is in
  strict mode. Tolerant runs convert the failure into a violation instead.

Rule violations are never raised; they are plain data (`types.Violation`).
"""

from __future__ import annotations


class TemplatecsError(Exception):
    """Base class for all errors raised by templatecs."""


class ConfigurationError(TemplatecsError, ValueError):
    """Invalid ruleset, reporter, severity, display mode or config file."""


class TemplateSyntaxError(TemplatecsError):
    """A template failed to tokenize while syntax errors are fatal."""

    def __init__(self, source_path: str, line: int, column: int, message: str):
        super().__init__(message)
        self.source_path = source_path
        self.line = line
        self.column = column
        self.message = message

    def __str__(self) -> str:
        return (
            f"{self.message} in {self.source_path} "
            f"at line {self.line}, column {self.column}"
        )
