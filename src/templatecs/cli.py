from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from . import __version__
from .config import LintConfig
from .config import load_config
from .discovery import discover_files
from .errors import ConfigurationError
from .errors import TemplateSyntaxError
from .lint import lint_files
from .logging import LogConfig
from .logging import configure_logging
from .logging import verbosity_to_level
from .registry import REPORTERS
from .registry import RULESETS
from .registry import resolve_reporter
from .registry import resolve_ruleset
from .severity import DISPLAY_MODES
from .severity import SEVERITY_NAMES
from .severity import decide_exit_code
from .severity import filter_for_display
from .severity import resolve_threshold
from .severity import validate_display
from .template_syntax.tokenization import DjangoTokenizer

logger = logging.getLogger("templatecs.cli")

EXIT_CONFIG_ERROR = 2
EXIT_SYNTAX_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="templatecs",
        description="Check Django templates against a coding standard.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=None,
        help="Files or directories to scan for templates (default: '.').",
    )
    parser.add_argument(
        "-t",
        "--template-version",
        type=int,
        default=None,
        help="The major version of Django whose template language is used (default: 5).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Directory to skip, relative to a scanned path. Repeatable.",
    )
    parser.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        help="Glob for template file names (default: '*.html'). Repeatable.",
    )
    parser.add_argument(
        "-s",
        "--severity",
        default=None,
        help=(
            "The lowest severity that fails the run: "
            f"{', '.join(SEVERITY_NAMES)} (default: warning)."
        ),
    )
    parser.add_argument(
        "-r",
        "--reporter",
        default=None,
        help=f"The reporter to use: {', '.join(REPORTERS)} (default: console).",
    )
    parser.add_argument(
        "-d",
        "--display",
        default=None,
        help=(
            f"The violations to display, {' or '.join(repr(m) for m in DISPLAY_MODES)} "
            "(default: all)."
        ),
    )
    parser.add_argument(
        "-e",
        "--throw-syntax-error",
        action="store_true",
        default=None,
        help="Abort on the first template that cannot be tokenized.",
    )
    parser.add_argument(
        "--ruleset",
        default=None,
        help=f"The ruleset to use: {', '.join(RULESETS)} (default: official).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="pyproject.toml to read [tool.templatecs] from (default: ./pyproject.toml).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def run(config: LintConfig, output: TextIO) -> int:
    """Lint according to `config`, report to `output`, return the exit code."""
    # Everything that can be misconfigured is checked before any file is read.
    threshold = resolve_threshold(config.severity)
    display = validate_display(config.display)
    ruleset = resolve_ruleset(config.ruleset, config.template_version)
    reporter = resolve_reporter(config.reporter)

    files = discover_files(
        config.paths,
        exclude=config.exclude,
        patterns=config.patterns,
    )
    logger.info(
        "Linting %d file(s) with the %r ruleset (Django %d)",
        sum(len(f) for f in files.values()),
        config.ruleset,
        config.template_version,
    )

    violations = lint_files(
        files,
        DjangoTokenizer(),
        ruleset,
        tolerate_syntax_errors=not config.throw_syntax_error,
    )
    logger.info("Found %d violation(s)", len(violations))

    reporter.report(output, filter_for_display(violations, display, threshold))
    return decide_exit_code(violations, threshold)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(
            LogConfig(
                log_file=args.log_file,
                console_level=verbosity_to_level(args.verbose),
            )
        )
        config = load_config(args.config).merge(
            paths=args.paths or None,
            exclude=args.exclude,
            patterns=args.patterns,
            severity=args.severity,
            reporter=args.reporter,
            display=args.display,
            throw_syntax_error=args.throw_syntax_error,
            ruleset=args.ruleset,
            template_version=args.template_version,
        )
        logger.debug("Effective configuration: %r", config)
        return run(config, sys.stdout)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG_ERROR
    except TemplateSyntaxError as e:
        logger.error("Syntax error: %s", e)
        return EXIT_SYNTAX_ERROR
