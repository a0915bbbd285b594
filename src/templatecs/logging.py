from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .errors import ConfigurationError


@dataclass
class LogConfig:
    log_file: Path | str | None = None
    console_level: int = logging.WARNING
    file_level: int = logging.DEBUG
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def verbosity_to_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(config: LogConfig | None = None) -> logging.Logger:
    if config is None:
        config = LogConfig()

    logger = logging.getLogger("templatecs")
    logger.propagate = False

    # Close and clear any existing handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    # Console handler, on stderr so reports written to stdout stay parseable
    ch = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    ch.setLevel(config.console_level)
    logger.addHandler(ch)
    level = config.console_level

    # File handler
    if config.log_file is not None:
        try:
            fh = logging.FileHandler(config.log_file)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open log file {str(config.log_file)!r}: {e.strerror}"
            ) from e
        fh.setLevel(config.file_level)
        fh.setFormatter(logging.Formatter(config.format))
        logger.addHandler(fh)
        level = min(level, config.file_level)

    logger.setLevel(level)
    return logger
