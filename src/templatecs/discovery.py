"""
Template file discovery.

Turns the requested paths into an ordered mapping of
`{requested path: [template files]}` and, lazily, into `Source` objects.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path

from .errors import ConfigurationError
from .types import Source
from .types import SyntaxFailure

logger = logging.getLogger("templatecs.discovery")

DEFAULT_PATTERNS: tuple[str, ...] = ("*.html",)


def discover_files(
    paths: Sequence[str],
    *,
    exclude: Sequence[str] = (),
    patterns: Sequence[str] = DEFAULT_PATTERNS,
) -> dict[str, list[Path]]:
    """
    Resolve each requested path to the template files it designates.

    - A file is taken as-is, whatever its name.
    - A directory is walked recursively for names matching `patterns`,
      skipping sub-directories listed in `exclude` (either a directory name or
      a path relative to the requested directory).
    - Directories without matches are omitted from the result.
    """
    files: dict[str, list[Path]] = {}
    for path in paths:
        p = Path(path)
        if p.is_file():
            files.setdefault(path, []).append(p)
            continue
        if not p.is_dir():
            raise ConfigurationError(f"Path {path!r} does not exist")

        found = sorted(_walk(p, exclude=exclude, patterns=patterns))
        logger.debug("Found %d template(s) under %s", len(found), path)
        if found:
            files.setdefault(path, []).extend(found)
    return files


def _walk(
    root: Path, *, exclude: Sequence[str], patterns: Sequence[str]
) -> Iterator[Path]:
    excluded = {e.strip("/") for e in exclude if e.strip("/")}
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        # Prune in place so excluded trees are never walked.
        dirnames[:] = [
            d
            for d in dirnames
            if d not in excluded and (rel_dir / d).as_posix() not in excluded
        ]
        for filename in filenames:
            if any(fnmatch.fnmatch(filename, pattern) for pattern in patterns):
                yield Path(dirpath) / filename


def display_path(requested: str, real_path: str) -> str:
    """
    Path shown in reports: the requested root's real path is replaced by the
    path as the user typed it (`templates/` -> `templates/base.html`).
    """
    requested_real = os.path.realpath(requested)
    if real_path == requested_real:
        return requested
    prefix = requested_real.rstrip(os.sep) + os.sep
    if real_path.startswith(prefix):
        root = requested.rstrip("/") or requested
        return os.path.join(root, real_path[len(prefix) :])
    return real_path


def iter_sources(
    files: Mapping[str, list[Path]],
) -> Iterator[Source | SyntaxFailure]:
    """
    Read each discovered file, in order, only when it is requested.

    A file that cannot be read, or is not valid UTF-8, yields a
    `SyntaxFailure` in place of its `Source`: it is handled like a template
    that fails to tokenize.
    """
    for requested, file_list in files.items():
        for file in file_list:
            real_path = os.path.realpath(file)
            path = display_path(requested, real_path)
            logger.debug("Reading %s", real_path)
            try:
                data = Path(real_path).read_bytes()
            except OSError as e:
                logger.debug("Cannot read %s: %s", real_path, e)
                yield SyntaxFailure(path, 1, 0, f"Cannot read file ({e.strerror})")
                continue
            try:
                content = data.decode("utf-8")
            except UnicodeDecodeError as e:
                line = data.count(b"\n", 0, e.start) + 1
                column = e.start - (data.rfind(b"\n", 0, e.start) + 1)
                yield SyntaxFailure(
                    path, line, column, f"File is not valid UTF-8 ({e.reason})"
                )
                continue
            yield Source(content=content, real_path=real_path, display_path=path)
