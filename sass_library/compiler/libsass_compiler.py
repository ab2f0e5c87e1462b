"""Default compiler backed by the libsass Python binding.

libsass does not report which files an ``@import`` pulled in, so the compiler
registers a pass-through importer that observes every import request,
resolves it the way libsass does and then lets libsass load the file itself.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from collections.abc import Sequence

import sass

from ..errors import CompileError
from .base import CompileOutput

logger = logging.getLogger(__name__)

SASS_EXTENSIONS = (".scss", ".sass", ".css")

_LOCATION_RE = re.compile(r"on line (\d+)(?::(\d+))? of (.+)")

Importer = tuple[int, Callable]


def _candidates(target: str) -> list[str]:
    """Files libsass would try for an import target, in lookup order."""
    directory, name = os.path.split(target)
    _, ext = os.path.splitext(name)
    if ext in SASS_EXTENSIONS:
        return [target, os.path.join(directory, f"_{name}")]

    found = []
    for extension in SASS_EXTENSIONS:
        found.append(os.path.join(directory, f"_{name}{extension}"))
        found.append(os.path.join(directory, f"{name}{extension}"))
    for extension in SASS_EXTENSIONS:
        found.append(os.path.join(target, f"_index{extension}"))
        found.append(os.path.join(target, f"index{extension}"))
    return found


def resolve_import(path: str, prev: str, include_paths: Sequence[str]) -> str | None:
    """Resolve an import request to an absolute file path.

    Args:
        path: Import target as written in the stylesheet
        prev: File containing the import ("stdin" for the top-level source)
        include_paths: Search directories, in order

    Returns:
        Absolute path of the first matching file, or None for remote or
        unresolvable imports
    """
    if path.startswith(("http://", "https://", "//", "url(")):
        return None

    bases: list[str] = []
    if prev and prev != "stdin":
        bases.append(os.path.dirname(prev))
    bases.extend(include_paths)

    for base in bases:
        for candidate in _candidates(os.path.join(base, path)):
            if os.path.isfile(candidate):
                return os.path.normpath(os.path.abspath(candidate))
    return None


class ImportTracker:
    """libsass importer that records resolved imports and never handles them."""

    def __init__(self, include_paths: Sequence[str]):
        self.include_paths = list(include_paths)
        self.included_files: list[str] = []

    def __call__(self, path: str, prev: str) -> None:
        resolved = resolve_import(path, prev, self.include_paths)
        if resolved is None:
            logger.debug(f"Unresolved import {path!r} from {prev}")
        elif resolved not in self.included_files:
            self.included_files.append(resolved)
        return None


def parse_compile_error(error: sass.CompileError) -> CompileError:
    """Convert a libsass error into a CompileError with its location."""
    text = str(error.args[0] if error.args else error)
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    first_line = text.strip().splitlines()[0] if text.strip() else "Compilation failed"
    message = first_line.removeprefix("Error: ").strip()

    match = _LOCATION_RE.search(text)
    if not match:
        return CompileError(message)

    line = int(match.group(1))
    column = int(match.group(2)) if match.group(2) else None
    location = match.group(3).strip()
    if location == "stdin":
        return CompileError(message, line=line, column=column)
    # libsass names imported files relative to the working directory
    return CompileError(message, line=line, column=column, file=os.path.normpath(os.path.abspath(location)))


class LibsassCompiler:
    """Compile SCSS text with libsass, reporting the files it imported.

    Args:
        importers: Extra libsass importers as (priority, callable) pairs
        precision: Optional numeric precision passed to libsass
    """

    def __init__(self, importers: Sequence[Importer] | None = None, precision: int | None = None):
        self.importers = list(importers or [])
        self.precision = precision

    def __call__(self, text: str, include_paths: Sequence[str], output_style: str = "nested") -> CompileOutput:
        tracker = ImportTracker(include_paths)
        top_priority = max((priority for priority, _ in self.importers), default=0) + 1

        options: dict = {
            "string": text,
            "include_paths": list(include_paths),
            "output_style": output_style,
            "importers": [(top_priority, tracker), *self.importers],
        }
        if self.precision is not None:
            options["precision"] = self.precision

        try:
            css = sass.compile(**options)
        except sass.CompileError as e:
            raise parse_compile_error(e) from e

        return CompileOutput(css=css, included_files=tracker.included_files)
