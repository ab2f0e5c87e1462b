"""In-memory dependency ledger.

Maps each source to the files it included during its last successful compile.
Entries live for the lifetime of the process; a source without an entry is
treated as never compiled, whatever is on disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def normalize_ref(path: str | os.PathLike[str]) -> str:
    """Identity of a source or output: its normalized absolute path."""
    return os.path.normpath(os.path.abspath(os.fspath(path)))


class DependencyLedger:
    """Process-wide record of each source's import set.

    One instance is created at startup and handed to the engine. Entries are
    replaced wholesale on every successful compile, never merged, so an import
    that was dropped from the source stops being tracked.
    """

    def __init__(self) -> None:
        self._imports: dict[str, list[str]] = {}

    def record(self, source: str | os.PathLike[str], included_files: Iterable[str]) -> None:
        """Replace the tracked import set for source."""
        key = normalize_ref(source)
        self._imports[key] = list(included_files)
        logger.debug(f"Recorded {len(self._imports[key])} imports for {key}")

    def clear(self, source: str | os.PathLike[str]) -> None:
        """Forget source; a no-op if it is not tracked."""
        self._imports.pop(normalize_ref(source), None)

    def lookup(self, source: str | os.PathLike[str]) -> list[str] | None:
        """Return a copy of the import set, or None if source is untracked."""
        entry = self._imports.get(normalize_ref(source))
        return list(entry) if entry is not None else None

    def sources(self) -> list[str]:
        return sorted(self._imports)

    def snapshot(self) -> dict[str, list[str]]:
        return {source: list(imports) for source, imports in sorted(self._imports.items())}

    def __contains__(self, source: object) -> bool:
        if not isinstance(source, (str, os.PathLike)):
            return False
        return normalize_ref(source) in self._imports

    def __len__(self) -> int:
        return len(self._imports)
