"""Staleness detection for compiled stylesheets.

Compares modification times of a source and its recorded imports against the
cached output. Times are compared at full filesystem resolution (st_mtime_ns)
and strictly: an input whose mtime equals the output's is not stale, so on
filesystems with coarse timestamps an edit made in the same tick as the last
compile can go unnoticed.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from collections.abc import Sequence

from ..errors import FilesystemError
from ..errors import SourceNotFoundError
from .models import StaleReason
from .models import StalenessCheck

logger = logging.getLogger(__name__)

StatFunction = Callable[[str], os.stat_result]


class StalenessDetector:
    """Decides whether a cached output still reflects its inputs."""

    def __init__(self, stat: StatFunction = os.stat) -> None:
        """Initialize staleness detector.

        Args:
            stat: Function used to stat files (injectable for synthetic timestamps)
        """
        self._stat = stat

    async def stat(self, path: str) -> os.stat_result:
        """Stat a file without blocking the event loop."""
        return await asyncio.to_thread(self._stat, path)

    async def check(self, source: str, output: str, imports: Sequence[str]) -> StalenessCheck:
        """Check a tracked source against its cached output.

        Args:
            source: Source path
            output: Cached output path
            imports: Import set recorded at the last successful compile

        Returns:
            StalenessCheck whose reason is None when the output can be served

        Raises:
            SourceNotFoundError: If the source does not exist
            FilesystemError: If source or output cannot be stat-ed for another reason
        """
        try:
            source_stat = await self.stat(source)
        except FileNotFoundError as e:
            raise SourceNotFoundError(source) from e
        except OSError as e:
            raise FilesystemError(source, e) from e

        try:
            output_stat = await self.stat(output)
        except FileNotFoundError:
            return StalenessCheck(StaleReason.OUTPUT_MISSING)
        except OSError as e:
            raise FilesystemError(output, e) from e

        if source_stat.st_mtime_ns > output_stat.st_mtime_ns:
            return StalenessCheck(StaleReason.SOURCE_MODIFIED)

        changed = await self.changed_imports(imports, output_stat.st_mtime_ns)
        if changed:
            return StalenessCheck(StaleReason.IMPORT_MODIFIED, changed_imports=changed)

        return StalenessCheck()

    async def changed_imports(self, imports: Sequence[str], since_ns: int) -> list[str]:
        """Return the imports modified after since_ns.

        An import that cannot be stat-ed (deleted, unreadable) counts as changed.
        """
        if not imports:
            return []

        results = await asyncio.gather(*(self._import_changed(path, since_ns) for path in imports))
        return [path for path, changed in zip(imports, results, strict=True) if changed]

    async def _import_changed(self, path: str, since_ns: int) -> bool:
        try:
            import_stat = await self.stat(path)
        except OSError as e:
            logger.debug(f"Treating import as changed, stat failed for {path}: {e}")
            return True
        return import_stat.st_mtime_ns > since_ns
