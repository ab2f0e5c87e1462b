"""Recompilation decision engine.

Decides, per request, whether the cached stylesheet can be served or the
source must be recompiled, runs the compiler when needed and persists its
output in the background.

Decision order:
1. Forced (argument, ``force`` or ``response`` setting) -> recompile
2. Source not in the ledger (first request since start, or last compile failed) -> recompile
3. Output missing, source newer, or any recorded import newer -> recompile
4. Otherwise serve the cached output
"""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from ..compiler.base import Compiler
from ..compiler.diagnostics import render_error_css
from ..config.settings import SassSettings
from ..errors import CompileError
from ..errors import FilesystemError
from ..errors import SourceNotFoundError
from .detection import StalenessDetector
from .ledger import DependencyLedger
from .ledger import normalize_ref
from .models import ResolveAction
from .models import ResolveResult
from .models import StaleReason

logger = logging.getLogger(__name__)

ErrorHook = Callable[[CompileError], None]


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def write_text_atomic(path: str, text: str) -> None:
    """Write text atomically, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    temp_path = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


class RecompilationEngine:
    """Serves cached stylesheets or recompiles them when stale.

    The ledger is the only shared mutable state. Concurrent requests for the
    same stale source may each compile and each persist (last writer wins)
    unless ``single_flight`` is enabled, in which case they share one compile.
    """

    def __init__(
        self,
        ledger: DependencyLedger,
        compiler: Compiler,
        settings: SassSettings,
        detector: StalenessDetector | None = None,
        on_error: ErrorHook | None = None,
    ) -> None:
        """Initialize recompilation engine.

        Args:
            ledger: Dependency ledger owned by the application
            compiler: Compiler callable
            settings: Compile behavior (force, response, debug, include paths, ...)
            detector: Staleness detector (default: stats the real filesystem)
            on_error: Optional hook called with every CompileError
        """
        self.ledger = ledger
        self.compiler = compiler
        self.settings = settings
        self.detector = detector or StalenessDetector()
        self.on_error = on_error

        self._background: set[asyncio.Task] = set()
        self._in_flight: dict[str, asyncio.Task[ResolveResult]] = {}

    async def resolve(
        self,
        source: str | os.PathLike[str],
        output: str | os.PathLike[str],
        force: bool = False,
    ) -> ResolveResult:
        """Serve or recompile the stylesheet for source.

        Args:
            source: Sass source path
            output: Compiled output path
            force: Recompile regardless of cache state

        Returns:
            ResolveResult describing what happened and the CSS to send

        Raises:
            FilesystemError: If a stat or read fails for a reason other than a missing file
        """
        source = normalize_ref(source)
        output = normalize_ref(output)

        self._log("source", source)
        self._log("dest", "<response>" if self.settings.response else output)

        if force or self.settings.always_compile:
            return await self._recompile(source, output, StaleReason.FORCED)

        imports = self.ledger.lookup(source)
        if imports is None:
            # Restarted or last compile failed: mtimes alone can't vouch for the import set
            return await self._recompile(source, output, StaleReason.UNTRACKED)

        try:
            check = await self.detector.check(source, output, imports)
        except SourceNotFoundError:
            self._log("not found", source)
            return ResolveResult(ResolveAction.NOT_FOUND, source=source, output=output)

        if check.stale:
            self._log(check.reason.value, output)
            for path in check.changed_imports:
                self._log("modified import", path)
            return await self._recompile(source, output, check.reason, check.changed_imports)

        try:
            text = await asyncio.to_thread(_read_text, output)
        except FileNotFoundError:
            self._log("not found", output)
            return await self._recompile(source, output, StaleReason.OUTPUT_MISSING)
        except OSError as e:
            raise FilesystemError(output, e) from e

        return ResolveResult(ResolveAction.SERVE_CACHED, source=source, output=output, text=text)

    async def drain(self) -> None:
        """Wait for every background compile and persist to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._background)

    async def _recompile(
        self,
        source: str,
        output: str,
        reason: StaleReason,
        changed_imports: list[str] | None = None,
    ) -> ResolveResult:
        if self.settings.single_flight and source in self._in_flight:
            self._log("waiting", source)
            result = await asyncio.shield(self._in_flight[source])
        else:
            # Runs as its own task so a disconnected client doesn't abort the compile
            task = asyncio.ensure_future(self._compile(source, output))
            self._track(task)
            if self.settings.single_flight:
                self._in_flight[source] = task
                task.add_done_callback(lambda t: self._release(source, t))
            result = await asyncio.shield(task)

        return replace(result, reason=reason, changed_imports=list(changed_imports or []))

    async def _compile(self, source: str, output: str) -> ResolveResult:
        self._log("read", source)
        try:
            text = await asyncio.to_thread(_read_text, source)
        except FileNotFoundError:
            self._log("not found", source)
            return ResolveResult(ResolveAction.NOT_FOUND, source=source, output=output)
        except OSError as e:
            raise FilesystemError(source, e) from e

        self.ledger.clear(source)

        include_paths = [os.path.dirname(source), *self.settings.include_paths]
        try:
            compiled = await asyncio.to_thread(self.compiler, text, include_paths, self.settings.output_style)
        except CompileError as e:
            return self._failed(source, output, e)

        self.ledger.record(source, compiled.included_files)
        self._log("render", "<response>" if self.settings.response else source)

        if not self.settings.response:
            self._track(asyncio.create_task(self._persist(output, compiled.css)))

        return ResolveResult(ResolveAction.RECOMPILED, source=source, output=output, text=compiled.css)

    def _failed(self, source: str, output: str, error: CompileError) -> ResolveResult:
        payload = render_error_css(error, source)
        if self.settings.debug:
            logger.error(f"error : {payload}")
        else:
            logger.warning(f"Compile failed for {source}: {error.message}")

        if self.on_error is not None:
            try:
                self.on_error(error)
            except Exception as e:
                logger.error(f"Error hook failed for {source}: {e}")

        return ResolveResult(ResolveAction.FAILED, source=source, output=output, text=payload, error=error)

    async def _persist(self, output: str, css: str) -> None:
        try:
            await asyncio.to_thread(write_text_atomic, output, css)
        except OSError as e:
            logger.error(f"Failed to write compiled output {output}: {e}")
            return
        logger.debug(f"Wrote {output}")

    def _track(self, task: asyncio.Task) -> None:
        self._background.add(task)
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Background task failed: {task.exception()}")

    def _release(self, source: str, task: asyncio.Task) -> None:
        if self._in_flight.get(source) is task:
            del self._in_flight[source]

    def _log(self, key: str, value: str) -> None:
        logger.log(logging.INFO if self.settings.debug else logging.DEBUG, f"{key} : {value}")
