"""ASGI middleware serving compiled Sass stylesheets.

GET/HEAD requests for ``*.css`` are mapped to a ``.scss`` source and handed to
the recompilation engine. Everything else, including stylesheets whose source
does not exist, passes through to the wrapped application.

Example:
    >>> app = FastAPI()
    >>> app.add_middleware(SassMiddleware, options={"src": "styles", "dest": "public"})
    >>> app.mount("/", StaticFiles(directory="public"))
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.types import ASGIApp

from sass_library.cache import DependencyLedger
from sass_library.cache import RecompilationEngine
from sass_library.compiler import Compiler
from sass_library.compiler import LibsassCompiler
from sass_library.config import SassSettings
from sass_library.errors import FilesystemError
from sass_library.routing import PathMapper

logger = logging.getLogger(__name__)

HANDLED_METHODS = ("GET", "HEAD")

MiddlewareOptions = SassSettings | Mapping | str


def coerce_settings(options: MiddlewareOptions | None) -> SassSettings:
    """Accept settings, a mapping of settings, or a bare source directory."""
    if isinstance(options, SassSettings):
        settings = options
    elif isinstance(options, str):
        settings = SassSettings(src=options)
    elif isinstance(options, Mapping):
        settings = SassSettings(**options)
    else:
        settings = SassSettings()

    if not settings.src:
        raise ValueError('SassMiddleware requires "src" directory')
    return settings


class SassMiddleware(BaseHTTPMiddleware):
    """Compile-on-request middleware for Sass stylesheets."""

    def __init__(
        self,
        app: ASGIApp,
        options: MiddlewareOptions | None = None,
        *,
        engine: RecompilationEngine | None = None,
        ledger: DependencyLedger | None = None,
        compiler: Compiler | None = None,
        on_error=None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: Wrapped ASGI application
            options: SassSettings, a mapping of settings, or the src directory
            engine: Pre-built engine (its settings must match options)
            ledger: Ledger for a new engine (default: a fresh one)
            compiler: Compiler for a new engine (default: LibsassCompiler)
            on_error: Hook called with every CompileError

        Raises:
            ValueError: If no src directory is configured
        """
        super().__init__(app)
        if engine is not None and options is None:
            options = engine.settings
        self.settings = coerce_settings(options)
        self.mapper = PathMapper(self.settings)
        self.engine = engine or RecompilationEngine(
            ledger=ledger or DependencyLedger(),
            compiler=compiler or LibsassCompiler(),
            settings=self.settings,
            on_error=on_error,
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in HANDLED_METHODS:
            return await call_next(request)

        target = self.mapper.map(request.url.path)
        if target is None:
            return await call_next(request)

        try:
            result = await self.engine.resolve(target.source, target.output)
        except FilesystemError as e:
            logger.error(f"Failed to serve {target.request_path}: {e}")
            return JSONResponse({"detail": "Internal server error"}, status_code=500)

        if not result.found:
            # Ignore missing sources to fall through as 404
            return await call_next(request)

        return Response(
            content=result.text,
            media_type="text/css",
            headers={"Cache-Control": "max-age=0"},
        )
