"""Main FastAPI application for sassd.

This module creates and configures the FastAPI application that compiles
Sass stylesheets on request through SassMiddleware and serves the compiled
output directory as static files.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from sass_library.cache import DependencyLedger
from sass_library.cache import RecompilationEngine
from sass_library.compiler import Compiler
from sass_library.compiler import LibsassCompiler
from sass_library.config import SassSettings
from sass_library.config import load_config

from . import __version__
from .middleware import SassMiddleware
from .middleware import coerce_settings
from .routers import cache_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: SassSettings | None = None, compiler: Compiler | None = None) -> FastAPI:
    """Build the sassd application.

    The ledger and engine are created once here and shared by the middleware
    and the API routers for the lifetime of the process.

    Args:
        settings: Settings to use (default: loaded from sassd.yaml and environment)
        compiler: Compiler to use (default: LibsassCompiler)

    Returns:
        Configured FastAPI application

    Raises:
        ValueError: If no src directory is configured
    """
    settings = coerce_settings(settings if settings is not None else load_config())

    ledger = DependencyLedger()
    engine = RecompilationEngine(
        ledger=ledger,
        compiler=compiler or LibsassCompiler(),
        settings=settings,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager.

        Waits for background compiles and writes to finish on shutdown.
        """
        logger.info(f"Starting sassd: src={settings.src}, dest={settings.output_dir}")
        if settings.response:
            logger.info("Response mode: compiled output is never written to disk")

        yield

        logger.info("Shutting down sassd")
        if engine.pending:
            logger.info(f"Waiting for {engine.pending} background task(s)")
        await engine.drain()

    app = FastAPI(
        title="sassd",
        description="Compile-on-request Sass stylesheets with import-aware caching",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.ledger = ledger
    app.state.engine = engine

    app.add_middleware(SassMiddleware, engine=engine)

    app.include_router(status_router)
    app.include_router(cache_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Welcome message with API information
        """
        return {
            "name": "sassd",
            "version": __version__,
            "description": "Compile-on-request Sass stylesheets",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    output_dir = settings.output_dir
    if settings.mount_static and output_dir:
        Path(output_dir).mkdir(parents=True, exist_ok=True)
        mount_path = (settings.prefix or "").rstrip("/") or "/"
        app.mount(mount_path, StaticFiles(directory=output_dir), name="static")
        logger.info(f"Serving {output_dir} at {mount_path}")

    return app
