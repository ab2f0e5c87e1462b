"""sassd command line.

Provides commands to run the daemon with ad-hoc overrides and to compile a
single stylesheet through the same engine the middleware uses.
"""

import asyncio
import sys
from pathlib import Path

import click
import uvicorn

from sass_library.cache import DependencyLedger
from sass_library.cache import RecompilationEngine
from sass_library.cache import ResolveAction
from sass_library.cache.engine import write_text_atomic
from sass_library.compiler import LibsassCompiler
from sass_library.config import OUTPUT_STYLES
from sass_library.config import SassSettings
from sass_library.config import load_config


@click.group()
def cli():
    """sassd - compile-on-request Sass stylesheets."""
    pass


@cli.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Config file to load")
@click.option("--src", help="Directory holding .scss sources")
@click.option("--dest", help="Directory receiving compiled .css files")
@click.option("--prefix", help="URL prefix stripped before mapping")
@click.option("--host", help="Listen address")
@click.option("--port", type=int, help="Listen port")
@click.option("--output-style", type=click.Choice(OUTPUT_STYLES), help="Compiler output style")
@click.option("--include-path", "include_paths", multiple=True, help="Extra import search directory")
@click.option("--force", is_flag=True, default=None, help="Always recompile")
@click.option("--response", is_flag=True, default=None, help="Never write compiled files to disk")
@click.option("--debug", is_flag=True, default=None, help="Log every cache decision")
def serve(config_path: Path | None, include_paths: tuple[str, ...], **overrides):
    """Run the daemon in the foreground."""
    from .main import create_app

    config = load_config(config_path)
    values = config.model_dump()
    values.update({key: value for key, value in overrides.items() if value is not None})
    if include_paths:
        values["include_paths"] = [*config.include_paths, *include_paths]

    try:
        settings = SassSettings(**values)
        app = create_app(settings)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@cli.command("compile")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write CSS here, not stdout")
@click.option("--output-style", type=click.Choice(OUTPUT_STYLES), default="nested", show_default=True)
@click.option("--include-path", "include_paths", multiple=True, help="Extra import search directory")
def compile_command(source: Path, output: Path | None, output_style: str, include_paths: tuple[str, ...]):
    """Compile SOURCE once and print or write the result."""
    # The engine never persists; --output is written below
    settings = SassSettings(
        src=str(source.parent),
        response=True,
        output_style=output_style,
        include_paths=list(include_paths),
        mount_static=False,
    )
    engine = RecompilationEngine(DependencyLedger(), LibsassCompiler(), settings)
    target = output or source.with_suffix(".css")

    async def run():
        result = await engine.resolve(source, target, force=True)
        await engine.drain()
        return result

    result = asyncio.run(run())

    if result.action is ResolveAction.FAILED:
        click.echo(result.text, err=True)
        sys.exit(1)

    if output is None:
        click.echo(result.text, nl=False)
        return

    try:
        write_text_atomic(result.output, result.text)
    except OSError as e:
        click.echo(f"Error: could not write {result.output}: {e}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {result.output}")
    for path in engine.ledger.lookup(result.source) or []:
        click.echo(f"  import {path}")


if __name__ == "__main__":
    cli()
