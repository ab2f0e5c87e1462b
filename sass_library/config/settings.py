"""Settings models for sassd.

This module defines the configuration consumed by the Sass middleware
(source/destination roots, compile behavior) and by the daemon that hosts it.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import field_validator
from pydantic import model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

OUTPUT_STYLES = ("nested", "expanded", "compact", "compressed")


def _absolute(v: str) -> str:
    return str(Path(v).expanduser().resolve())


class SassSettings(BaseSettings):
    """Configuration for the Sass middleware and the sassd daemon.

    Attributes:
        src: Directory holding .scss sources (required by the middleware)
        dest: Directory receiving compiled .css files (default: src)
        root: Optional common root joined in front of src and dest
        prefix: URL prefix stripped from request paths before mapping
        force: Always recompile, never trust the cached output
        response: Recompile always and never persist (serve from memory)
        debug: Log every staleness decision at INFO level
        include_paths: Extra directories appended to the compiler search path
        output_style: Compiler output style
        single_flight: Share one in-flight compile between concurrent requests
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 8421)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        mount_static: Serve dest as static files behind the middleware

    Example:
        >>> settings = SassSettings(src="./styles")
        >>> assert settings.dest_dir == settings.src
    """

    model_config = SettingsConfigDict(
        env_prefix="SASSD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    src: str | None = None
    dest: str | None = None
    root: str | None = None
    prefix: str | None = None

    force: bool = False
    response: bool = False
    debug: bool = False
    include_paths: list[str] = []
    output_style: str = "nested"
    single_flight: bool = False

    host: str = "127.0.0.1"
    port: int = 8421
    log_level: str = "info"
    workers: int = 1
    mount_static: bool = True

    @model_validator(mode="after")
    def expand_and_resolve_paths(self) -> "SassSettings":
        """Expand ~ and resolve directories to absolute paths.

        Without root, src and dest resolve against the working directory.
        With root, root is resolved and src/dest stay segments beneath it.
        """
        if self.root is not None:
            self.root = _absolute(self.root)
            return self
        if self.src is not None:
            self.src = _absolute(self.src)
        if self.dest is not None:
            self.dest = _absolute(self.dest)
        return self

    @field_validator("include_paths")
    @classmethod
    def expand_include_paths(cls, v: list[str]) -> list[str]:
        """Resolve every include directory to an absolute path."""
        return [_absolute(p) for p in v]

    @field_validator("output_style")
    @classmethod
    def check_output_style(cls, v: str) -> str:
        """Reject output styles the compiler does not know."""
        style = v.lower()
        if style not in OUTPUT_STYLES:
            raise ValueError(f"output_style must be one of {', '.join(OUTPUT_STYLES)}, got {v!r}")
        return style

    @property
    def dest_dir(self) -> str | None:
        """Destination directory, defaulting to src."""
        return self.dest or self.src

    @property
    def output_dir(self) -> str | None:
        """Absolute directory compiled files are written to."""
        dest = self.dest_dir
        if dest is None or self.root is None:
            return dest
        return str(Path(self.root) / dest.lstrip("/"))

    @property
    def always_compile(self) -> bool:
        """Response mode implies force."""
        return self.force or self.response
