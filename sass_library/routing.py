"""Map request paths to Sass sources and compiled outputs.

    /css/site.css  ->  source: {src}/css/site.scss
                       output: {dest}/css/site.css

With ``root`` set, a leading ``dest`` segment is stripped from the request path and
both files are looked up under ``root``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import unquote
from urllib.parse import urlsplit

from .config.settings import SassSettings

logger = logging.getLogger(__name__)

CSS_SUFFIX = ".css"
SCSS_SUFFIX = ".scss"


@dataclass(frozen=True)
class StylesheetTarget:
    """Files backing a single stylesheet request."""

    request_path: str
    source: str
    output: str


def _join_inside(base: str, relative: str) -> str | None:
    """Join relative onto base, refusing results that escape base."""
    base = os.path.normpath(base)
    joined = os.path.normpath(os.path.join(base, relative.lstrip("/")))
    if joined != base and not joined.startswith(base + os.sep):
        return None
    return joined


class PathMapper:
    """Turns request URLs into StylesheetTargets according to settings."""

    def __init__(self, settings: SassSettings) -> None:
        if not settings.src:
            raise ValueError('SassMiddleware requires "src" directory')
        self.src = settings.src
        self.dest = settings.dest_dir
        self.root = settings.root
        self.prefix = settings.prefix

    def strip_prefix(self, path: str) -> str:
        if self.prefix and path.startswith(self.prefix):
            return path[len(self.prefix) :]
        return path

    def strip_dest(self, path: str) -> str:
        """Remove a leading dest segment, matched on whole path segments only."""
        segment = "/" + self.dest.strip("/")
        if path == segment or path.startswith(segment + "/"):
            return path[len(segment) :]
        return path

    def map(self, url: str) -> StylesheetTarget | None:
        """Map a request URL or path to its source and output.

        Args:
            url: Request URL or path; any query string is ignored

        Returns:
            StylesheetTarget, or None when the request is not for a stylesheet
            or points outside the configured directories
        """
        path = self.strip_prefix(unquote(urlsplit(url).path))
        if not path.endswith(CSS_SUFFIX):
            return None

        source_path = path[: -len(CSS_SUFFIX)] + SCSS_SUFFIX

        if self.root:
            relative = self.strip_dest(path)
            source_relative = relative[: -len(CSS_SUFFIX)] + SCSS_SUFFIX
            output = _join_inside(self.root, os.path.join(self.dest.lstrip("/"), relative.lstrip("/")))
            source = _join_inside(self.root, os.path.join(self.src.lstrip("/"), source_relative.lstrip("/")))
        else:
            output = _join_inside(self.dest, path)
            source = _join_inside(self.src, source_path)

        if output is None or source is None:
            logger.warning(f"Refusing stylesheet path outside configured directories: {path}")
            return None

        return StylesheetTarget(request_path=path, source=source, output=output)
