"""Compiler adapters for sass_library.

Public Interface:
    - Compiler: Protocol every compiler callable satisfies
    - CompileOutput: Stylesheet text plus included files
    - LibsassCompiler: Default libsass-backed compiler
    - render_error_css: Diagnostic stylesheet for a CompileError
"""

from .base import CompileOutput
from .base import Compiler
from .diagnostics import format_location
from .diagnostics import render_error_css
from .libsass_compiler import LibsassCompiler
from .libsass_compiler import resolve_import

__all__ = [
    "Compiler",
    "CompileOutput",
    "LibsassCompiler",
    "resolve_import",
    "format_location",
    "render_error_css",
]
