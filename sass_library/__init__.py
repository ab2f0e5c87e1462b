"""sass_library: on-demand Sass compilation with import-aware caching.

This is the business logic layer; sassd only wraps it in HTTP.

Public Interface:
    Modules:
    - cache: Dependency ledger, staleness detection, recompilation engine
    - compiler: Compiler contract, libsass adapter, diagnostics
    - config: Settings loading
    - routing: Request path to source/output mapping
    - storage: Config directory resolution
"""

from .cache import DependencyLedger
from .cache import RecompilationEngine
from .cache import ResolveAction
from .cache import ResolveResult
from .compiler import CompileOutput
from .compiler import LibsassCompiler
from .config import SassSettings
from .errors import CompileError
from .errors import FilesystemError
from .errors import SassLibraryError
from .errors import SourceNotFoundError
from .routing import PathMapper
from .routing import StylesheetTarget

__all__ = [
    "DependencyLedger",
    "RecompilationEngine",
    "ResolveAction",
    "ResolveResult",
    "CompileOutput",
    "LibsassCompiler",
    "SassSettings",
    "CompileError",
    "FilesystemError",
    "SassLibraryError",
    "SourceNotFoundError",
    "PathMapper",
    "StylesheetTarget",
]
