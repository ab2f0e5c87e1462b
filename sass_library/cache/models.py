"""Cache models for compiled stylesheets.

This module contains the data models shared by staleness detection,
the recompilation engine and the status API:
- Staleness check results
- Resolve outcomes
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from ..errors import CompileError


class StaleReason(str, Enum):
    """Why a cached output cannot be served."""

    FORCED = "forced"
    UNTRACKED = "untracked"
    OUTPUT_MISSING = "not found"
    SOURCE_MODIFIED = "modified"
    IMPORT_MODIFIED = "modified import"


class ResolveAction(str, Enum):
    """What the engine did for a request."""

    SERVE_CACHED = "serve_cached"
    RECOMPILED = "recompiled"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass
class StalenessCheck:
    """Result of comparing a source and its imports against the cached output."""

    reason: StaleReason | None = None
    changed_imports: list[str] = field(default_factory=list)

    @property
    def stale(self) -> bool:
        return self.reason is not None


@dataclass
class ResolveResult:
    """Outcome of a single resolve call.

    Attributes:
        action: What happened
        source: Normalized source path
        output: Normalized output path
        text: CSS to send (compiled, cached or diagnostic); empty for NOT_FOUND
        reason: Why a recompile happened, if one did
        error: Compiler error for FAILED results
        changed_imports: Imports found newer than the cached output
    """

    action: ResolveAction
    source: str
    output: str
    text: str = ""
    reason: StaleReason | None = None
    error: CompileError | None = None
    changed_imports: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.action is not ResolveAction.NOT_FOUND
