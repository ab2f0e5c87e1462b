"""Compiled stylesheet cache.

This module provides the staleness-detection core:
- Dependency ledger (source -> files included at last compile)
- Staleness detection against the cached output
- Recompilation engine with background persistence

Architecture: All business logic in library, daemon provides thin HTTP wrappers.
"""

# Services
from .detection import StalenessDetector
from .engine import RecompilationEngine
from .ledger import DependencyLedger
from .ledger import normalize_ref

# Models
from .models import ResolveAction
from .models import ResolveResult
from .models import StaleReason
from .models import StalenessCheck

__all__ = [
    # Services
    "DependencyLedger",
    "StalenessDetector",
    "RecompilationEngine",
    "normalize_ref",
    # Models
    "ResolveAction",
    "ResolveResult",
    "StaleReason",
    "StalenessCheck",
]
