"""Call-site migration from direct resource lookups to generated accessors."""

from .manager import AccessorTarget, MigrationManager, MigrationResult
from .patterns import CALL_PATTERNS, CallPattern

__all__ = [
    "AccessorTarget",
    "CALL_PATTERNS",
    "CallPattern",
    "MigrationManager",
    "MigrationResult",
]
