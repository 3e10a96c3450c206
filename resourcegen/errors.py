"""Exception types raised by resourcegen components."""

from __future__ import annotations

from pathlib import Path


class ResourceGenError(RuntimeError):
    """Base class for failures surfaced to the invoking build step."""


class ConfigError(ResourceGenError):
    """Raised when the configuration file cannot be parsed."""


class NamespaceNotFoundError(ResourceGenError):
    """Raised when the primary module namespace cannot be resolved."""

    def __init__(self, module_dir: Path) -> None:
        super().__init__(
            "Namespace could not be found in either build.gradle, build.gradle.kts or "
            f"AndroidManifest.xml for module at {module_dir}. "
            "Please ensure the module is properly configured."
        )
        self.module_dir = module_dir


class DocumentParseError(ResourceGenError):
    """Raised when a resource-definition document is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse resource document {path}: {reason}")
        self.path = path
        self.reason = reason


class MigrationNotConfirmedError(ResourceGenError):
    """Raised when migration is requested without explicit confirmation."""


__all__ = [
    "ConfigError",
    "DocumentParseError",
    "MigrationNotConfirmedError",
    "NamespaceNotFoundError",
    "ResourceGenError",
]
