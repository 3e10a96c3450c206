"""Directory walking helpers used by resource discovery and migration."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List

PathPredicate = Callable[[Path], bool]

_EXCLUDED_DIRS = {
    ".git",
    ".gradle",
    ".idea",
    "build",
    "node_modules",
    "__pycache__",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

RESOURCE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass(frozen=True)
class FileTree:
    """Lazy, restartable view over the files below ``root``.

    Each iteration walks the file system again, in sorted order, so the
    sequence reflects the current directory contents and is deterministic.
    """

    root: Path
    predicate: PathPredicate | None = None
    recursive: bool = True

    def __iter__(self) -> Iterator[Path]:
        if not self.root.is_dir():
            return
        if not self.recursive:
            for path in sorted(self.root.iterdir()):
                if path.is_file() and self._accepts(path):
                    yield path
            return
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
            current_dir = Path(dirpath)
            for filename in sorted(filenames):
                path = current_dir / filename
                if self._accepts(path):
                    yield path

    def files(self) -> List[Path]:
        return list(self)

    def _accepts(self, path: Path) -> bool:
        if path.name in _EXCLUDED_FILES:
            return False
        return self.predicate is None or self.predicate(path)


def has_extension(*extensions: str) -> PathPredicate:
    """Return a predicate matching files with any of ``extensions`` (without dot)."""
    wanted = {ext.lower().lstrip(".") for ext in extensions}

    def _predicate(path: Path) -> bool:
        return path.suffix.lower().lstrip(".") in wanted

    return _predicate


def resource_base_name(path: Path) -> str:
    """Return the resource identifier of an asset file (``ic_logo.9.png`` -> ``ic_logo``)."""
    return path.name.split(".", 1)[0]


def is_valid_resource_file(path: Path) -> bool:
    return bool(RESOURCE_NAME_PATTERN.match(resource_base_name(path)))


__all__ = [
    "FileTree",
    "PathPredicate",
    "RESOURCE_NAME_PATTERN",
    "has_extension",
    "is_valid_resource_file",
    "resource_base_name",
]
