"""Module namespace and dependency resolution from Gradle build files."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .logging import get_logger

BUILD_FILE_NAMES: Tuple[str, str] = ("build.gradle", "build.gradle.kts")
MANIFEST_PATH = Path("src/main/AndroidManifest.xml")

_NAMESPACE_PATTERN = re.compile(r"\bnamespace\s*=?\s*[\"']([^\"']+)[\"']")

_DEPENDENCY_CONFIGURATIONS = ("implementation", "api")
_DEPENDENCY_PATTERNS: Tuple[re.Pattern[str], ...] = tuple(
    pattern
    for configuration in _DEPENDENCY_CONFIGURATIONS
    for pattern in (
        # implementation(project(":module-name"))
        re.compile(
            rf"\b{configuration}\s*\(\s*project\s*\(\s*[\"']\s*:\s*([^\"']+?)\s*[\"']\s*\)\s*\)"
        ),
        # implementation project(':module-name')
        re.compile(
            rf"\b{configuration}\s+project\s*\(\s*[\"']\s*:\s*([^\"']+?)\s*[\"']\s*\)"
        ),
    )
)


def strip_comments(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, code)`` with ``//`` and ``/* */`` comments removed.

    The scanner carries a single bit of state across lines (inside a block
    comment or not). Comment markers inside string literals are kept.
    """
    in_block = False
    for line_number, line in enumerate(lines, start=1):
        code: List[str] = []
        quote: Optional[str] = None
        index = 0
        length = len(line)
        while index < length:
            char = line[index]
            pair = line[index:index + 2]
            if in_block:
                if pair == "*/":
                    in_block = False
                    index += 2
                    continue
                index += 1
                continue
            if quote is not None:
                code.append(char)
                if char == "\\" and index + 1 < length:
                    code.append(line[index + 1])
                    index += 2
                    continue
                if char == quote:
                    quote = None
                index += 1
                continue
            if pair == "//":
                break
            if pair == "/*":
                in_block = True
                index += 2
                continue
            if char in {'"', "'"}:
                quote = char
            code.append(char)
            index += 1
        yield line_number, "".join(code)


class ModuleManager:
    """Resolves a module's namespace and declared sibling-module dependencies."""

    def __init__(self, module_dir: Path) -> None:
        self.module_dir = Path(module_dir)
        self.logger = get_logger("modules")

    def get_namespace(self) -> Optional[str]:
        """Return the namespace from the build file, falling back to the manifest package."""
        return self._namespace_from_build_file() or self._namespace_from_manifest()

    def get_module_dependencies(self) -> List[str]:
        """Return module paths declared via ``project(":name")`` in file order."""
        build_file = self.get_build_gradle_file()
        if not build_file.exists():
            return []

        dependencies: List[str] = []
        for _, code in strip_comments(self._read_lines(build_file)):
            for pattern in _DEPENDENCY_PATTERNS:
                match = pattern.search(code)
                if match:
                    dependencies.append(match.group(1))
        return dependencies

    def get_build_gradle_file(self) -> Path:
        """Return ``build.gradle`` if present, else ``build.gradle.kts`` (which may not exist)."""
        groovy, kotlin = (self.module_dir / name for name in BUILD_FILE_NAMES)
        return groovy if groovy.exists() else kotlin

    def _namespace_from_build_file(self) -> Optional[str]:
        build_file = self.get_build_gradle_file()
        if not build_file.exists():
            self.logger.warning(
                "Failed to find build.gradle/build.gradle.kts in %s", self.module_dir
            )
            return None

        for _, code in strip_comments(self._read_lines(build_file)):
            match = _NAMESPACE_PATTERN.search(code)
            if match:
                return match.group(1)

        self.logger.warning("Failed to find namespace in %s", build_file)
        return None

    def _namespace_from_manifest(self) -> Optional[str]:
        manifest = self.module_dir / MANIFEST_PATH
        if not manifest.exists():
            self.logger.warning("Failed to find AndroidManifest.xml at %s", manifest)
            return None
        try:
            root = ET.parse(manifest).getroot()
        except ET.ParseError as exc:
            self.logger.warning("Failed to parse %s: %s", manifest, exc)
            return None

        package = root.get("package", "").strip()
        if package:
            return package
        self.logger.warning("Failed to find attribute `package` in %s", manifest)
        return None

    @staticmethod
    def _read_lines(path: Path) -> List[str]:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()


__all__ = ["BUILD_FILE_NAMES", "ModuleManager", "strip_comments"]
