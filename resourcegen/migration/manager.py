"""Rewrites legacy ``getX(R.type.name)`` call sites to generated accessors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import ResourceGenConfig, load_config
from ..errors import DocumentParseError, MigrationNotConfirmedError
from ..generation import ReportGenerator
from ..generation.class_file import DRAWABLE_TAG, DRAWABLES_NAMESPACE
from ..locator import ResourceLocator
from ..logging import get_logger
from ..models import Change, Resource, ResourceCategory, SourceFileDetails
from ..modules import ModuleManager
from ..naming import function_name, r_field_name
from ..parser import DocumentParser
from ..walker import FileTree, has_extension, resource_base_name
from .patterns import CALL_PATTERNS, CallMatch, CallPattern, to_call_match

ACCESSOR_CLASS = "ResourceManager"

_R_IMPORT = re.compile(r"^\s*import\s+((?:\w+\.)*\w+)\.R\s*;?\s*$")
_ACCESSOR_IMPORT = re.compile(rf"^\s*import\s+(?:\w+\.)*{ACCESSOR_CLASS}\s*;?\s*$")


@dataclass(frozen=True)
class AccessorTarget:
    """A generated accessor a legacy reference may be rewritten to."""

    namespace: str
    function: str
    module_name: str

    def call(self, arguments: str) -> str:
        return f"{ACCESSOR_CLASS}.{self.namespace}.{self.function}({arguments})"


@dataclass
class MigrationResult:
    """Files changed by one migration run and where the report was written."""

    files: List[SourceFileDetails] = field(default_factory=list)
    report_path: Optional[Path] = None

    @property
    def total_changes(self) -> int:
        return sum(len(details.changes) for details in self.files)

    @property
    def report_uri(self) -> Optional[str]:
        return self.report_path.resolve().as_uri() if self.report_path else None


@dataclass
class _FileState:
    r_import_index: Optional[int] = None
    r_import_namespace: Optional[str] = None
    has_accessor_import: bool = False


class MigrationManager:
    """Applies the call-pattern table to every source file of a module."""

    def __init__(
        self,
        project_dir: Path,
        module_dir: Path,
        *,
        config: ResourceGenConfig | None = None,
        parser: DocumentParser | None = None,
        report_generator: ReportGenerator | None = None,
    ) -> None:
        self.module_dir = Path(module_dir).expanduser().resolve()
        self.config = config or load_config(self.module_dir)
        self.project_dir = Path(project_dir).expanduser().resolve()
        self.parser = parser or DocumentParser()
        self.report_generator = report_generator or ReportGenerator()
        self.logger = get_logger("migration")
        self._module_manager = ModuleManager(self.module_dir)
        self._namespace: str = ""
        self._modules_by_namespace: Dict[str, str] = {}
        self._targets: Dict[str, List[AccessorTarget]] = {}

    def migrate(self, *, confirmed: bool = False) -> MigrationResult:
        """Rewrite call sites in place and write the HTML report.

        Refuses to run unless ``confirmed`` is true, since source files are
        modified in place.
        """
        if not confirmed:
            raise MigrationNotConfirmedError(
                "Migration modifies source files in place; re-run with confirmation "
                "after committing or backing up your work."
            )
        source_roots = self._source_roots()
        self._load_resources()

        result = MigrationResult()
        for source_file in self._source_files(source_roots):
            details = self.migrate_file(source_file)
            if details is not None:
                result.files.append(details)

        self.logger.info(
            "Modified %d file(s) with a total of %d change(s).",
            len(result.files),
            result.total_changes,
        )
        result.report_path = self._write_report(result.files)
        self.logger.info("Migration report: %s", result.report_uri)
        return result

    def migrate_file(self, path: Path) -> Optional[SourceFileDetails]:
        """Rewrite one file; return its details, or ``None`` when nothing changed."""
        with path.open("r", encoding="utf-8", newline="") as handle:
            lines = handle.read().splitlines(keepends=True)

        state = _FileState()
        changes: List[Change] = []
        updated_lines: List[str] = []
        for index, line in enumerate(lines):
            body, ending = _split_line_ending(line)
            import_match = _R_IMPORT.match(body)
            if import_match:
                state.r_import_index = index
                state.r_import_namespace = import_match.group(1)
            elif _ACCESSOR_IMPORT.match(body):
                state.has_accessor_import = True
            else:
                body = self._rewrite_line(path, index + 1, body, state, changes)
            updated_lines.append(body + ending)

        if not changes:
            return None

        if state.r_import_index is not None and not state.has_accessor_import:
            self._insert_import(path, updated_lines, state.r_import_index, changes)

        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write("".join(updated_lines))
        changes.sort(key=lambda change: change.line_number)
        return SourceFileDetails(name=path.name, path=str(path), changes=changes)

    # ------------------------------------------------------------------
    # Line rewriting

    def _rewrite_line(
        self,
        path: Path,
        line_number: int,
        body: str,
        state: _FileState,
        changes: List[Change],
    ) -> str:
        for pattern in CALL_PATTERNS:
            if pattern.method not in body:
                continue

            def _replace(match: re.Match[str], pattern: CallPattern = pattern) -> str:
                call = to_call_match(pattern, match)
                target, reason = self._resolve(call, state)
                if target is None:
                    self.logger.info("Skipped: %s:%d: %s", path, line_number, reason)
                    return call.text
                replacement = target.call(call.arguments)
                changes.append(Change(line_number, call.text, replacement))
                self.logger.info(
                    "Updated: %s:%d: %s -> %s", path, line_number, call.text, replacement
                )
                return replacement

            body = pattern.regex.sub(_replace, body)
        return body

    def _resolve(
        self, call: CallMatch, state: _FileState
    ) -> Tuple[Optional[AccessorTarget], str]:
        candidates = [
            target
            for target in self._targets.get(call.key, [])
            if target.namespace in call.pattern.namespaces
        ]
        if not candidates:
            return None, f"{call.key} not found in the resource set"

        # An explicit prefix outside the known modules (android.R, a library R)
        # names a different resource set even when the field name matches.
        if call.namespace_prefix and call.namespace_prefix not in self._modules_by_namespace:
            return None, f"{call.key} from {call.namespace_prefix} is not in the resource set"

        namespace = call.namespace_prefix or state.r_import_namespace
        if namespace is not None and namespace in self._modules_by_namespace:
            module_name = self._modules_by_namespace[namespace]
            narrowed = [target for target in candidates if target.module_name == module_name]
            if narrowed:
                candidates = narrowed

        if len(candidates) > 1:
            functions = ", ".join(
                f"{target.namespace}.{target.function}" for target in candidates
            )
            return None, f"{call.key} is ambiguous ({functions})"
        return candidates[0], ""

    def _insert_import(
        self, path: Path, lines: List[str], index: int, changes: List[Change]
    ) -> None:
        r_import, ending = _split_line_ending(lines[index])
        indent = r_import[: len(r_import) - len(r_import.lstrip())]
        terminator = ";" if path.suffix == ".java" else ""
        new_import = f"{indent}import {self._namespace}.{ACCESSOR_CLASS}{terminator}"
        if not ending:
            lines[index] = r_import + "\n"
            ending = "\n"
        lines.insert(index + 1, new_import + ending)
        changes.append(
            Change(index + 1, r_import.strip(), f"{r_import.strip()}\n{new_import.strip()}")
        )
        self.logger.info("Updated: %s:%d: added %s", path, index + 1, new_import.strip())

    # ------------------------------------------------------------------
    # Resource model

    def _load_resources(self) -> None:
        self._namespace = self._module_manager.get_namespace() or ""
        locator = ResourceLocator(
            self.project_dir,
            self.module_dir,
            module_manager=self._module_manager,
            drawable_prefix=self.config.generation.drawable_prefix,
        )
        resources = locator.get_resources()
        self._modules_by_namespace = {}
        for resource in resources:
            module = resource.module
            if module.namespace:
                self._modules_by_namespace.setdefault(module.namespace, module.module_name)
        self._targets = self._build_targets(resources)
        self.logger.debug("Loaded %d resource identifiers", len(self._targets))

    def _build_targets(self, resources: Sequence[Resource]) -> Dict[str, List[AccessorTarget]]:
        targets: Dict[str, List[AccessorTarget]] = {}

        def _add(key: str, target: AccessorTarget) -> None:
            bucket = targets.setdefault(key, [])
            if target not in bucket:
                bucket.append(target)

        for resource in resources:
            module = resource.module
            if resource.category is ResourceCategory.DRAWABLES:
                for path in module.resource_files:
                    name = resource_base_name(path)
                    _add(
                        f"R.{DRAWABLE_TAG}.{r_field_name(name)}",
                        AccessorTarget(
                            DRAWABLES_NAMESPACE, function_name(name, module), module.module_name
                        ),
                    )
                continue
            for document in sorted(module.resource_files):
                try:
                    values = self.parser.parse(document)
                except DocumentParseError as exc:
                    self.logger.error("%s (resources from it will not be migrated)", exc)
                    continue
                for value in values:
                    _add(
                        f"R.{value.kind.tag}.{r_field_name(value.name)}",
                        AccessorTarget(
                            value.kind.namespace,
                            function_name(value.name, module),
                            module.module_name,
                        ),
                    )
        return targets

    # ------------------------------------------------------------------
    # Files

    def _source_roots(self) -> List[Path]:
        roots = [self.module_dir / source_dir for source_dir in self.config.migration.source_dirs]
        existing = [root for root in roots if root.is_dir()]
        if not existing:
            missing = ", ".join(str(root) for root in roots)
            raise FileNotFoundError(f"Source directory not found: {missing}")
        return existing

    def _source_files(self, roots: Sequence[Path]) -> List[Path]:
        predicate = has_extension(*self.config.migration.source_extensions)
        files: List[Path] = []
        for root in roots:
            for path in FileTree(root, predicate=predicate):
                if path not in files:
                    files.append(path)
        return files

    def _write_report(self, files: Sequence[SourceFileDetails]) -> Path:
        report_path = self.config.resolve(self.config.migration.report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(self.report_generator.render(files), encoding="utf-8")
        return report_path


def _split_line_ending(line: str) -> Tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body):]


__all__ = ["AccessorTarget", "MigrationManager", "MigrationResult"]
