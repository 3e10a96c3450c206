"""Configuration loading for resourcegen (.resourcegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".resourcegen.yml"

DEFAULT_OUTPUT = Path("build/generated/resourcegen/main/ResourceManager.kt")
DEFAULT_CACHE_DIR = Path("build/cache/resourcegen")
DEFAULT_REPORT_PATH = Path("build/reports/migration/resourcegen-migration-report.html")


@dataclass
class GenerationConfig:
    """Settings for the ResourceManager generation step."""

    output: Path = DEFAULT_OUTPUT
    drawable_prefix: str = "drawable"
    cache_dir: Path = DEFAULT_CACHE_DIR
    cache: bool = True
    strict: bool = True
    plural_language: str = "en"


@dataclass
class MigrationConfig:
    """Settings for the call-site migration step."""

    report_path: Path = DEFAULT_REPORT_PATH
    source_dirs: List[str] = field(default_factory=lambda: ["src/main"])
    source_extensions: List[str] = field(default_factory=lambda: ["kt", "java"])


@dataclass
class ResourceGenConfig:
    """Represents the settings defined in .resourcegen.yml for one module."""

    module_root: Path
    project_root: Optional[Path] = None
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    migration: MigrationConfig = field(default_factory=MigrationConfig)

    def resolve(self, path: Path) -> Path:
        """Return ``path`` anchored at the module root unless already absolute."""
        return path if path.is_absolute() else self.module_root / path

    @property
    def effective_project_root(self) -> Path:
        return self.project_root or self.module_root.parent


def load_config(config_path: Path) -> ResourceGenConfig:
    """Load configuration from disk, returning defaults when the file is missing."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ResourceGenConfig(module_root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    generation = GenerationConfig()
    generation_data = _as_dict(data.get("generation"))
    if generation_data:
        output = _as_str(generation_data.get("output"))
        if output:
            generation.output = Path(output)
        prefix = _as_str(generation_data.get("drawable_prefix"))
        if prefix:
            generation.drawable_prefix = prefix
        cache_dir = _as_str(generation_data.get("cache_dir"))
        if cache_dir:
            generation.cache_dir = Path(cache_dir)
        cache = _as_bool(generation_data.get("cache"))
        if cache is not None:
            generation.cache = cache
        strict = _as_bool(generation_data.get("strict"))
        if strict is not None:
            generation.strict = strict
        plural_language = _as_str(generation_data.get("plural_language"))
        if plural_language:
            generation.plural_language = plural_language

    migration = MigrationConfig()
    migration_data = _as_dict(data.get("migration"))
    if migration_data:
        report_path = _as_str(migration_data.get("report_path"))
        if report_path:
            migration.report_path = Path(report_path)
        source_dirs = _as_str_list(migration_data.get("source_dirs"))
        if source_dirs:
            migration.source_dirs = source_dirs
        extensions = _as_str_list(migration_data.get("source_extensions"))
        if extensions:
            migration.source_extensions = [ext.lstrip(".") for ext in extensions]

    project_root_str = _as_str(data.get("project_root"))
    project_root = (root / project_root_str).resolve() if project_root_str else None

    return ResourceGenConfig(
        module_root=root,
        project_root=project_root,
        generation=generation,
        migration=migration,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GenerationConfig",
    "MigrationConfig",
    "ResourceGenConfig",
    "load_config",
]
