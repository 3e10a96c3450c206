"""Generation pipeline: namespace, locate, cache check, render, write."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import CONFIG_FILENAME, ResourceGenConfig, load_config
from .errors import DocumentParseError, NamespaceNotFoundError
from .generation import ClassFileGenerator
from .locator import ResourceLocator
from .logging import get_logger
from .modules import ModuleManager
from .stores import CacheManager


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    path: Path
    from_cache: bool
    skipped_documents: List[DocumentParseError] = field(default_factory=list)


class ResourceManagerGenerator:
    """Produces ``ResourceManager.kt`` for one module, reusing the cache when fresh."""

    def __init__(
        self,
        class_file_generator: ClassFileGenerator | None = None,
    ) -> None:
        self._class_file_generator = class_file_generator
        self.logger = get_logger("generator")

    def generate(
        self,
        module_dir: Path,
        output: Path | None = None,
        *,
        config: ResourceGenConfig | None = None,
    ) -> GenerationResult:
        module_dir = Path(module_dir).expanduser().resolve()
        config = config or load_config(module_dir)
        output_path = Path(output) if output is not None else config.resolve(config.generation.output)
        self.logger.info("Generating ResourceManager for %s", module_dir)

        module_manager = ModuleManager(module_dir)
        namespace = module_manager.get_namespace()
        if not namespace:
            raise NamespaceNotFoundError(module_dir)

        locator = ResourceLocator(
            config.effective_project_root,
            module_dir,
            module_manager=module_manager,
            drawable_prefix=config.generation.drawable_prefix,
        )
        resources = locator.get_resources()

        # config edits (drawable_prefix, for one) change the output too
        cache = CacheManager(
            config.resolve(config.generation.cache_dir),
            module_dir.name,
            [*locator.get_files_under_observation(), config.module_root / CONFIG_FILENAME],
        )
        if config.generation.cache and cache.is_cache_up_to_date():
            content = cache.get_cached_content()
            if content is not None:
                self.logger.info("Inputs unchanged; reusing cached ResourceManager")
                self._write(output_path, content)
                return GenerationResult(path=output_path, from_cache=True)

        generator = self._class_file_generator or ClassFileGenerator(
            strict=config.generation.strict,
            plural_language=config.generation.plural_language,
        )
        class_file = generator.generate(namespace, resources)

        if not config.generation.cache:
            cache.invalidate_cache()
        elif class_file.skipped_documents:
            # a partial result must not satisfy the next freshness check
            cache.invalidate_cache()
        else:
            cache.cache(class_file.content)

        self._write(output_path, class_file.content)
        self.logger.info("Wrote %s", output_path)
        return GenerationResult(
            path=output_path,
            from_cache=False,
            skipped_documents=list(class_file.skipped_documents),
        )

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


__all__ = ["GenerationResult", "ResourceManagerGenerator"]
