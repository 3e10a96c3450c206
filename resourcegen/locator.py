"""Resource discovery across a module and its declared module dependencies."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .logging import get_logger
from .models import ModuleDescriptor, Resource, ResourceCategory
from .modules import ModuleManager
from .walker import FileTree, has_extension, is_valid_resource_file

RES_DIRECTORY = Path("src/main/res")
VALUES_DIRECTORY = "values"
DOCUMENT_EXTENSION = "xml"


class ResourceLocator:
    """Builds the ``Resource`` list for a module and its first-level dependencies.

    Dependencies of dependencies are not traversed.
    """

    def __init__(
        self,
        project_dir: Path,
        module_dir: Path,
        *,
        module_manager: ModuleManager | None = None,
        drawable_prefix: str = "drawable",
    ) -> None:
        self.project_dir = Path(project_dir)
        self.module_dir = Path(module_dir)
        self.module_manager = module_manager or ModuleManager(self.module_dir)
        self.drawable_prefix = drawable_prefix
        self.logger = get_logger("locator")

    def get_resources(self) -> List[Resource]:
        """Return primary-module resources first, then dependency resources in declaration order."""
        namespace = self.module_manager.get_namespace() or ""
        resources = self._module_resources(self.module_dir, module_name="", namespace=namespace)

        for module_path in self.module_manager.get_module_dependencies():
            dependency_dir = self.project_dir / Path(*module_path.split(":"))
            dependency_namespace = ModuleManager(dependency_dir).get_namespace()
            if dependency_namespace is None:
                self.logger.debug(
                    "Skipping dependency '%s': namespace could not be resolved", module_path
                )
                continue
            resources.extend(
                self._module_resources(
                    dependency_dir, module_name=module_path, namespace=dependency_namespace
                )
            )
        self.logger.debug("Located %d resource groups for %s", len(resources), self.module_dir)
        return resources

    def get_files_under_observation(self) -> List[Path]:
        """Return every resource file plus the module build file (which may not exist)."""
        files: List[Path] = []
        for resource in self.get_resources():
            files.extend(resource.module.resource_files)
        files.append(self.module_manager.get_build_gradle_file())
        return files

    def _module_resources(
        self, module_dir: Path, *, module_name: str, namespace: str
    ) -> List[Resource]:
        res_dir = module_dir / RES_DIRECTORY
        values = FileTree(
            res_dir / VALUES_DIRECTORY,
            predicate=has_extension(DOCUMENT_EXTENSION),
            recursive=False,
        )
        resources = [
            Resource(
                category=ResourceCategory.VALUES,
                module=ModuleDescriptor(module_name, namespace, tuple(values)),
            )
        ]

        for drawable_dir in self._drawable_directories(res_dir):
            assets = FileTree(drawable_dir, predicate=is_valid_resource_file, recursive=False)
            resources.append(
                Resource(
                    category=ResourceCategory.DRAWABLES,
                    module=ModuleDescriptor(module_name, namespace, tuple(assets)),
                )
            )
        return resources

    def _drawable_directories(self, res_dir: Path) -> List[Path]:
        if not res_dir.is_dir():
            return []
        return sorted(
            child
            for child in res_dir.iterdir()
            if child.is_dir() and child.name.startswith(self.drawable_prefix)
        )


__all__ = ["ResourceLocator"]
