"""Kotlin ``ResourceManager`` source generation from located resources."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from ..errors import DocumentParseError
from ..logging import get_logger
from ..models import ModuleDescriptor, Resource, ResourceCategory, ValueResource, ValueResourceKind
from ..naming import function_name, r_class_reference, r_field_name
from ..parser import DocumentParser
from ..plurals import QUANTITY_KEYWORDS, missing_fallback, missing_quantities, unused_quantities
from ..walker import resource_base_name
from .templates import create_environment

TEMPLATE_NAME = "ResourceManager.kt.j2"
NOT_INITIALIZED_MESSAGE = (
    "ResourceManager is not initialized. "
    "Please call ResourceManager.initialize(this) in your Application class."
)

_CONTEXT_PARAMETER = "context: Context = application"
_THEME_PARAMETER = "theme: Theme = application.theme"


@dataclass(frozen=True)
class Accessor:
    """Kotlin signature and lookup expression for one resource kind."""

    parameters: str
    return_type: str
    body: str

    def render(self, name: str, reference: str) -> str:
        annotations = "@JvmOverloads @JvmStatic" if "=" in self.parameters else "@JvmStatic"
        body = self.body.format(ref=reference)
        return f"{annotations} fun {name}({self.parameters}): {self.return_type} = {body}"


VALUE_ACCESSORS: Dict[ValueResourceKind, Accessor] = {
    ValueResourceKind.ARRAY: Accessor(
        _CONTEXT_PARAMETER, "kotlin.Array<String>", "context.resources.getStringArray({ref})"
    ),
    ValueResourceKind.BOOLEAN: Accessor(
        _CONTEXT_PARAMETER, "Boolean", "context.resources.getBoolean({ref})"
    ),
    ValueResourceKind.COLOR: Accessor(
        _THEME_PARAMETER, "Int", "application.resources.getColor({ref}, theme)"
    ),
    ValueResourceKind.DIMENSION: Accessor(
        _CONTEXT_PARAMETER, "Float", "context.resources.getDimension({ref})"
    ),
    ValueResourceKind.FRACTION: Accessor(
        f"base: Int = 0, pbase: Int = 0, {_CONTEXT_PARAMETER}",
        "Float",
        "context.resources.getFraction({ref}, base, pbase)",
    ),
    ValueResourceKind.INT_ARRAY: Accessor(
        _CONTEXT_PARAMETER, "IntArray", "context.resources.getIntArray({ref})"
    ),
    ValueResourceKind.INTEGER: Accessor(
        _CONTEXT_PARAMETER, "Int", "context.resources.getInteger({ref})"
    ),
    ValueResourceKind.PLURAL: Accessor(
        f"quantity: Int, vararg args: Any?, {_CONTEXT_PARAMETER}",
        "String",
        "if (args.isEmpty()) context.resources.getQuantityString({ref}, quantity) "
        "else context.resources.getQuantityString({ref}, quantity, *args)",
    ),
    ValueResourceKind.STRING: Accessor(
        f"vararg args: Any?, {_CONTEXT_PARAMETER}",
        "String",
        "if (args.isEmpty()) context.getString({ref}) else context.getString({ref}, *args)",
    ),
    ValueResourceKind.STRING_ARRAY: Accessor(
        _CONTEXT_PARAMETER, "kotlin.Array<String>", "context.resources.getStringArray({ref})"
    ),
}

_UNHANDLED_KINDS = sorted(kind.name for kind in ValueResourceKind if kind not in VALUE_ACCESSORS)
if _UNHANDLED_KINDS:
    raise RuntimeError(f"No accessor defined for: {', '.join(_UNHANDLED_KINDS)}")

DRAWABLE_ACCESSOR = Accessor(
    _THEME_PARAMETER, "Drawable", "application.resources.getDrawable({ref}, theme)"
)
DRAWABLES_NAMESPACE = "Drawables"
DRAWABLE_TAG = "drawable"

# Reverse-alphabetical by category name: VALUES before DRAWABLES.
CATEGORY_ORDER: Tuple[ResourceCategory, ...] = tuple(
    sorted(ResourceCategory, key=lambda category: category.name, reverse=True)
)


@dataclass
class NamespaceBlock:
    name: str
    lines: List[str] = field(default_factory=list)


@dataclass
class CategorySection:
    title: str
    blocks: List[NamespaceBlock] = field(default_factory=list)


@dataclass
class ClassFile:
    """Generated source text plus the documents skipped in lenient mode."""

    content: str
    skipped_documents: List[DocumentParseError] = field(default_factory=list)


class ClassFileGenerator:
    """Turns the aggregated ``Resource`` list into one deterministic Kotlin source file."""

    def __init__(
        self,
        parser: DocumentParser | None = None,
        *,
        strict: bool = True,
        plural_language: str = "en",
        templates_dir: Path | None = None,
    ) -> None:
        self.parser = parser or DocumentParser()
        self.strict = strict
        self.plural_language = plural_language
        self.logger = get_logger("generation")
        self._env = create_environment(templates_dir)

    def generate(self, namespace: str, resources: Sequence[Resource]) -> ClassFile:
        """Render the ``ResourceManager`` object for ``namespace``.

        Raises ``DocumentParseError`` in strict mode when a definition document
        is malformed; otherwise the document is logged and skipped.
        """
        skipped: List[DocumentParseError] = []
        grouped: Dict[ResourceCategory, List[Resource]] = defaultdict(list)
        for resource in resources:
            grouped[resource.category].append(resource)

        sections: List[CategorySection] = []
        for category in CATEGORY_ORDER:
            members = grouped.get(category)
            if not members:
                continue
            if category is ResourceCategory.VALUES:
                blocks = self._value_blocks(members, skipped)
            else:
                blocks = self._drawable_blocks(members)
            if blocks:
                sections.append(CategorySection(title=category.name, blocks=blocks))

        template = self._env.get_template(TEMPLATE_NAME)
        content = template.render(
            namespace=namespace,
            not_initialized_message=NOT_INITIALIZED_MESSAGE,
            sections=sections,
        )
        return ClassFile(content=content, skipped_documents=skipped)

    def _value_blocks(
        self, resources: Iterable[Resource], skipped: List[DocumentParseError]
    ) -> List[NamespaceBlock]:
        pairs_by_kind: Dict[ValueResourceKind, List[Tuple[ModuleDescriptor, ValueResource]]] = (
            defaultdict(list)
        )
        for resource in resources:
            for document in sorted(resource.module.resource_files):
                for value in self._parse(document, skipped):
                    pairs_by_kind[value.kind].append((resource.module, value))

        blocks: List[NamespaceBlock] = []
        for kind in sorted(pairs_by_kind, key=lambda item: item.label):
            pairs = sorted(pairs_by_kind[kind], key=lambda pair: pair[1].name)
            block = NamespaceBlock(name=kind.namespace)
            emitted: Set[str] = set()
            for module, value in pairs:
                name = function_name(value.name, module)
                if name in emitted:
                    self.logger.debug("Skipping duplicate %s.%s", block.name, name)
                    continue
                emitted.add(name)
                block.lines.extend(self._value_lines(name, module, value))
            blocks.append(block)
        return blocks

    def _drawable_blocks(self, resources: Iterable[Resource]) -> List[NamespaceBlock]:
        assets: List[Tuple[ModuleDescriptor, str]] = []
        for resource in resources:
            for path in sorted(resource.module.resource_files):
                assets.append((resource.module, resource_base_name(path)))
        if not assets:
            return []

        block = NamespaceBlock(name=DRAWABLES_NAMESPACE)
        emitted: Set[str] = set()
        for module, asset in sorted(assets, key=lambda pair: pair[1]):
            name = function_name(asset, module)
            if name in emitted:
                continue
            emitted.add(name)
            reference = f"{r_class_reference(module)}.{DRAWABLE_TAG}.{r_field_name(asset)}"
            block.lines.append(DRAWABLE_ACCESSOR.render(name, reference))
        return [block]

    def _value_lines(
        self, name: str, module: ModuleDescriptor, value: ValueResource
    ) -> List[str]:
        reference = f"{r_class_reference(module)}.{value.kind.tag}.{r_field_name(value.name)}"
        lines: List[str] = []
        if value.kind is ValueResourceKind.STRING and value.parameterized:
            lines.append("/** Formatted string: pass its format arguments through `args`. */")
        elif value.kind is ValueResourceKind.PLURAL:
            if value.quantities:
                ordered = sorted(set(value.quantities), key=_quantity_order)
                lines.append(f"/** Quantities: {', '.join(ordered)}. */")
            self._check_quantities(value)
        lines.append(VALUE_ACCESSORS[value.kind].render(name, reference))
        return lines

    def _check_quantities(self, value: ValueResource) -> None:
        if missing_fallback(value.quantities):
            self.logger.warning(
                "Plural '%s' has no 'other' item; defined quantities: %s",
                value.name,
                ", ".join(value.quantities) or "none",
            )
        missing = missing_quantities(value.quantities, self.plural_language)
        if missing:
            self.logger.warning(
                "Plural '%s' has no item for %s, selected in '%s'",
                value.name,
                ", ".join(missing),
                self.plural_language,
            )
        unused = unused_quantities(value.quantities, self.plural_language)
        if unused:
            self.logger.warning(
                "Plural '%s' defines %s, never selected in '%s'",
                value.name,
                ", ".join(unused),
                self.plural_language,
            )

    def _parse(self, document: Path, skipped: List[DocumentParseError]) -> List[ValueResource]:
        try:
            return self.parser.parse(document)
        except DocumentParseError as exc:
            if self.strict:
                raise
            self.logger.error("%s (skipped)", exc)
            skipped.append(exc)
            return []


def _quantity_order(quantity: str) -> Tuple[int, str]:
    if quantity in QUANTITY_KEYWORDS:
        return QUANTITY_KEYWORDS.index(quantity), quantity
    return len(QUANTITY_KEYWORDS), quantity


__all__ = [
    "CATEGORY_ORDER",
    "ClassFile",
    "ClassFileGenerator",
    "DRAWABLE_ACCESSOR",
    "NOT_INITIALIZED_MESSAGE",
    "VALUE_ACCESSORS",
]
