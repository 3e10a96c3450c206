"""Core data models shared across resourcegen components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class ModuleDescriptor:
    """One module's contribution to the aggregated resource set."""

    module_name: str
    namespace: str
    resource_files: Tuple[Path, ...] = ()

    @property
    def is_primary(self) -> bool:
        return not self.module_name


class ResourceCategory(Enum):
    """Top-level partition of resource kinds."""

    VALUES = "values"
    DRAWABLES = "drawables"


class ValueResourceKind(Enum):
    """Closed set of value resource kinds with their resource-type tag and label."""

    ARRAY = ("array", "Array")
    BOOLEAN = ("bool", "Boolean")
    COLOR = ("color", "Color")
    DIMENSION = ("dimen", "Dimension")
    FRACTION = ("fraction", "Fraction")
    INT_ARRAY = ("array", "IntArray")
    INTEGER = ("integer", "Integer")
    PLURAL = ("plurals", "Plural")
    STRING = ("string", "String")
    STRING_ARRAY = ("array", "StringArray")

    def __init__(self, tag: str, label: str) -> None:
        self.tag = tag
        self.label = label

    @property
    def namespace(self) -> str:
        """Name of the generated namespace block holding this kind."""
        return f"{self.label}s"


@dataclass(frozen=True)
class ValueResource:
    """A named entry parsed from a definition document."""

    name: str
    kind: ValueResourceKind
    parameterized: bool = False
    quantities: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Resource:
    """One category's file set for one module."""

    category: ResourceCategory
    module: ModuleDescriptor


@dataclass
class Change:
    """A single rewritten span in a source file."""

    line_number: int
    original_text: str
    updated_text: str


@dataclass
class SourceFileDetails:
    """All changes applied to one migrated source file."""

    name: str
    path: str
    changes: List[Change] = field(default_factory=list)


@dataclass(frozen=True)
class CacheEntry:
    """Last generated content and the newest observed input timestamp at that time."""

    content_snapshot: str
    most_recent_input_timestamp: int
