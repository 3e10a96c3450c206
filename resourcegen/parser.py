"""Parser for Android resource-definition (``res/values``) documents."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

from .errors import DocumentParseError
from .models import ValueResource, ValueResourceKind

_ELEMENT_KINDS: Dict[str, ValueResourceKind] = {
    "string": ValueResourceKind.STRING,
    "color": ValueResourceKind.COLOR,
    "bool": ValueResourceKind.BOOLEAN,
    "integer": ValueResourceKind.INTEGER,
    "dimen": ValueResourceKind.DIMENSION,
    "fraction": ValueResourceKind.FRACTION,
    "array": ValueResourceKind.ARRAY,
    "string-array": ValueResourceKind.STRING_ARRAY,
    "integer-array": ValueResourceKind.INT_ARRAY,
    "plurals": ValueResourceKind.PLURAL,
}

# "%%" is a literal percent sign, never the start of a placeholder.
_PLACEHOLDER_PATTERN = re.compile(r"(?<!%)(?:%%)*%(?:\d+\$)?[sdfxoce]")


class DocumentParser:
    """Turns one definition document into ``ValueResource`` records."""

    def parse(self, path: Path) -> List[ValueResource]:
        """Parse ``path``; raises ``DocumentParseError`` for malformed documents."""
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as exc:
            raise DocumentParseError(path, str(exc)) from exc

        resources: List[ValueResource] = []
        for element in root:
            resource = self._parse_element(element)
            if resource is not None:
                resources.append(resource)
        return resources

    def _parse_element(self, element: ET.Element) -> Optional[ValueResource]:
        if not isinstance(element.tag, str):
            # comments and processing instructions
            return None
        kind = _ELEMENT_KINDS.get(_local_name(element.tag))
        name = element.get("name", "").strip()
        if kind is None or not name:
            return None

        if kind is ValueResourceKind.STRING:
            text = "".join(element.itertext())
            return ValueResource(name, kind, parameterized=bool(_PLACEHOLDER_PATTERN.search(text)))
        if kind is ValueResourceKind.PLURAL:
            quantities = tuple(
                item.get("quantity", "").strip()
                for item in element
                if isinstance(item.tag, str)
                and _local_name(item.tag) == "item"
                and item.get("quantity")
            )
            return ValueResource(name, kind, quantities=quantities)
        return ValueResource(name, kind)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


__all__ = ["DocumentParser"]
