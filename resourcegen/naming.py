"""Accessor naming rules shared by generation and migration."""

from __future__ import annotations

import re

from .models import ModuleDescriptor

_SEPARATORS = re.compile(r"[_.\-]+")
_NON_WORD = re.compile(r"\W")


def to_camel_case(value: str) -> str:
    """Convert ``snake_case``, ``dot.separated`` or ``kebab-case`` identifiers to ``camelCase``.

    The leading word is lowered as a whole and later words get an upper-case
    first character (``BTN_OK`` -> ``btnOK``). Input without separators is
    returned unchanged, so already camel-cased names are stable.
    """
    if not _SEPARATORS.search(value):
        return value
    segments = [segment for segment in _SEPARATORS.split(value) if segment]
    if not segments:
        return ""
    head, *tail = segments
    parts = [head.lower()]
    parts.extend(segment[0].upper() + segment[1:] for segment in tail)
    return "".join(parts)


def module_suffix(module: ModuleDescriptor) -> str:
    """Return ``_<camelModule>`` for dependency modules, ``""`` for the primary one."""
    if module.is_primary:
        return ""
    sanitized = _NON_WORD.sub("_", module.module_name)
    return f"_{to_camel_case(sanitized)}"


def function_name(resource_name: str, module: ModuleDescriptor) -> str:
    return f"{to_camel_case(resource_name)}{module_suffix(module)}"


def r_field_name(resource_name: str) -> str:
    """Return the generated R field for a resource name (dots become underscores)."""
    return resource_name.replace(".", "_")


def r_class_reference(module: ModuleDescriptor) -> str:
    """Return the ``R`` class expression used to reference the module's resources."""
    if module.is_primary or not module.namespace:
        return "R"
    return f"{module.namespace}.R"


__all__ = [
    "function_name",
    "module_suffix",
    "r_class_reference",
    "r_field_name",
    "to_camel_case",
]
