"""Legacy resource-access call patterns recognised by the migration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Optional, Tuple

from ..generation.class_file import DRAWABLE_TAG, DRAWABLES_NAMESPACE
from ..models import ValueResourceKind

# Optional receiver chain: ``context.``, ``resources?.``, ``requireContext()!!.``, ``this@Main.``
_RECEIVER = r"(?:\w+(?:@\w+)?(?:\?|!!)?\.|\w+(?:<[^<>]*>)?\(\)(?:\?|!!)?\.)*"
# One argument without a top-level comma; one level of nested parentheses.
_ARGUMENT = r"[^(),\s][^(),]*(?:\([^()]*\)[^(),]*)*|\([^()]*\)[^(),]*"
# Any argument list, commas included; one level of nested parentheses.
_ARGUMENTS = r"[^()\s][^()]*(?:\([^()]*\)[^()]*)*|\([^()]*\)[^()]*(?:\([^()]*\)[^()]*)*"


@dataclass(frozen=True)
class CallPattern:
    """One recognised call shape and the accessor namespaces it may target.

    ``arity`` is the number of argument groups after the resource reference:
    0 for ``getX(R.t.x)``, 1 for ``getX(R.t.x, args...)`` (the rest of the
    argument list is carried over as-is), 2 for ``getX(R.t.x, a, b)``.
    ``leading_context`` matches ``Helper.getX(context, R.t.x)``; the context
    argument is dropped.
    """

    method: str
    tag: str
    namespaces: FrozenSet[str]
    arity: int = 0
    leading_context: bool = False

    @property
    def regex(self) -> re.Pattern[str]:
        return _compile(self)


@lru_cache(maxsize=None)
def _compile(pattern: CallPattern) -> re.Pattern[str]:
    resource = rf"(?P<prefix>(?:\w+\.)+)?R\.{pattern.tag}\.(?P<field>\w+)"
    head = rf"(?<![\w.@]){_RECEIVER}{pattern.method}\(\s*"
    if pattern.leading_context:
        head += rf"(?:{_ARGUMENT})\s*,\s*"
    if pattern.arity == 0:
        tail = r"\s*\)"
    elif pattern.arity == 1:
        tail = rf"\s*,\s*(?P<args>(?:{_ARGUMENTS}))\s*\)"
    else:
        tail = rf"\s*,\s*(?P<args>(?:{_ARGUMENT})\s*,\s*(?:{_ARGUMENT}))\s*\)"
    return re.compile(head + resource + tail)


def _namespaces(*kinds: ValueResourceKind) -> FrozenSet[str]:
    return frozenset(kind.namespace for kind in kinds)


_DRAWABLES = frozenset({DRAWABLES_NAMESPACE})

CALL_PATTERNS: Tuple[CallPattern, ...] = (
    # zero-argument variants
    CallPattern("getBoolean", "bool", _namespaces(ValueResourceKind.BOOLEAN)),
    CallPattern("getColor", "color", _namespaces(ValueResourceKind.COLOR)),
    CallPattern("getDimension", "dimen", _namespaces(ValueResourceKind.DIMENSION)),
    CallPattern("getDrawable", DRAWABLE_TAG, _DRAWABLES),
    CallPattern("getIntArray", "array", _namespaces(ValueResourceKind.INT_ARRAY)),
    CallPattern("getInteger", "integer", _namespaces(ValueResourceKind.INTEGER)),
    CallPattern("getString", "string", _namespaces(ValueResourceKind.STRING)),
    CallPattern(
        "getStringArray",
        "array",
        _namespaces(ValueResourceKind.STRING_ARRAY, ValueResourceKind.ARRAY),
    ),
    CallPattern("getFraction", "fraction", _namespaces(ValueResourceKind.FRACTION)),
    # trailing-argument variants
    CallPattern("getColor", "color", _namespaces(ValueResourceKind.COLOR), arity=1),
    CallPattern("getDrawable", DRAWABLE_TAG, _DRAWABLES, arity=1),
    CallPattern("getQuantityString", "plurals", _namespaces(ValueResourceKind.PLURAL), arity=1),
    CallPattern("getString", "string", _namespaces(ValueResourceKind.STRING), arity=1),
    CallPattern("getFraction", "fraction", _namespaces(ValueResourceKind.FRACTION), arity=2),
    # ContextCompat.getColor(context, R.color.x) and friends
    CallPattern(
        "getColor", "color", _namespaces(ValueResourceKind.COLOR), leading_context=True
    ),
    CallPattern("getDrawable", DRAWABLE_TAG, _DRAWABLES, leading_context=True),
    CallPattern(
        "getString", "string", _namespaces(ValueResourceKind.STRING), leading_context=True
    ),
)

_COVERED = set().union(*(pattern.namespaces for pattern in CALL_PATTERNS))
_UNCOVERED = sorted(
    kind.name for kind in ValueResourceKind if kind.namespace not in _COVERED
)
if _UNCOVERED:
    raise RuntimeError(f"No migration pattern targets: {', '.join(_UNCOVERED)}")


@dataclass(frozen=True)
class CallMatch:
    """The parts of one legacy call a replacement is built from."""

    pattern: CallPattern
    text: str
    namespace_prefix: Optional[str]
    field_name: str
    arguments: str

    @property
    def key(self) -> str:
        return f"R.{self.pattern.tag}.{self.field_name}"


def to_call_match(pattern: CallPattern, match: re.Match[str]) -> CallMatch:
    prefix = match.group("prefix")
    arguments = match.groupdict().get("args") or ""
    return CallMatch(
        pattern=pattern,
        text=match.group(0),
        namespace_prefix=prefix.rstrip(".") if prefix else None,
        field_name=match.group("field"),
        arguments=arguments.strip(),
    )


__all__ = ["CALL_PATTERNS", "CallMatch", "CallPattern", "to_call_match"]
