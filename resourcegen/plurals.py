"""CLDR plural category selection for integer quantities."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple

FALLBACK_QUANTITY = "other"
QUANTITY_KEYWORDS = ("zero", "one", "two", "few", "many", "other")

PluralRule = Callable[[int], str]


def _one_other(n: int) -> str:
    return "one" if n == 1 else "other"


def _zero_one_other(n: int) -> str:
    return "one" if n in (0, 1) else "other"


def _other_only(n: int) -> str:
    return "other"


def _east_slavic(n: int) -> str:
    if n % 10 == 1 and n % 100 != 11:
        return "one"
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return "few"
    return "many"


def _polish(n: int) -> str:
    if n == 1:
        return "one"
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return "few"
    return "many"


def _west_slavic(n: int) -> str:
    if n == 1:
        return "one"
    if 2 <= n <= 4:
        return "few"
    return "other"


def _arabic(n: int) -> str:
    if n == 0:
        return "zero"
    if n == 1:
        return "one"
    if n == 2:
        return "two"
    if 3 <= n % 100 <= 10:
        return "few"
    if 11 <= n % 100 <= 99:
        return "many"
    return "other"


_RULES: Dict[str, PluralRule] = {
    "ar": _arabic,
    "be": _east_slavic,
    "cs": _west_slavic,
    "de": _one_other,
    "en": _one_other,
    "es": _one_other,
    "fr": _zero_one_other,
    "id": _other_only,
    "it": _one_other,
    "ja": _other_only,
    "ko": _other_only,
    "nl": _one_other,
    "pl": _polish,
    "pt": _zero_one_other,
    "ru": _east_slavic,
    "sk": _west_slavic,
    "sv": _one_other,
    "th": _other_only,
    "uk": _east_slavic,
    "vi": _other_only,
    "zh": _other_only,
}


def plural_category(quantity: int, language: str = "en") -> str:
    """Return the CLDR category (``one``, ``few``...) for an integer ``quantity``."""
    code = language.replace("_", "-").split("-", 1)[0].lower()
    rule = _RULES.get(code, _one_other)
    return rule(abs(quantity))


def reachable_categories(language: str = "en") -> Tuple[str, ...]:
    """Return the categories integer quantities can select in ``language``, in keyword order."""
    # every rule depends on n only through n % 100 once n >= 100
    seen = {plural_category(quantity, language) for quantity in range(200)}
    return tuple(keyword for keyword in QUANTITY_KEYWORDS if keyword in seen)


def missing_quantities(quantities: Iterable[str], language: str = "en") -> List[str]:
    """Return reachable categories with no item of their own, ``other`` excluded."""
    defined = set(quantities)
    return [
        category
        for category in reachable_categories(language)
        if category != FALLBACK_QUANTITY and category not in defined
    ]


def unused_quantities(quantities: Iterable[str], language: str = "en") -> List[str]:
    """Return defined items no integer quantity ever selects in ``language``.

    ``other`` is never reported: Android falls back to it for any category
    without an item.
    """
    reachable = set(reachable_categories(language))
    unused = {
        quantity
        for quantity in quantities
        if quantity != FALLBACK_QUANTITY and quantity not in reachable
    }
    return [keyword for keyword in QUANTITY_KEYWORDS if keyword in unused] + sorted(
        unused.difference(QUANTITY_KEYWORDS)
    )


def missing_fallback(quantities: Iterable[str]) -> bool:
    """Return True when a plural definition cannot fall back to ``other``."""
    return FALLBACK_QUANTITY not in set(quantities)


__all__ = [
    "FALLBACK_QUANTITY",
    "QUANTITY_KEYWORDS",
    "missing_fallback",
    "missing_quantities",
    "plural_category",
    "reachable_categories",
    "unused_quantities",
]
