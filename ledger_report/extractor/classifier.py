"""Category and entity classification for ledger rows.

Key Functions:
    category_index_of(): Map a roman/Cyrillic/numeric category code to 0..4.
    is_tracked_entity(): Decide whether an entity name gets balance columns.
    sort_by_caliber(): Comparator ordering names by embedded caliber, then text.
    sort_names(): Sort a collection of names with ``sort_by_caliber``.
    compute_entities_array(): Sorted tracked entities of a ledger.
    compute_list_array(): Sorted group names of a ledger.

Configuration (config/config.json, ``classifier`` section):
- category_map: code -> category index (I/І/1 -> 0 ... V/5 -> 4)
- placeholder_entities: names that never denote an entity ("-", "")
- excluded_prefixes / allowed_entities: reserved identifier prefix with its
  single allow-listed literal
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Any

from ledger_report.config import get_classifier_config

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ledger_report.transformer.ledger_builder import LedgerData

CATEGORY_COUNT = 5

_CALIBER_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)(?:\s*мм)?", re.IGNORECASE)

# Ukrainian alphabet order; Unicode code points put є, і, ї, ґ out of place.
_UKRAINIAN_ALPHABET = "абвгґдеєжзиіїйклмнопрстуфхцчшщьюя"
_UKRAINIAN_RANK = {letter: index for index, letter in enumerate(_UKRAINIAN_ALPHABET)}


# =============================================================================
# Category Codes
# =============================================================================


def _category_key(code: Any) -> str | None:
    """Normalize a category cell to its lookup key without altering text."""
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, float):
        return str(int(code)) if code.is_integer() else str(code)
    return str(code)


def category_index_of(code: Any, config: dict[str, Any] | None = None) -> int | None:
    """Return the 0-based category index for a category code.

    Parameters
    ----------
    code
        Roman numeral (``"IV"``), Cyrillic look-alike (``"ІІ"``), digit string,
        or a numeric cell value.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.

    Returns
    -------
    int | None
        Index in ``0..4`` or ``None`` for unmapped codes. Callers treat
        ``None`` as an absent category slot, never as category 0.
    """
    key = _category_key(code)
    if key is None:
        return None
    category_map: dict[str, int] = get_classifier_config(config)["category_map"]
    return category_map.get(key)


# =============================================================================
# Entities
# =============================================================================


def is_tracked_entity(name: str | None, config: dict[str, Any] | None = None) -> bool:
    """Return whether ``name`` is an entity that holds category balances.

    Rejects ``None``, placeholders (``"-"``, ``""``), and names starting with
    Latin or Cyrillic ``a`` except the allow-listed ``a1815`` literals.

    Examples
    --------
    >>> is_tracked_entity("А1815")
    True
    >>> is_tracked_entity("a2000")
    False
    """
    if name is None:
        return False

    classifier = get_classifier_config(config)
    if name in classifier["placeholder_entities"]:
        return False

    lowered = name.lower()
    if lowered.startswith(tuple(classifier["excluded_prefixes"])):
        return lowered in classifier["allowed_entities"]
    return True


# =============================================================================
# Caliber Ordering
# =============================================================================


def extract_caliber(text: str) -> float | None:
    """Extract the first numeric token of a name (``"7,62 мм"`` -> 7.62)."""
    match = _CALIBER_PATTERN.search(text)
    if not match:
        return None
    return float(match.group(1).replace(",", "."))


def _collation_key(text: str) -> tuple[tuple[int, int], ...]:
    """Case-insensitive Ukrainian collation key.

    Non-Cyrillic characters keep code point order and sort before Cyrillic
    letters; Cyrillic letters follow the Ukrainian alphabet.
    """
    key = []
    for char in text.casefold():
        rank = _UKRAINIAN_RANK.get(char)
        key.append((1, rank) if rank is not None else (0, ord(char)))
    return tuple(key)


def compare_text(a: str, b: str) -> int:
    """Compare two strings with Ukrainian case-insensitive collation.

    Strings equal under collation (differing only in case) are ordered by code
    point, so the result never depends on input order.
    """
    key_a, key_b = _collation_key(a), _collation_key(b)
    return (key_a > key_b) - (key_a < key_b) or (a > b) - (a < b)


def sort_by_caliber(a: str, b: str) -> int:
    """Order names by caliber, then by collated text.

    Both calibers present and different: numeric ascending. A name without a
    caliber sorts after any name with one. Equal calibers or both missing fall
    back to :func:`compare_text`.
    """
    caliber_a = extract_caliber(a)
    caliber_b = extract_caliber(b)

    if caliber_a is not None and caliber_b is not None:
        if caliber_a != caliber_b:
            return -1 if caliber_a < caliber_b else 1
    elif caliber_a is None and caliber_b is not None:
        return 1
    elif caliber_b is None and caliber_a is not None:
        return -1

    return compare_text(a, b)


def sort_names(names: Iterable[str]) -> list[str]:
    """Return ``names`` sorted with :func:`sort_by_caliber`."""
    return sorted(names, key=functools.cmp_to_key(sort_by_caliber))


def compute_entities_array(data: LedgerData, config: dict[str, Any] | None = None) -> list[str]:
    """Return the tracked entities of a ledger in column order.

    Recomputed from ``data.entities`` on every call; the result is a view,
    ``data.entities`` keeps every name seen including untracked ones.
    """
    if config is None:
        config = {"classifier": get_classifier_config()}
    tracked = [name for name in data.entities if is_tracked_entity(name, config)]
    return sort_names(tracked)


def compute_list_array(data: LedgerData) -> list[str]:
    """Return the group names of a ledger in page order."""
    return sort_names(data.groups)
