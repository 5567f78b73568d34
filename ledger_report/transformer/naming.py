"""Worksheet naming for group pages.

Excel sheet names cannot contain ``: \\ / ? * [ ]``, cannot start or end with
an apostrophe, and are limited to 31 characters.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

MAX_SHEET_NAME_LENGTH = 31
FALLBACK_SHEET_NAME = "Сторінка"

_ILLEGAL_CHARS = re.compile(r"[:\\/?*\[\]]")
_EDGE_QUOTES_AND_SPACES = re.compile(r"^['\s]+|['\s]+$")


def sanitize_name(raw: str, fallback: str = FALLBACK_SHEET_NAME) -> str:
    """Turn a group name into a valid sheet name.

    Idempotent: ``sanitize_name(sanitize_name(x)) == sanitize_name(x)``.

    Examples
    --------
    >>> sanitize_name("  'Книга 1/2' ")
    'Книга 12'
    >>> sanitize_name("[]")
    'Сторінка'
    """
    sanitized = _ILLEGAL_CHARS.sub("", raw)
    sanitized = _EDGE_QUOTES_AND_SPACES.sub("", sanitized)

    if len(sanitized) > MAX_SHEET_NAME_LENGTH:
        # Truncation can expose trailing spaces or quotes again
        sanitized = _EDGE_QUOTES_AND_SPACES.sub("", sanitized[:MAX_SHEET_NAME_LENGTH])

    if not sanitized.strip():
        return fallback
    return sanitized


def assign_sheet_names(
    group_names: Iterable[str],
    reserved: Iterable[str] = (),
    fallback: str = FALLBACK_SHEET_NAME,
) -> dict[str, str]:
    """Map each group name to a distinct, valid sheet name.

    Excel compares sheet names case-insensitively, so collisions are detected
    on the case-folded name. A clashing name gets a ``" (n)"`` suffix, with the
    base shortened to keep the result within 31 characters.

    Parameters
    ----------
    group_names
        Group names in page order.
    reserved
        Sheet names already taken (contents and appendix sheets).
    fallback
        Name used for groups whose sanitized name is empty.

    Returns
    -------
    dict[str, str]
        Group name -> sheet name.
    """
    taken = {name.casefold() for name in reserved}
    assigned: dict[str, str] = {}

    for group in group_names:
        base = sanitize_name(group, fallback)
        candidate = base
        counter = 2
        while candidate.casefold() in taken:
            suffix = f" ({counter})"
            candidate = base[: MAX_SHEET_NAME_LENGTH - len(suffix)].rstrip() + suffix
            counter += 1
        taken.add(candidate.casefold())
        assigned[group] = candidate

    return assigned


def quote_sheet_name(name: str) -> str:
    """Quote a sheet name for use in formulas and internal hyperlinks."""
    escaped = name.replace("'", "''")
    return f"'{escaped}'"
