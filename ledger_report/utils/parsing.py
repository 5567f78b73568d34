"""Shared parsing utilities for worksheet cell values.

Ledger workbooks are maintained by hand, so the same column can hold native
numbers, Ukrainian-locale number strings, dates, or plain text. This module
normalizes those cell values for the ledger builder.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%d.%m.%Y"


def format_date(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a date cell as ``dd.mm.yyyy``.

    Examples
    --------
    - ``datetime(2024, 3, 5)`` -> ``"05.03.2024"``
    - ``"05.03.2024"`` -> ``"05.03.2024"`` (text passes through)
    - ``None`` -> ``""``

    Parameters
    ----------
    value
        Cell value read from the worksheet.
    date_format
        ``strftime`` pattern; defaults to ``%d.%m.%Y``.

    Returns
    -------
    str
        Formatted date, the stripped text for non-date values, or ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime(date_format)
    return str(value).strip()


def cell_to_text(value: Any) -> str | None:
    """Convert a cell value to text, keeping ``None`` for empty cells.

    Integral floats lose their ``.0`` so that numeric document numbers and
    entity codes read the same as they were typed.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_quantity(value: Any) -> int | float | None:
    """Parse a quantity cell.

    Ukrainian locale uses a comma as decimal separator and spaces (including
    non-breaking ones) as thousands separators.

    Examples
    --------
    - ``12`` -> 12
    - ``"1 250"`` -> 1250
    - ``"3,5"`` -> 3.5
    - ``None`` or ``""`` -> 0

    Parameters
    ----------
    value
        Raw cell value.

    Returns
    -------
    int | float | None
        Parsed quantity, ``0`` for empty cells, or ``None`` when the value is
        not a number.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if isinstance(value, float) and value.is_integer() else value

    cleaned = re.sub(r"\s", "", str(value))
    if not cleaned:
        return 0

    cleaned = cleaned.replace(",", ".")
    if not re.fullmatch(r"[+-]?\d+(?:\.\d+)?", cleaned):
        logger.debug("Could not parse quantity: %r", value)
        return None

    number = float(cleaned)

    return int(number) if number.is_integer() else number
