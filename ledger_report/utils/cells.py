"""Cell helpers for openpyxl worksheets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from openpyxl.cell.cell import Cell


def write_text(cell: Cell, value: Any) -> Cell:
    """Assign ``value`` to ``cell``, storing any string as literal text.

    A leading ``=`` or an error literal such as ``#N/A`` stays plain text
    instead of becoming a formula or an error value.
    """
    cell.value = value
    if isinstance(value, str):
        cell.data_type = "s"
    return cell
