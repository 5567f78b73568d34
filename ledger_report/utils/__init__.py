"""Shared utility functions for ledger_report package."""

from ledger_report.utils.cells import write_text
from ledger_report.utils.parsing import (
    cell_to_text,
    format_date,
    parse_quantity,
)

__all__ = [
    "cell_to_text",
    "format_date",
    "parse_quantity",
    "write_text",
]
