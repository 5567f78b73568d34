"""Read the input ledger worksheet with openpyxl.

The first worksheet is used unless a sheet name is given. Values are read
with ``data_only=True`` so formula cells contribute their cached results.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from ledger_report.config import setup_logging
from ledger_report.transformer.ledger_builder import LedgerData, build_ledger

logger = setup_logging(__name__)


def load_sheet_rows(path: Path | str, sheet_name: str | None = None) -> list[tuple[Any, ...]]:
    """Load all row values of a worksheet, header row included.

    Parameters
    ----------
    path
        Path to an ``.xlsx`` workbook.
    sheet_name
        Worksheet to read; defaults to the first worksheet.

    Returns
    -------
    list[tuple[Any, ...]]
        One tuple per sheet row, column A first.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ValueError
        If ``sheet_name`` is not present in the workbook.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Input workbook not found: {path}"
        raise FileNotFoundError(msg)

    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet_name is None:
            worksheet = workbook.worksheets[0]
        elif sheet_name in workbook.sheetnames:
            worksheet = workbook[sheet_name]
        else:
            msg = f"Sheet '{sheet_name}' not found in {path.name}; available: {workbook.sheetnames}"
            raise ValueError(msg)

        rows = list(worksheet.iter_rows(values_only=True))
    finally:
        workbook.close()

    logger.info("Loaded %d rows from %s [%s]", len(rows), path.name, worksheet.title)
    return rows


def read_ledger(
    path: Path | str,
    sheet_name: str | None = None,
    config: dict[str, Any] | None = None,
) -> LedgerData:
    """Load an input workbook and build its ledger."""
    rows = load_sheet_rows(path, sheet_name)
    data = build_ledger(rows, config)
    logger.info(
        "Ledger built: %d groups, %d entities seen, %d statements",
        len(data.groups),
        len(data.entities),
        data.statement_count,
    )
    return data
