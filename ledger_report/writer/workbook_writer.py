"""Report workbook assembly.

Sheet order in the output workbook:

| Зміст | Додаток 1 | <group page> | <group page> | ...

Group pages follow caliber-aware group order. Every sheet is built in memory
before anything is written, so a failing group aborts the whole report and no
partial file is left behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from openpyxl import Workbook

from ledger_report.config import get_config, get_output_paths, get_sheets_config, setup_logging
from ledger_report.extractor.classifier import compute_entities_array, compute_list_array
from ledger_report.sheets.appendix import build_appendix_sheet
from ledger_report.sheets.contents import build_contents_sheet
from ledger_report.sheets.output_page import build_output_page
from ledger_report.transformer.naming import assign_sheet_names

if TYPE_CHECKING:
    from ledger_report.transformer.ledger_builder import LedgerData

logger = setup_logging(__name__)

DEFAULT_REPORT_NAME = "ledger_report.xlsx"


def build_report_workbook(data: LedgerData, config: dict[str, Any] | None = None) -> Workbook:
    """Build the report workbook in memory.

    Parameters
    ----------
    data
        Ledger produced by :func:`~ledger_report.transformer.build_ledger`.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk once and shared by all sheet builders.

    Returns
    -------
    Workbook
        Workbook with contents, appendix, and one page per group.

    Raises
    ------
    InconsistentStatementError
        If any statement cannot be rendered as balance formulas.
    """
    if config is None:
        config = get_config()

    sheets = get_sheets_config(config)
    group_names = compute_list_array(data)
    entities = compute_entities_array(data, config)
    sheet_names = assign_sheet_names(
        group_names,
        reserved=(sheets["contents_name"], sheets["appendix_name"]),
        fallback=sheets["fallback_name"],
    )

    workbook = Workbook()
    contents_sheet = workbook.active
    contents_sheet.title = sheets["contents_name"]
    appendix_sheet = workbook.create_sheet(sheets["appendix_name"])

    for group in group_names:
        worksheet = workbook.create_sheet(sheet_names[group])
        build_output_page(worksheet, group, data.groups[group], entities, config)

    build_contents_sheet(contents_sheet, group_names, sheet_names, config)
    build_appendix_sheet(appendix_sheet, data, group_names, sheet_names, config)

    logger.info("Report workbook: %d group pages, %d entity blocks", len(group_names), len(entities))
    return workbook


def generate_report(
    data: LedgerData,
    output_path: Path | None = None,
    config: dict[str, Any] | None = None,
) -> Path:
    """Build the report workbook and save it.

    Parameters
    ----------
    data
        Ledger to render.
    output_path
        Target ``.xlsx`` path; defaults to ``DATA_DIR/output/ledger_report.xlsx``.
    config
        Optional configuration dictionary.

    Returns
    -------
    Path
        Location of the written workbook.
    """
    if output_path is None:
        output_path = get_output_paths()["output"] / DEFAULT_REPORT_NAME
    output_path = Path(output_path)

    workbook = build_report_workbook(data, config)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)

    logger.info("Report saved: %s", output_path)
    return output_path
