"""Appendix sheet - per-group totals pulled from the group pages.

For each group (row ``first_row`` onward):

    A  =ROW()-13                         running number
    B  group name
    D  =SUM('<page>'!G14:G<last>)        total incoming
    E  =SUM('<page>'!H14:H<last>)        total outgoing
    F  ='<page>'!I<last>                 closing balance over all entities
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ledger_report.config import get_layout_config, setup_logging
from ledger_report.transformer.balance_formulas import PageLayout
from ledger_report.transformer.naming import quote_sheet_name
from ledger_report.utils.cells import write_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openpyxl.worksheet.worksheet import Worksheet

    from ledger_report.transformer.ledger_builder import LedgerData

logger = setup_logging(__name__)


def appendix_row_formulas(
    sheet_name: str,
    statement_count: int,
    first_row: int,
    layout: PageLayout,
) -> dict[str, str]:
    """Formulas of one appendix row referencing a group page."""
    ref = quote_sheet_name(sheet_name)
    first = layout.first_statement_row
    last = layout.last_row(statement_count)
    closing_column = get_column_letter(layout.summary_first_column)
    return {
        "A": f"=ROW()-{first_row - 1}",
        "D": f"=SUM({ref}!{layout.quantity_in_column}{first}:{layout.quantity_in_column}{last})",
        "E": f"=SUM({ref}!{layout.quantity_out_column}{first}:{layout.quantity_out_column}{last})",
        "F": f"={ref}!{closing_column}{last}",
    }


def build_appendix_sheet(
    worksheet: Worksheet,
    data: LedgerData,
    group_names: Sequence[str],
    sheet_names: dict[str, str],
    config: dict[str, Any] | None = None,
) -> None:
    """Write the summary appendix.

    Parameters
    ----------
    worksheet
        Empty appendix worksheet.
    data
        Ledger providing statement counts per group.
    group_names
        Groups in page order.
    sheet_names
        Group name -> worksheet name of its page.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.
    """
    layout = get_layout_config("appendix", config)
    page_layout = PageLayout.from_config(config)
    first_row = layout["first_row"]

    worksheet["A1"] = layout["title"]
    worksheet["A1"].font = Font(bold=True, size=14)
    for column_index, label in enumerate(layout["headers"], start=1):
        if label:
            cell = worksheet.cell(row=first_row - 1, column=column_index, value=label)
            cell.font = Font(bold=True)

    for index, group in enumerate(group_names):
        row = first_row + index
        write_text(worksheet[f"B{row}"], group)
        statement_count = len(data.groups[group].statements)
        formulas = appendix_row_formulas(sheet_names[group], statement_count, first_row, page_layout)
        for column, formula in formulas.items():
            worksheet[f"{column}{row}"] = formula

    logger.debug("Appendix: %d groups from row %d", len(group_names), first_row)
