"""Output page - one worksheet per ledger group.

Layout (defaults from config/config.json ``layout.output_page``):

    B3        back link to the contents sheet
    F5        group name
    row 8-9   entity name over its 6-column block (merged)
    row 10    slot headers: total, I..V (summary block I..N and every entity)
    row 11    statement column headers A..H
    row 12    =COLUMN() index row
    row 13    opening balances ("leftovers")
    row 14+   one row per statement

Columns A..H hold statement fields; I..N sum each slot over all entities;
entity blocks start at column O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from ledger_report.config import get_classifier_config, get_layout_config, get_sheets_config, setup_logging
from ledger_report.transformer.balance_formulas import (
    CellValue,
    PageLayout,
    category_summary_formulas,
    entity_columns,
    leftovers_cells,
    statement_cells,
)
from ledger_report.transformer.naming import quote_sheet_name
from ledger_report.utils.cells import write_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openpyxl.worksheet.worksheet import Worksheet

    from ledger_report.transformer.ledger_builder import GroupRecord, Statement

logger = setup_logging(__name__)

HEADER_FONT = Font(bold=True)
CENTERED = Alignment(horizontal="center", vertical="center", wrap_text=True)


def _write_cells(worksheet: Worksheet, row: int, cells: dict[str, CellValue]) -> None:
    for column, cell_value in cells.items():
        cell = worksheet[f"{column}{row}"]
        cell.value = cell_value.value
        if cell_value.number_format:
            cell.number_format = cell_value.number_format


def _write_header(
    worksheet: Worksheet,
    group_name: str,
    entities: Sequence[str],
    layout: PageLayout,
    page: dict[str, Any],
    sheets: dict[str, Any],
    category_labels: Sequence[str],
) -> None:
    """Back link, title, entity and slot headers."""
    contents_name = sheets["contents_name"]
    link = worksheet[page["back_link_cell"]]
    link.value = sheets["back_link_text"]
    link.hyperlink = f"#{quote_sheet_name(contents_name)}!A1"
    link.style = "Hyperlink"

    title = worksheet[page["group_name_cell"]]
    write_text(title, group_name)
    title.font = Font(bold=True, size=14)

    slot_labels = [page["total_label"], *category_labels]
    header_row = page["slot_header_row"]

    for offset, label in enumerate(slot_labels):
        cell = worksheet.cell(row=header_row, column=layout.summary_first_column + offset, value=label)
        cell.font = HEADER_FONT
        cell.alignment = CENTERED

    first_name_row, last_name_row = page["entity_name_rows"]
    for index, entity in enumerate(entities):
        columns = entity_columns(index, layout)
        write_text(worksheet[f"{columns[0]}{first_name_row}"], entity)
        worksheet.merge_cells(f"{columns[0]}{first_name_row}:{columns[-1]}{last_name_row}")
        name_cell = worksheet[f"{columns[0]}{first_name_row}"]
        name_cell.font = HEADER_FONT
        name_cell.alignment = CENTERED

        for column, label in zip(columns, slot_labels, strict=True):
            cell = worksheet[f"{column}{header_row}"]
            cell.value = label
            cell.font = HEADER_FONT
            cell.alignment = CENTERED

    for column, label in zip(page["statement_columns"], page["statement_headers"], strict=True):
        cell = worksheet[f"{column}{header_row + 1}"]
        cell.value = label
        cell.font = HEADER_FONT
        cell.alignment = CENTERED


def _statement_fields(statement: Statement) -> list[Any]:
    """Values of columns A..H for one statement."""
    return [
        statement.date,
        statement.doc_name,
        statement.doc_number,
        statement.doc_date,
        statement.from_entity,
        statement.to_entity,
        statement.quantity_in,
        statement.quantity_out,
    ]


def build_output_page(
    worksheet: Worksheet,
    group_name: str,
    record: GroupRecord,
    entities: Sequence[str],
    config: dict[str, Any] | None = None,
) -> int:
    """Fill a group's worksheet with leftovers, statements, and balance formulas.

    Parameters
    ----------
    worksheet
        Empty worksheet named after the group.
    group_name
        Unsanitized group name shown in the title cell.
    record
        Leftovers and statements of the group.
    entities
        Tracked entities in column order (shared by all pages).
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.

    Returns
    -------
    int
        Last used row of the page.

    Raises
    ------
    InconsistentStatementError
        If a statement changes an entity balance without a quantity column.
    """
    page = get_layout_config("output_page", config)
    sheets = get_sheets_config(config)
    classifier = get_classifier_config(config)
    layout = PageLayout.from_config(config)

    _write_header(worksheet, group_name, entities, layout, page, sheets, classifier["category_labels"])

    # Leftovers row
    leftovers_row = layout.leftovers_row
    worksheet[f"A{leftovers_row}"] = record.leftovers.date or ""
    worksheet[f"B{leftovers_row}"] = classifier["opening_balance_marker"]
    _write_cells(worksheet, leftovers_row, leftovers_cells(record.leftovers, entities, layout))

    # Statement rows
    for position, statement in enumerate(record.statements):
        row = layout.statement_row(position)
        for column, value in zip(page["statement_columns"], _statement_fields(statement), strict=True):
            write_text(worksheet[f"{column}{row}"], value)
        _write_cells(worksheet, row, statement_cells(statement, row, entities, layout))

    last_row = layout.last_row(len(record.statements))

    if entities:
        last_column_index = layout.first_entity_column + len(entities) * layout.columns_per_entity - 1
        last_column = get_column_letter(last_column_index)

        for column_index in range(1, last_column_index + 1):
            worksheet.cell(row=page["column_index_row"], column=column_index, value="=COLUMN()")

        for row in range(leftovers_row, last_row + 1):
            for column, formula in category_summary_formulas(row, last_column, layout).items():
                worksheet[f"{column}{row}"] = formula
    else:
        logger.warning("Page '%s' has no tracked entities; balance columns left empty", worksheet.title)

    worksheet.freeze_panes = f"{get_column_letter(layout.summary_first_column)}{leftovers_row}"

    logger.debug(
        "Built page '%s': %d statements, rows %d-%d",
        worksheet.title,
        len(record.statements),
        leftovers_row,
        last_row,
    )
    return last_row
