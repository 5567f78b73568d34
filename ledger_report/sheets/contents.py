"""Contents sheet - hyperlinked index of group pages.

Entries fill blocks of three columns (name, link, spacer) top to bottom,
``rows_per_column_group`` entries per block, then continue in the next block
to the right.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from openpyxl.styles import Border, Font, Side

from ledger_report.config import get_layout_config, get_sheets_config, setup_logging
from ledger_report.transformer.naming import quote_sheet_name
from ledger_report.utils.cells import write_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openpyxl.worksheet.worksheet import Worksheet

logger = setup_logging(__name__)

THIN = Side(style="thin")


def contents_position(entry_index: int, layout: dict[str, Any]) -> tuple[int, int]:
    """Return ``(row, first_column)`` of the 0-based entry in the contents grid."""
    per_group = layout["rows_per_column_group"]
    group_index, offset = divmod(entry_index, per_group)
    return layout["data_start_row"] + offset, 1 + group_index * layout["columns_per_group"]


def build_contents_sheet(
    worksheet: Worksheet,
    group_names: Sequence[str],
    sheet_names: dict[str, str],
    config: dict[str, Any] | None = None,
) -> None:
    """Write the table of contents.

    Parameters
    ----------
    worksheet
        Empty contents worksheet.
    group_names
        Groups in page order.
    sheet_names
        Group name -> worksheet name of its page.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk.
    """
    layout = get_layout_config("contents", config)
    sheets = get_sheets_config(config)
    per_group = layout["rows_per_column_group"]
    width = layout["columns_per_group"]

    worksheet["A1"] = layout["title"]
    worksheet["A1"].font = Font(bold=True, size=14)

    group_count = max(1, -(-len(group_names) // per_group))
    header_row = layout["header_rows"]
    for block in range(group_count):
        for offset, label in enumerate(layout["headers"]):
            cell = worksheet.cell(row=header_row, column=1 + block * width + offset, value=label or None)
            cell.font = Font(bold=True)
            cell.border = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)

    for index, group in enumerate(group_names):
        row, column = contents_position(index, layout)
        sheet_name = sheet_names[group]

        write_text(worksheet.cell(row=row, column=column), group)

        link = worksheet.cell(row=row, column=column + 1, value=sheets["sheet_link_text"].format(index=index + 1))
        link.hyperlink = f"#{quote_sheet_name(sheet_name)}!A1"
        link.style = "Hyperlink"

        # Bottom border only under the last entry of each block
        last_in_block = (index + 1) % per_group == 0 or index == len(group_names) - 1
        for offset in range(width):
            cell = worksheet.cell(row=row, column=column + offset)
            cell.border = Border(left=THIN, right=THIN, bottom=THIN if last_in_block else None)

    logger.debug("Contents: %d entries in %d column groups", len(group_names), group_count)
