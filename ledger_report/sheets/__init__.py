"""Report sheet builders for ledger-report.

Each module fills one kind of worksheet of the output workbook with openpyxl.

Modules
-------
output_page
    One page per ledger group: statements, opening balances, and running
    balance formulas per entity and category.
contents
    Table of contents with internal hyperlinks to every group page.
appendix
    Summary of incoming, outgoing, and closing totals per group, referencing
    the group pages by formula.
"""

from ledger_report.sheets.appendix import appendix_row_formulas, build_appendix_sheet
from ledger_report.sheets.contents import build_contents_sheet, contents_position
from ledger_report.sheets.output_page import build_output_page

__all__ = [
    "appendix_row_formulas",
    "build_appendix_sheet",
    "build_contents_sheet",
    "build_output_page",
    "contents_position",
]
