"""Writer module for the report workbook and ledger exports.

Workbook output: contents, appendix, and one page per group.
Exports: ledger.json snapshot, ledger_statements.csv flat table.
"""

from ledger_report.writer.ledger_export import (
    ledger_from_dict,
    ledger_to_dataframe,
    ledger_to_dict,
    load_ledger_json,
    save_ledger_json,
    write_ledger_to_csv,
)
from ledger_report.writer.workbook_writer import build_report_workbook, generate_report

__all__ = [
    # Workbook
    "build_report_workbook",
    "generate_report",
    # Exports
    "ledger_from_dict",
    "ledger_to_dataframe",
    "ledger_to_dict",
    "load_ledger_json",
    "save_ledger_json",
    "write_ledger_to_csv",
]
