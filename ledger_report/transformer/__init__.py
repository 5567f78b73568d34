"""Transformer module: ledger building, balance formulas, and sheet naming.

Submodules
----------
ledger_builder
    Folds raw sheet rows into grouped leftovers and statements.
balance_formulas
    Running-balance formulas per entity and category for output pages.
naming
    Valid, unique worksheet names for group pages.
"""

from ledger_report.transformer.balance_formulas import (
    CellValue,
    InconsistentStatementError,
    PageLayout,
    category_summary_formulas,
    entity_columns,
    leftovers_cells,
    running_balances,
    statement_cells,
)
from ledger_report.transformer.ledger_builder import (
    EntityDelta,
    GroupRecord,
    LedgerData,
    Leftovers,
    MalformedRowError,
    RawRow,
    Statement,
    build_ledger,
)
from ledger_report.transformer.naming import assign_sheet_names, quote_sheet_name, sanitize_name

__all__ = [
    "CellValue",
    "EntityDelta",
    "GroupRecord",
    "InconsistentStatementError",
    "LedgerData",
    "Leftovers",
    "MalformedRowError",
    "PageLayout",
    "RawRow",
    "Statement",
    "assign_sheet_names",
    "build_ledger",
    "category_summary_formulas",
    "entity_columns",
    "leftovers_cells",
    "quote_sheet_name",
    "running_balances",
    "sanitize_name",
    "statement_cells",
]
