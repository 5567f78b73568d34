"""Running-balance formulas for output pages.

Every tracked entity owns a block of six columns on a group's page: a total
followed by categories I-V. Row ``leftovers_row`` holds the opening balances
as literal numbers; each statement row below carries each category forward
from the previous row and adds the row's signed quantity when the statement
touches that entity and category:

    O14 = SUM(P14:T14)
    P14 = P13 + G14 * -1     (delta defined, quantity taken from column G)
    Q14 = Q13                (no delta: carry forward, zero shown blank)

Functions here return plain ``{column_letter: CellValue}`` mappings so the
rules can be tested without a workbook; :mod:`ledger_report.sheets` writes
them into openpyxl sheets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from openpyxl.utils import get_column_letter

from ledger_report.config import get_formatting_config, get_layout_config
from ledger_report.extractor.classifier import CATEGORY_COUNT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ledger_report.transformer.ledger_builder import GroupRecord, Leftovers, Statement

__all__ = [
    "BLANK_ZERO_FORMAT",
    "CellValue",
    "InconsistentStatementError",
    "PageLayout",
    "category_summary_formulas",
    "entity_columns",
    "leftovers_cells",
    "running_balances",
    "statement_cells",
]

BLANK_ZERO_FORMAT = "#,##0;-#,##0;"


class InconsistentStatementError(ValueError):
    """A statement has category deltas but no quantity column to take them from."""


@dataclass(frozen=True)
class CellValue:
    """Value for one output cell plus an optional number format."""

    value: Any
    number_format: str | None = None


@dataclass(frozen=True)
class PageLayout:
    """Row and column anchors of an output page."""

    leftovers_row: int = 13
    first_statement_row: int = 14
    first_entity_column: int = 15  # O
    columns_per_entity: int = 6
    quantity_in_column: str = "G"
    quantity_out_column: str = "H"
    summary_first_column: int = 9  # I
    blank_zero_format: str = BLANK_ZERO_FORMAT

    @classmethod
    def from_config(cls, config: dict[str, Any] | None = None) -> PageLayout:
        """Build the layout from the ``layout.output_page`` config section."""
        page = get_layout_config("output_page", config)
        formatting = get_formatting_config(config)
        return cls(
            leftovers_row=page["leftovers_row"],
            first_statement_row=page["first_statement_row"],
            first_entity_column=page["first_entity_column"],
            columns_per_entity=page["columns_per_entity"],
            quantity_in_column=page["quantity_in_column"],
            quantity_out_column=page["quantity_out_column"],
            summary_first_column=page["summary_first_column"],
            blank_zero_format=formatting.get("blank_zero_number_format", BLANK_ZERO_FORMAT),
        )

    def statement_row(self, position: int) -> int:
        """Sheet row of the statement at 0-based ``position``."""
        return self.first_statement_row + position

    def last_row(self, statement_count: int) -> int:
        """Last used row of a page; the leftovers row for a page without statements."""
        if statement_count == 0:
            return self.leftovers_row
        return self.first_statement_row + statement_count - 1


def entity_columns(entity_index: int, layout: PageLayout) -> list[str]:
    """Return ``[total, I, II, III, IV, V]`` column letters for an entity block."""
    start = layout.first_entity_column + entity_index * layout.columns_per_entity
    return [get_column_letter(start + offset) for offset in range(layout.columns_per_entity)]


def _sum_formula(columns: list[str], row: int) -> str:
    return f"=SUM({columns[1]}{row}:{columns[-1]}{row})"


def leftovers_cells(
    leftovers: Leftovers,
    entities: Sequence[str],
    layout: PageLayout,
) -> dict[str, CellValue]:
    """Cells of the opening-balance row.

    Category cells get the literal opening quantity (``None`` when absent);
    totals sum the row's own category cells.
    """
    row = layout.leftovers_row
    cells: dict[str, CellValue] = {}

    for index, entity in enumerate(entities):
        columns = entity_columns(index, layout)
        cells[columns[0]] = CellValue(_sum_formula(columns, row))

        delta = leftovers.entities.get(entity)
        for category, column in enumerate(columns[1 : CATEGORY_COUNT + 1]):
            value = delta.categories.get(category) if delta is not None else None
            cells[column] = CellValue(value)

    return cells


def _source_column(statement: Statement, layout: PageLayout) -> str | None:
    if statement.take_value_from == "in":
        return layout.quantity_in_column
    if statement.take_value_from == "out":
        return layout.quantity_out_column
    return None


def statement_cells(
    statement: Statement,
    row: int,
    entities: Sequence[str],
    layout: PageLayout,
) -> dict[str, CellValue]:
    """Cells of one statement row.

    Parameters
    ----------
    statement
        Statement rendered on ``row``.
    row
        Sheet row number; the previous balance is read from ``row - 1``.
    entities
        Tracked entities in column order.
    layout
        Page anchors.

    Returns
    -------
    dict[str, CellValue]
        Formula per entity column.

    Raises
    ------
    InconsistentStatementError
        If an entity has a category delta but the statement has no
        ``take_value_from``.
    """
    previous = row - 1
    source = _source_column(statement, layout)
    cells: dict[str, CellValue] = {}

    for index, entity in enumerate(entities):
        columns = entity_columns(index, layout)
        cells[columns[0]] = CellValue(_sum_formula(columns, row))

        delta = statement.entities.get(entity)
        for category, column in enumerate(columns[1 : CATEGORY_COUNT + 1]):
            if delta is None or category not in delta.categories:
                cells[column] = CellValue(f"={column}{previous}", layout.blank_zero_format)
                continue

            if source is None:
                msg = (
                    f"Statement {statement.doc_name!r} No.{statement.doc_number!r} on row {row} "
                    f"changes {entity!r} but has neither incoming nor outgoing quantity"
                )
                raise InconsistentStatementError(msg)

            cells[column] = CellValue(f"={column}{previous}+{source}{row}*{delta.operation}")

    return cells


def category_summary_formulas(row: int, last_column: str, layout: PageLayout) -> dict[str, str]:
    """Per-row sums of each slot (total, I..V) across all entity blocks.

    Columns ``I..N`` add every sixth column starting at the matching slot of
    the first entity block, so the page shows overall totals per category.
    """
    formulas: dict[str, str] = {}
    for offset in range(layout.columns_per_entity):
        target = get_column_letter(layout.summary_first_column + offset)
        start = get_column_letter(layout.first_entity_column + offset)
        formulas[target] = (
            f"=SUMPRODUCT((MOD(COLUMN({start}{row}:{last_column}{row})-COLUMN({start}{row}),"
            f"{layout.columns_per_entity})=0)*{start}{row}:{last_column}{row})"
        )
    return formulas


def running_balances(group: GroupRecord, entity: str, category: int) -> list[int | float]:
    """Evaluate the running balance of one entity/category without formulas.

    Returns
    -------
    list[int | float]
        Balance on the leftovers row followed by the balance after each
        statement, i.e. the values the generated formulas compute.

    Raises
    ------
    InconsistentStatementError
        Under the same condition as :func:`statement_cells`.
    """
    opening = group.leftovers.entities.get(entity)
    balance: int | float = opening.categories.get(category, 0) if opening is not None else 0
    balances = [balance]

    for statement in group.statements:
        delta = statement.entities.get(entity)
        if delta is not None and category in delta.categories:
            if statement.take_value_from == "in":
                quantity = statement.quantity_in
            elif statement.take_value_from == "out":
                quantity = statement.quantity_out
            else:
                msg = f"Statement {statement.doc_name!r} changes {entity!r} without a quantity column"
                raise InconsistentStatementError(msg)
            balance += (quantity or 0) * delta.operation
        balances.append(balance)

    return balances
