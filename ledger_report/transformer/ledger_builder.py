"""Balance ledger builder - raw sheet rows to grouped statements.

The builder folds over the rows of an inventory-transfer worksheet once and
returns a :class:`LedgerData` accumulator:

* every ``from``/``to`` name seen goes into ``entities``;
* rows whose document name is the opening-balance marker fill the group's
  :class:`Leftovers` snapshot;
* every other row becomes a :class:`Statement` with signed per-entity
  category deltas, in input order.

Rows that are not row-shaped (blank separator rows, truncated rows, rows
without a group or with a non-numeric quantity) are skipped without error.

Input columns (1-indexed, column 1 unused):
    2 date | 3 group | 4 doc name | 5 doc number | 6 doc date |
    7 from | 8 to | 9 price | 10 category code | 11 quantity
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from ledger_report.config import get_config, get_input_config, get_opening_balance_marker
from ledger_report.extractor.classifier import category_index_of, is_tracked_entity
from ledger_report.utils.parsing import cell_to_text, format_date, parse_quantity

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

__all__ = [
    "EntityDelta",
    "GroupRecord",
    "LedgerData",
    "Leftovers",
    "MalformedRowError",
    "RawRow",
    "Statement",
    "build_ledger",
]

TakeValueFrom = Literal["in", "out"]

INPUT_COLUMNS = (
    "date",
    "group_name",
    "doc_name",
    "doc_number",
    "doc_date",
    "from_entity",
    "to_entity",
    "price",
    "category_code",
    "quantity",
)
DEFAULT_INPUT_LAYOUT: dict[str, Any] = {"header_rows": 1, "first_column": 2, "columns": list(INPUT_COLUMNS)}


class MalformedRowError(ValueError):
    """Raised by :meth:`RawRow.from_sheet_row` for rows that are not row-shaped."""


# =============================================================================
# Data Model
# =============================================================================


@dataclass
class RawRow:
    """One validated input row (sheet columns 2-11 by default)."""

    date: Any
    group_name: str
    doc_name: str | None
    doc_number: str | None
    doc_date: Any
    from_entity: str | None
    to_entity: str | None
    price: Any
    category_code: Any
    quantity: int | float

    @classmethod
    def from_sheet_row(cls, values: Any, input_layout: dict[str, Any] | None = None) -> RawRow:
        """Validate a full sheet row (column 1 included) into a ``RawRow``.

        Parameters
        ----------
        values
            Cell values of one sheet row, column A first.
        input_layout
            The ``input`` config section: 1-based ``first_column`` and the
            ``columns`` read from there on. Defaults to columns B..K in
            ``INPUT_COLUMNS`` order.

        Raises
        ------
        MalformedRowError
            If the value is not a row, or the row is too short, blank, lacks a
            group name, or carries a non-numeric quantity.
        """
        if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
            msg = "Row is not a sequence of cell values"
            raise MalformedRowError(msg)

        if input_layout is None:
            input_layout = DEFAULT_INPUT_LAYOUT
        columns = input_layout["columns"]
        start = input_layout["first_column"] - 1

        cells = list(values[start : start + len(columns)])
        if len(cells) != len(columns):
            msg = f"Row has {len(cells)} data columns, expected {len(columns)}"
            raise MalformedRowError(msg)
        if all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in cells):
            msg = "Row is blank"
            raise MalformedRowError(msg)

        fields = dict(zip(columns, cells, strict=True))

        group_name = cell_to_text(fields["group_name"])
        if group_name is None or not group_name.strip():
            msg = "Row has no group name"
            raise MalformedRowError(msg)

        quantity = fields["quantity"]
        parsed_quantity = parse_quantity(quantity)
        if parsed_quantity is None:
            msg = f"Quantity is not a number: {quantity!r}"
            raise MalformedRowError(msg)

        return cls(
            date=fields["date"],
            group_name=group_name,
            doc_name=cell_to_text(fields["doc_name"]),
            doc_number=cell_to_text(fields["doc_number"]),
            doc_date=fields["doc_date"],
            from_entity=cell_to_text(fields["from_entity"]),
            to_entity=cell_to_text(fields["to_entity"]),
            price=fields["price"],
            category_code=fields["category_code"],
            quantity=parsed_quantity,
        )


@dataclass
class EntityDelta:
    """Signed contribution of one transaction (or opening row) to one entity."""

    operation: Literal[1, -1]
    categories: dict[int, int | float] = field(default_factory=dict)


@dataclass
class Statement:
    """One movement transaction of a group.

    ``quantity_in`` or ``quantity_out`` is set according to
    ``take_value_from``. A row whose entities are both untracked is kept as a
    no-op statement: no quantities, no ``take_value_from``, empty ``entities``.
    """

    date: str
    doc_name: str | None = None
    doc_number: str | None = None
    doc_date: str = ""
    from_entity: str | None = None
    to_entity: str | None = None
    price: Any = None
    quantity_in: int | float | None = None
    quantity_out: int | float | None = None
    take_value_from: TakeValueFrom | None = None
    entities: dict[str, EntityDelta] = field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        """Return True when the statement does not move any balance."""
        return not self.entities


@dataclass
class Leftovers:
    """Opening balances carried into a group from the previous ledger book."""

    date: str | None = None
    entities: dict[str, EntityDelta] = field(default_factory=dict)


@dataclass
class GroupRecord:
    """Opening snapshot plus ordered statements of one group (one page)."""

    leftovers: Leftovers = field(default_factory=Leftovers)
    statements: list[Statement] = field(default_factory=list)


@dataclass
class LedgerData:
    """Root accumulator produced by :func:`build_ledger`.

    Attributes
    ----------
    entities : set[str | None]
        Every ``from``/``to`` value seen, untracked ones included. Use
        :func:`~ledger_report.extractor.classifier.compute_entities_array`
        for the filtered, ordered column view.
    groups : dict[str, GroupRecord]
        Records keyed by group name, in first-seen order. Use
        :func:`~ledger_report.extractor.classifier.compute_list_array` for
        page order.
    """

    entities: set[str | None] = field(default_factory=set)
    groups: dict[str, GroupRecord] = field(default_factory=dict)

    @property
    def statement_count(self) -> int:
        """Total number of statements over all groups."""
        return sum(len(group.statements) for group in self.groups.values())


# =============================================================================
# Builder
# =============================================================================


def _is_known(data: LedgerData, name: str | None, config: dict[str, Any]) -> bool:
    """Check ``name`` against the live tracked-entity set.

    The set grows while rows are folded in; both names of the current row are
    registered before this check runs.
    """
    return name in data.entities and is_tracked_entity(name, config)


def _apply_opening_row(record: GroupRecord, row: RawRow, category: int | None, date_format: str) -> None:
    """Merge an opening-balance row into the group's leftovers."""
    leftovers = record.leftovers
    if leftovers.date is None:
        leftovers.date = format_date(row.date, date_format)

    entity = leftovers.entities.get(row.to_entity or "")
    if entity is None:
        entity = EntityDelta(operation=1)
        leftovers.entities[row.to_entity or ""] = entity

    if category is not None:
        entity.categories[category] = row.quantity


def _movement_statement(
    data: LedgerData,
    row: RawRow,
    category: int | None,
    config: dict[str, Any],
    date_format: str,
) -> Statement:
    """Classify a movement row as transfer, outflow, inflow, or no-op."""
    known_from = _is_known(data, row.from_entity, config)
    known_to = _is_known(data, row.to_entity, config)
    categories = {category: row.quantity} if category is not None else {}

    statement = Statement(
        date=format_date(row.date, date_format),
        doc_name=row.doc_name,
        doc_number=row.doc_number,
        doc_date=format_date(row.doc_date, date_format),
        from_entity=row.from_entity,
        to_entity=row.to_entity,
        price=row.price,
    )

    if known_from and known_to:
        statement.quantity_in = row.quantity
        statement.take_value_from = "in"
        statement.entities = {
            row.from_entity: EntityDelta(operation=-1, categories=dict(categories)),
            row.to_entity: EntityDelta(operation=1, categories=dict(categories)),
        }
    elif known_from:
        statement.quantity_out = row.quantity
        statement.take_value_from = "out"
        statement.entities = {row.from_entity: EntityDelta(operation=-1, categories=categories)}
    elif known_to:
        statement.quantity_in = row.quantity
        statement.take_value_from = "in"
        statement.entities = {row.to_entity: EntityDelta(operation=1, categories=categories)}
    else:
        logger.debug("No tracked entity in row %r -> %r; keeping no-op statement", row.from_entity, row.to_entity)

    return statement


def build_ledger(rows: Iterable[Any], config: dict[str, Any] | None = None) -> LedgerData:
    """Fold worksheet rows into grouped leftovers and statements.

    Parameters
    ----------
    rows
        Sheet rows as value sequences, header rows first. Columns are read
        positionally as laid out in the ``input`` config section.
    config
        Optional configuration dictionary. When ``None``, configuration is
        loaded from disk once for the whole pass.

    Returns
    -------
    LedgerData
        Accumulated entities and group records. No row raises; rows that are
        not row-shaped are skipped.

    Raises
    ------
    ValueError
        If the ``input`` section does not name every required column.
    """
    if config is None:
        config = get_config()

    input_layout = get_input_config(config)
    missing = [name for name in INPUT_COLUMNS if name not in input_layout["columns"]]
    if missing:
        msg = f"Input columns missing from config: {missing}"
        raise ValueError(msg)

    header_rows = input_layout.get("header_rows", 1)
    marker = get_opening_balance_marker(config)
    date_format = config.get("formatting", {}).get("date_format", "%d.%m.%Y")

    data = LedgerData()
    skipped = 0

    for index, values in enumerate(rows, start=1):
        if index <= header_rows:
            continue

        try:
            row = RawRow.from_sheet_row(values, input_layout)
        except MalformedRowError as e:
            logger.debug("Skipping row %d: %s", index, e)
            skipped += 1
            continue

        data.entities.add(row.from_entity)
        data.entities.add(row.to_entity)

        category = category_index_of(row.category_code, config)
        if category is None:
            logger.warning("Row %d: unmapped category code %r", index, row.category_code)

        record = data.groups.get(row.group_name)
        if record is None:
            record = GroupRecord()
            data.groups[row.group_name] = record

        if row.doc_name == marker:
            _apply_opening_row(record, row, category, date_format)
        else:
            record.statements.append(_movement_statement(data, row, category, config, date_format))

    logger.debug(
        "Built ledger: %d groups, %d statements, %d rows skipped",
        len(data.groups),
        data.statement_count,
        skipped,
    )
    return data
