"""Ledger snapshots as JSON and flat statement tables as CSV.

JSON snapshot layout::

    {
      "source": "input.xlsx",
      "entities": [...],
      "groups": {
        "<group>": {
          "leftovers": {"date": "01.01.2024", "entities": {"E1": {"operation": 1, "categories": {"0": 10}}}},
          "statements": [{...}, ...]
        }
      }
    }

Category keys are stored as strings (JSON object keys) and restored to ints
on load.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import pandas as pd

from ledger_report.config import get_output_paths, setup_logging
from ledger_report.extractor.classifier import CATEGORY_COUNT, compute_list_array
from ledger_report.transformer.ledger_builder import EntityDelta, GroupRecord, LedgerData, Leftovers, Statement

logger = setup_logging(__name__)

STATEMENT_COLUMNS = [
    "group",
    "date",
    "doc_name",
    "doc_number",
    "doc_date",
    "from_entity",
    "to_entity",
    "price",
    "quantity_in",
    "quantity_out",
    "take_value_from",
    "entity",
    "operation",
    *[f"category_{index + 1}" for index in range(CATEGORY_COUNT)],
]


def ledger_to_dataframe(data: LedgerData) -> pd.DataFrame:
    """Flatten statements into one row per statement and affected entity.

    No-op statements keep a single row with empty entity columns so that the
    table still mirrors the input movements.

    Returns
    -------
    pd.DataFrame
        Columns as in ``STATEMENT_COLUMNS``, groups in page order.
    """
    records: list[dict[str, Any]] = []

    for group in compute_list_array(data):
        for statement in data.groups[group].statements:
            base = {
                "group": group,
                "date": statement.date,
                "doc_name": statement.doc_name,
                "doc_number": statement.doc_number,
                "doc_date": statement.doc_date,
                "from_entity": statement.from_entity,
                "to_entity": statement.to_entity,
                "price": statement.price,
                "quantity_in": statement.quantity_in,
                "quantity_out": statement.quantity_out,
                "take_value_from": statement.take_value_from,
            }
            if statement.is_noop:
                records.append(base)
                continue
            for entity, delta in statement.entities.items():
                record = {**base, "entity": entity, "operation": delta.operation}
                for category, quantity in delta.categories.items():
                    record[f"category_{category + 1}"] = quantity
                records.append(record)

    return pd.DataFrame.from_records(records, columns=STATEMENT_COLUMNS)


def write_ledger_to_csv(data: LedgerData, output_path: Path | None = None) -> Path:
    """Write the flat statement table to CSV (UTF-8 with BOM for Excel)."""
    if output_path is None:
        output_path = get_output_paths()["processed"] / "ledger_statements.csv"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = ledger_to_dataframe(data)
    df.to_csv(output_path, index=False, encoding="utf-8-sig")

    logger.info("Saved statements CSV: %s (%d rows)", output_path, len(df))
    return output_path


def _delta_to_dict(delta: EntityDelta) -> dict[str, Any]:
    return {"operation": delta.operation, "categories": {str(k): v for k, v in delta.categories.items()}}


def _delta_from_dict(payload: dict[str, Any]) -> EntityDelta:
    return EntityDelta(
        operation=payload["operation"],
        categories={int(k): v for k, v in payload.get("categories", {}).items()},
    )


def ledger_to_dict(data: LedgerData) -> dict[str, Any]:
    """Serialize a ledger to JSON-compatible primitives."""
    groups: dict[str, Any] = {}
    for name, record in data.groups.items():
        statements = []
        for statement in record.statements:
            payload = asdict(statement)
            payload["entities"] = {entity: _delta_to_dict(delta) for entity, delta in statement.entities.items()}
            statements.append(payload)
        groups[name] = {
            "leftovers": {
                "date": record.leftovers.date,
                "entities": {entity: _delta_to_dict(delta) for entity, delta in record.leftovers.entities.items()},
            },
            "statements": statements,
        }

    entities = sorted(name for name in data.entities if name is not None)
    return {"entities": entities, "groups": groups}


def ledger_from_dict(payload: dict[str, Any]) -> LedgerData:
    """Rebuild a ledger serialized by :func:`ledger_to_dict`."""
    data = LedgerData(entities=set(payload.get("entities", [])))
    for name, group in payload.get("groups", {}).items():
        leftovers_payload = group.get("leftovers", {})
        leftovers = Leftovers(
            date=leftovers_payload.get("date"),
            entities={
                entity: _delta_from_dict(delta) for entity, delta in leftovers_payload.get("entities", {}).items()
            },
        )
        statements = []
        for item in group.get("statements", []):
            fields = {key: value for key, value in item.items() if key != "entities"}
            entities = {entity: _delta_from_dict(delta) for entity, delta in item.get("entities", {}).items()}
            statements.append(Statement(**fields, entities=entities))
        data.groups[name] = GroupRecord(leftovers=leftovers, statements=statements)
    return data


def save_ledger_json(data: LedgerData, output_path: Path | None = None, source: str | None = None) -> Path:
    """Save a ledger snapshot for re-rendering without the input workbook.

    Parameters
    ----------
    data
        Ledger to persist.
    output_path
        Target path; defaults to ``DATA_DIR/processed/ledger.json``.
    source
        Optional input file name stored as metadata.

    Returns
    -------
    Path
        Location of the written JSON file.
    """
    if output_path is None:
        output_path = get_output_paths()["processed"] / "ledger.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output = {"source": source, **ledger_to_dict(data)}
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(output, f, indent=2, ensure_ascii=False, default=str)

    logger.info("Saved ledger JSON: %s", output_path)
    return output_path


def load_ledger_json(filepath: Path) -> LedgerData:
    """Load a ledger snapshot written by :func:`save_ledger_json`.

    Raises
    ------
    FileNotFoundError
        If ``filepath`` does not exist.
    """
    if not filepath.exists():
        msg = f"Ledger snapshot not found: {filepath}"
        raise FileNotFoundError(msg)

    with filepath.open(encoding="utf-8") as f:
        payload = json.load(f)

    data = ledger_from_dict(payload)
    logger.info("Loaded ledger JSON: %s (%d groups)", filepath, len(data.groups))
    return data
