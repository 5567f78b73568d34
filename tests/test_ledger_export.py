"""Tests for ledger exports (pandas table, CSV, JSON snapshot)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd
import pytest

from ledger_report.writer.ledger_export import (
    STATEMENT_COLUMNS,
    ledger_to_dataframe,
    load_ledger_json,
    save_ledger_json,
    write_ledger_to_csv,
)

if TYPE_CHECKING:
    from pathlib import Path

    from ledger_report.transformer.ledger_builder import LedgerData


class TestLedgerToDataFrame:
    """Tests for ledger_to_dataframe."""

    def test_one_row_per_affected_entity(self, sample_ledger: LedgerData) -> None:
        """Transfers split into two rows; no-op statements keep one."""
        df = ledger_to_dataframe(sample_ledger)

        assert list(df.columns) == STATEMENT_COLUMNS
        assert len(df) == 6
        assert list(df["group"]) == ["45 мм", "45 мм", "76 мм", "76 мм", "76 мм", "76 мм"]

    def test_outflow_row(self, sample_ledger: LedgerData) -> None:
        """Outflow rows carry the negative operation and the category quantity."""
        df = ledger_to_dataframe(sample_ledger)
        first = df.iloc[0]

        assert first["entity"] == "E3"
        assert first["operation"] == -1
        assert first["quantity_out"] == 2
        assert first["category_5"] == 2
        assert pd.isna(first["category_1"])

    def test_noop_row(self, sample_ledger: LedgerData) -> None:
        """No-op statements have no entity."""
        df = ledger_to_dataframe(sample_ledger)
        noop = df.iloc[1]

        assert noop["to_entity"] == "a2000"
        assert pd.isna(noop["entity"])
        assert pd.isna(noop["take_value_from"])

    def test_transfer_rows(self, sample_ledger: LedgerData) -> None:
        """Both sides of a transfer share the statement fields."""
        df = ledger_to_dataframe(sample_ledger)
        transfer = df[(df["group"] == "76 мм") & (df["doc_name"] == "Накладна") & (df["from_entity"] == "E1")]

        assert list(transfer["entity"]) == ["E1", "E2"]
        assert list(transfer["operation"]) == [-1, 1]
        assert set(transfer["quantity_in"]) == {3}


class TestFileExports:
    """Tests for CSV and JSON files."""

    def test_csv_written(self, tmp_path: Path, sample_ledger: LedgerData) -> None:
        """CSV reloads with the same columns and row count."""
        path = write_ledger_to_csv(sample_ledger, tmp_path / "exports" / "statements.csv")

        df = pd.read_csv(path, encoding="utf-8-sig")
        assert list(df.columns) == STATEMENT_COLUMNS
        assert len(df) == 6

    def test_json_snapshot(self, tmp_path: Path, sample_ledger: LedgerData) -> None:
        """A saved snapshot loads back into an equal ledger."""
        path = save_ledger_json(sample_ledger, tmp_path / "ledger.json", source="book11.xlsx")

        loaded = load_ledger_json(path)

        assert loaded.groups == sample_ledger.groups
        assert loaded.entities == {name for name in sample_ledger.entities if name is not None}
        assert loaded.groups["76 мм"].leftovers.entities["E2"].categories == {1: 4}

    def test_json_missing(self, tmp_path: Path) -> None:
        """Loading a missing snapshot raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="not found"):
            load_ledger_json(tmp_path / "absent.json")
