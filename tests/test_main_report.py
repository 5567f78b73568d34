"""Tests for the report orchestrator and its CLI."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from openpyxl import Workbook, load_workbook

from ledger_report.main_report import main, print_ledger_summary, process_ledger
from tests.helpers import HEADER, make_row

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

    from ledger_report.transformer.ledger_builder import LedgerData


def _save_rows(path: Path, rows: list[tuple[Any, ...]]) -> Path:
    workbook = Workbook()
    for row in rows:
        workbook.active.append(list(row))
    workbook.save(path)
    return path


class TestProcessLedger:
    """Tests for process_ledger."""

    def test_writes_report(self, tmp_path: Path, sample_rows: list[tuple[Any, ...]]) -> None:
        """A valid input produces a report at the requested path."""
        source = _save_rows(tmp_path / "book.xlsx", sample_rows)
        target = tmp_path / "report.xlsx"

        result = process_ledger(source, target, verbose=False)

        assert result == target
        assert load_workbook(target).sheetnames[:2] == ["Зміст", "Додаток 1"]

    def test_missing_input(self, tmp_path: Path) -> None:
        """A missing input file is reported, not raised."""
        assert process_ledger(tmp_path / "absent.xlsx", tmp_path / "report.xlsx", verbose=False) is None

    def test_header_only(self, tmp_path: Path) -> None:
        """An input without data rows produces no report."""
        source = _save_rows(tmp_path / "empty.xlsx", [HEADER])
        target = tmp_path / "report.xlsx"

        assert process_ledger(source, target, verbose=False) is None
        assert not target.exists()

    def test_inconsistent_input(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A statement that cannot be rendered aborts without writing."""
        source = _save_rows(tmp_path / "book.xlsx", [HEADER, make_row("X", "Накладна", "E1", "E2", "I", 1)])
        target = tmp_path / "report.xlsx"

        def _drop_quantity_column(statement: Any, layout: Any) -> None:
            return None

        monkeypatch.setattr("ledger_report.transformer.balance_formulas._source_column", _drop_quantity_column)

        assert process_ledger(source, target, verbose=False) is None
        assert not target.exists()


def test_print_summary(sample_ledger: LedgerData, capsys: pytest.CaptureFixture[str]) -> None:
    """The summary lists groups, no-op counts, and entities."""
    print_ledger_summary(sample_ledger)

    out = capsys.readouterr().out
    assert "Groups: 2" in out
    assert "Statements: 5" in out
    assert "(1 without tracked entity)" in out
    assert "Entities: E1, E2, E3" in out


def test_cli(tmp_path: Path, sample_rows: list[tuple[Any, ...]], monkeypatch: pytest.MonkeyPatch) -> None:
    """The CLI exits 0 after writing the report and 1 on a missing input."""
    source = _save_rows(tmp_path / "book.xlsx", sample_rows)
    target = tmp_path / "out.xlsx"

    monkeypatch.setattr(sys, "argv", ["ledger-report", str(source), "-o", str(target), "--quiet"])
    assert main() == 0
    assert target.exists()

    monkeypatch.setattr(sys, "argv", ["ledger-report", str(tmp_path / "absent.xlsx"), "--quiet"])
    assert main() == 1
