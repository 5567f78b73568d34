#!/usr/bin/env python3
"""Report orchestrator - read a ledger workbook, build balances, write the report.

This module orchestrates the complete workflow:
1. Load the input worksheet (openpyxl)
2. Build grouped leftovers and statements
3. Render contents, appendix, and one page per group
4. Optionally export the ledger as JSON and CSV
5. Print a short summary

Usage (from project root):
    python -m ledger_report.main_report data/raw/ledger.xlsx
    python -m ledger_report.main_report data/raw/ledger.xlsx -o report.xlsx --sheet "Книга 11"
    python -m ledger_report.main_report data/raw/ledger.xlsx --json --csv --quiet

CLI Flags:
    input               Input .xlsx workbook (required)
    --output, -o        Report path (default: DATA_DIR/output/<input>_report.xlsx)
    --sheet, -s         Worksheet to read (default: first sheet)
    --json              Also save the ledger snapshot as JSON
    --csv               Also save the flat statement table as CSV
    --quiet             Suppress summary output
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ledger_report.config import get_config, get_output_paths, setup_logging
from ledger_report.extractor.classifier import compute_entities_array, compute_list_array
from ledger_report.extractor.workbook_reader import read_ledger
from ledger_report.transformer.balance_formulas import InconsistentStatementError
from ledger_report.transformer.ledger_builder import LedgerData
from ledger_report.writer.ledger_export import save_ledger_json, write_ledger_to_csv
from ledger_report.writer.workbook_writer import generate_report

logger = setup_logging(__name__)


def print_ledger_summary(data: LedgerData) -> None:
    """Print groups with their statement counts and the tracked entities."""
    entities = compute_entities_array(data)
    print()
    print("=" * 60)
    print(f"Groups: {len(data.groups)}   Statements: {data.statement_count}   Entities: {len(entities)}")
    print("=" * 60)
    for name in compute_list_array(data):
        record = data.groups[name]
        noop = sum(1 for statement in record.statements if statement.is_noop)
        suffix = f" ({noop} without tracked entity)" if noop else ""
        print(f"  {name:<40} {len(record.statements):>5}{suffix}")
    print("-" * 60)
    print("Entities: " + ", ".join(entities))
    print()


def process_ledger(
    input_path: Path,
    output_path: Path | None = None,
    sheet_name: str | None = None,
    save_json: bool = False,
    save_csv: bool = False,
    verbose: bool = True,
) -> Path | None:
    """Run the end-to-end report workflow for one input workbook.

    Parameters
    ----------
    input_path : Path
        Input ledger workbook.
    output_path : Path, optional
        Report location; derived from the input name when ``None``.
    sheet_name : str, optional
        Worksheet to read; first sheet when ``None``.
    save_json : bool, optional
        Persist the ledger snapshot next to other processed data.
    save_csv : bool, optional
        Persist the flat statement table.
    verbose : bool, optional
        Print a summary when ``True``.

    Returns
    -------
    Path | None
        Report path on success; ``None`` when the report could not be built.
    """
    logger.info("Processing ledger %s", input_path)
    config = get_config()

    try:
        data = read_ledger(input_path, sheet_name, config)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Cannot read input: %s", e)
        return None

    if not data.groups:
        logger.error("No ledger rows found in %s", input_path)
        return None

    if output_path is None:
        output_path = get_output_paths()["output"] / f"{input_path.stem}_report.xlsx"

    try:
        report_path = generate_report(data, output_path, config)
    except InconsistentStatementError as e:
        logger.error("Report generation aborted: %s", e)
        return None

    processed = get_output_paths()["processed"]
    if save_json:
        save_ledger_json(data, processed / f"{input_path.stem}_ledger.json", source=input_path.name)
    if save_csv:
        write_ledger_to_csv(data, processed / f"{input_path.stem}_statements.csv")

    if verbose:
        print_ledger_summary(data)

    return report_path


# =============================================================================
# CLI
# =============================================================================


def main() -> int:
    """Parse CLI flags and generate the report.

    Returns
    -------
    int
        ``0`` when the report was written; ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(
        description="Build a running-balance report workbook from an inventory ledger.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ledger_report.main_report ledger.xlsx
  python -m ledger_report.main_report ledger.xlsx -o report.xlsx
  python -m ledger_report.main_report ledger.xlsx --sheet "Книга 11" --json --csv
        """,
    )
    parser.add_argument("input", type=Path, help="Input .xlsx ledger workbook")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Output report path")
    parser.add_argument("--sheet", "-s", default=None, help="Worksheet to read (default: first)")
    parser.add_argument("--json", action="store_true", help="Save ledger snapshot as JSON")
    parser.add_argument("--csv", action="store_true", help="Save statement table as CSV")
    parser.add_argument("--quiet", action="store_true", help="Don't print summary")

    args = parser.parse_args()

    report_path = process_ledger(
        input_path=args.input,
        output_path=args.output,
        sheet_name=args.sheet,
        save_json=args.json,
        save_csv=args.csv,
        verbose=not args.quiet,
    )
    if report_path is None:
        return 1

    logger.info("Done: %s", report_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
