"""Pytest configuration for ledger_report tests.

This module provides:
- The project configuration as a session fixture
- Sample sheet rows built with tests.helpers.make_row
- A small sample ledger used by workbook tests
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from ledger_report.config import get_config
from ledger_report.transformer.ledger_builder import LedgerData, build_ledger
from tests.helpers import HEADER, OPENING, make_row

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


@pytest.fixture(scope="session")
def config() -> dict[str, Any]:
    """Project configuration loaded once per session."""
    return get_config()


@pytest.fixture
def sample_rows() -> list[tuple[Any, ...]]:
    """Two groups, three entities, opening balances and movements."""
    return [
        HEADER,
        make_row("76 мм", OPENING, None, "E1", "I", 10, date=datetime(2024, 1, 1)),
        make_row("76 мм", OPENING, None, "E2", "II", 4, date=datetime(2024, 1, 2)),
        make_row("76 мм", "Накладна", "E1", "E2", "I", 3),
        make_row("76 мм", "Акт списання", "E2", "-", "ІІ", 1),
        make_row("76 мм", "Накладна", "АТ Завод", "E1", 1, 5),
        make_row("45 мм", "Накладна", "E3", "", "V", 2),
        (None,) * 11,
        make_row("45 мм", "Накладна", "-", "a2000", "III", 7),
    ]


@pytest.fixture
def sample_ledger(sample_rows: list[tuple[Any, ...]], config: dict[str, Any]) -> LedgerData:
    """Ledger built from ``sample_rows``."""
    return build_ledger(sample_rows, config)
