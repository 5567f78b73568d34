"""Configuration management for ledger-report.

This module centralizes file-system paths, environment variables, and the
project configuration loader used by the ledger building and report pipeline.

Configuration file
------------------
* ``config/config.json``: input column layout, classifier tables (category
  codes, opening-balance marker, entity filters), formatting, sheet names, and
  the cell layout of the output, contents, and appendix sheets.

Environment variables
---------------------
``DATA_DIR``, ``LOGS_DIR``, and ``TEMP_DIR`` override default directories;
``LEDGER_REPORT_CONFIG`` points at an alternative ``config.json``. Directories
are created eagerly on import so downstream callers can rely on their existence.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_PATH = Path(os.getenv("LEDGER_REPORT_CONFIG", CONFIG_DIR / "config.json"))
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))
TEMP_DIR = Path(os.getenv("TEMP_DIR", PROJECT_ROOT / "temp"))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)
TEMP_DIR.mkdir(parents=True, exist_ok=True)


def get_config() -> dict[str, Any]:
    """Load the primary project configuration.

    Returns
    -------
    dict[str, Any]
        Parsed contents of ``config/config.json`` (or ``LEDGER_REPORT_CONFIG``).

    Raises
    ------
    FileNotFoundError
        If the configuration file is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    if not CONFIG_PATH.exists():
        msg = f"Configuration file not found: {CONFIG_PATH}"
        raise FileNotFoundError(msg)

    with CONFIG_PATH.open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def get_output_paths() -> dict[str, Path]:
    """Return default locations for generated reports and exports.

    Returns
    -------
    dict[str, Path]
        Mapping with keys ``output`` (report workbooks) and ``processed``
        (JSON and CSV ledger exports).
    """
    return {
        "output": DATA_DIR / "output",
        "processed": DATA_DIR / "processed",
    }


def setup_logging(name: str = "ledger_report") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level dated file
        handler under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_run.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# Section Accessors
# =============================================================================


def _get_section(section: str, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a top-level config section, raising if it is absent."""
    if config is None:
        config = get_config()
    value = config.get(section)
    if value is None:
        msg = f"Section '{section}' not found in {CONFIG_PATH.name}"
        raise ValueError(msg)
    return cast("dict[str, Any]", value)


def get_input_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the input sheet column layout."""
    return _get_section("input", config)


def get_classifier_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return classifier tables (category map, marker, entity filters)."""
    return _get_section("classifier", config)


def get_formatting_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return date and number formats used in the report."""
    return _get_section("formatting", config)


def get_sheets_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return fixed sheet names and link labels."""
    return _get_section("sheets", config)


def get_layout_config(sheet: str, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the cell layout for one report sheet.

    Parameters
    ----------
    sheet : str
        One of ``"output_page"``, ``"contents"``, or ``"appendix"``.
    config : dict[str, Any], optional
        Preloaded configuration; loaded from disk when ``None``.

    Returns
    -------
    dict[str, Any]
        Layout mapping for the requested sheet.

    Raises
    ------
    ValueError
        If the layout for ``sheet`` is not configured.
    """
    layouts = _get_section("layout", config)
    layout = layouts.get(sheet)
    if layout is None:
        msg = f"Layout '{sheet}' not found in {CONFIG_PATH.name}"
        raise ValueError(msg)
    return cast("dict[str, Any]", layout)


def get_opening_balance_marker(config: dict[str, Any] | None = None) -> str:
    """Return the document name that marks opening-balance rows."""
    return cast("str", get_classifier_config(config)["opening_balance_marker"])
