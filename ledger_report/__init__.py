"""ledger-report: running-balance reports for inventory-transfer ledgers.

The package reads a ledger worksheet of transfers between entities, groups the
rows into pages, carries opening balances forward, and writes a report
workbook with running-balance formulas per entity and category.

Architecture
------------
* ``extractor``: openpyxl input reader, category codes, entity filter, and
  caliber-aware ordering.
* ``transformer``: ledger building (leftovers + statements), running-balance
  formulas, and sheet naming.
* ``sheets``: output page, contents, and appendix worksheet builders.
* ``writer``: report workbook assembly plus JSON/CSV ledger exports.

Configuration
-------------
Layout, sheet names, and classifier tables live in ``config/config.json``.
Paths default to the ``data/`` and ``logs/`` trees but respect ``DATA_DIR``,
``LOGS_DIR``, ``TEMP_DIR``, and ``LEDGER_REPORT_CONFIG`` overrides.

Examples
--------
Build a report from a ledger workbook:

    >>> python -m ledger_report.main_report data/raw/ledger.xlsx

Also export the ledger snapshot and statement table:

    >>> python -m ledger_report.main_report data/raw/ledger.xlsx --json --csv
"""

from ledger_report.transformer.ledger_builder import build_ledger
from ledger_report.transformer.naming import sanitize_name

__version__ = "0.1.0"
__all__ = ["__version__", "build_ledger", "sanitize_name"]

# Public helper for introspection tools.
def get_version() -> str:
    """Return the current package version string.

    Returns
    -------
    str
        Semantic version identifier (e.g., ``"0.1.0"``).
    """
    return __version__


__all__.append("get_version")
