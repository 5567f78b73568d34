"""Extractor module for reading and classifying ledger input.

Submodules
----------
classifier
    Category code lookup, tracked-entity filter, and caliber-aware ordering.
workbook_reader
    openpyxl loader for the input worksheet; feeds the ledger builder.
"""

from ledger_report.extractor.classifier import (
    CATEGORY_COUNT,
    category_index_of,
    compare_text,
    compute_entities_array,
    compute_list_array,
    extract_caliber,
    is_tracked_entity,
    sort_by_caliber,
    sort_names,
)

__all__ = [
    "CATEGORY_COUNT",
    "category_index_of",
    "compare_text",
    "compute_entities_array",
    "compute_list_array",
    "extract_caliber",
    "is_tracked_entity",
    "sort_by_caliber",
    "sort_names",
]
