"""Tests for config/config.json integrity.

Tests cover:
1. JSON syntax and required sections
2. Classifier tables (category codes, entity filters)
3. Sheet layouts used by the report builders
4. Section accessor errors
"""

from __future__ import annotations

from typing import Any

import pytest

from ledger_report.config import (
    CONFIG_PATH,
    get_classifier_config,
    get_config,
    get_input_config,
    get_layout_config,
    get_opening_balance_marker,
    get_sheets_config,
)
from ledger_report.extractor.classifier import CATEGORY_COUNT
from ledger_report.transformer.ledger_builder import INPUT_COLUMNS
from ledger_report.transformer.naming import MAX_SHEET_NAME_LENGTH, sanitize_name

# =============================================================================
# JSON Syntax and Sections
# =============================================================================


class TestJsonSyntax:
    """Tests that the config file loads and has every section."""

    def test_config_json_loads(self) -> None:
        """config.json should be valid JSON and loadable."""
        assert CONFIG_PATH.exists()
        config = get_config()
        assert isinstance(config, dict)

    @pytest.mark.parametrize("section", ["input", "classifier", "formatting", "sheets", "layout"])
    def test_sections_present(self, config: dict[str, Any], section: str) -> None:
        """Each top-level section is a non-empty mapping."""
        assert isinstance(config[section], dict)
        assert config[section]


# =============================================================================
# Classifier
# =============================================================================


class TestInputConfig:
    """Tests for the input column layout."""

    def test_every_column_named_once(self, config: dict[str, Any]) -> None:
        """The input section names each ledger column exactly once."""
        columns = get_input_config(config)["columns"]
        assert sorted(columns) == sorted(INPUT_COLUMNS)

    def test_header_and_start(self, config: dict[str, Any]) -> None:
        """Data starts after one header row, in column B."""
        layout = get_input_config(config)
        assert layout["header_rows"] == 1
        assert layout["first_column"] == 2


class TestClassifierConfig:
    """Tests for the classifier tables."""

    def test_category_map_in_range(self, config: dict[str, Any]) -> None:
        """Every category code maps to a valid slot index."""
        category_map = get_classifier_config(config)["category_map"]
        assert set(category_map.values()) == set(range(CATEGORY_COUNT))

    def test_roman_and_cyrillic_codes(self, config: dict[str, Any]) -> None:
        """Latin and Cyrillic numerals map to the same slot."""
        category_map = get_classifier_config(config)["category_map"]
        assert category_map["II"] == category_map["ІІ"] == category_map["2"]

    def test_labels_match_slots(self, config: dict[str, Any]) -> None:
        """One label per category slot."""
        assert len(get_classifier_config(config)["category_labels"]) == CATEGORY_COUNT

    def test_allowed_entities_are_excluded_prefix(self, config: dict[str, Any]) -> None:
        """Allow-listed names start with an excluded prefix and are lowercase."""
        classifier = get_classifier_config(config)
        for name in classifier["allowed_entities"]:
            assert name == name.lower()
            assert name.startswith(tuple(classifier["excluded_prefixes"]))

    def test_marker(self, config: dict[str, Any]) -> None:
        """The opening-balance marker is a non-empty document name."""
        assert get_opening_balance_marker(config) == "Перенесено з книги №10"


# =============================================================================
# Sheets and Layout
# =============================================================================


class TestLayoutConfig:
    """Tests for sheet names and layouts."""

    def test_fixed_sheet_names_are_valid(self, config: dict[str, Any]) -> None:
        """Fixed sheet names survive sanitizing unchanged."""
        sheets = get_sheets_config(config)
        for key in ("contents_name", "appendix_name", "fallback_name"):
            assert sanitize_name(sheets[key]) == sheets[key]
            assert len(sheets[key]) <= MAX_SHEET_NAME_LENGTH

    def test_output_page_columns(self, config: dict[str, Any]) -> None:
        """Statement columns and headers line up; entity blocks follow the summary block."""
        page = get_layout_config("output_page", config)

        assert len(page["statement_columns"]) == len(page["statement_headers"])
        assert page["columns_per_entity"] == CATEGORY_COUNT + 1
        assert page["summary_first_column"] + page["columns_per_entity"] == page["first_entity_column"]
        assert page["first_statement_row"] == page["leftovers_row"] + 1

    def test_contents_headers(self, config: dict[str, Any]) -> None:
        """One header per column of a contents block."""
        contents = get_layout_config("contents", config)
        assert len(contents["headers"]) == contents["columns_per_group"]

    def test_unknown_layout(self, config: dict[str, Any]) -> None:
        """Requesting an unknown layout raises ValueError."""
        with pytest.raises(ValueError, match="not found"):
            get_layout_config("missing_sheet", config)

    def test_missing_section(self) -> None:
        """A config without a section raises ValueError."""
        with pytest.raises(ValueError, match="Section 'sheets'"):
            get_sheets_config({"input": {}})
