"""Tests for sheet name sanitizing and assignment."""

from __future__ import annotations

import pytest

from ledger_report.transformer.naming import (
    FALLBACK_SHEET_NAME,
    MAX_SHEET_NAME_LENGTH,
    assign_sheet_names,
    quote_sheet_name,
    sanitize_name,
)

NAMES = [
    "76 мм",
    "Книга: 1/2",
    "  'Постріли [ОФ]'  ",
    "?*",
    "''",
    "",
    "   ",
    "Дуже довга назва групи боєприпасів для перевірки",
    "x" * 30 + " y",
    "a" * 30 + "   'b",
    "Б'юро",
]


class TestSanitizeName:
    """Tests for sanitize_name."""

    def test_illegal_characters_removed(self) -> None:
        """Sheet-name metacharacters are dropped."""
        assert sanitize_name("Книга: 1/2") == "Книга 12"
        assert sanitize_name(r"a\b?c*d[e]f") == "abcdef"

    def test_edges_trimmed(self) -> None:
        """Leading and trailing quotes and spaces are trimmed."""
        assert sanitize_name("  'Постріли'  ") == "Постріли"
        assert sanitize_name("Б'юро") == "Б'юро"

    def test_truncated(self) -> None:
        """Names longer than 31 characters are cut."""
        result = sanitize_name("Дуже довга назва групи боєприпасів для перевірки")
        assert len(result) == MAX_SHEET_NAME_LENGTH

    def test_truncation_retrims(self) -> None:
        """A cut that ends in a space is trimmed again."""
        assert sanitize_name("x" * 30 + " y") == "x" * 30

    @pytest.mark.parametrize("raw", ["", "   ", "''", "?*", "[]"])
    def test_fallback(self, raw: str) -> None:
        """Empty results fall back to the page label."""
        assert sanitize_name(raw) == FALLBACK_SHEET_NAME

    def test_custom_fallback(self) -> None:
        """The fallback label can be overridden."""
        assert sanitize_name("", fallback="Page") == "Page"

    @pytest.mark.parametrize("raw", NAMES)
    def test_idempotent(self, raw: str) -> None:
        """Sanitizing twice equals sanitizing once."""
        once = sanitize_name(raw)
        assert sanitize_name(once) == once


class TestAssignSheetNames:
    """Tests for assign_sheet_names."""

    def test_unique_names(self) -> None:
        """Groups with the same sanitized name get numbered suffixes."""
        names = assign_sheet_names(["Книга/1", "Книга1", "книга1"])

        assert names == {"Книга/1": "Книга1", "Книга1": "Книга1 (2)", "книга1": "книга1 (3)"}

    def test_reserved_names_avoided(self) -> None:
        """Group pages never take the contents or appendix name."""
        names = assign_sheet_names(["Зміст", "Інше"], reserved=("Зміст", "Додаток 1"))
        assert names["Зміст"] == "Зміст (2)"
        assert names["Інше"] == "Інше"

    def test_suffix_within_limit(self) -> None:
        """Suffixed names still fit in 31 characters."""
        long_name = "Н" * 40
        names = assign_sheet_names([long_name, long_name + "!"])

        assert names[long_name] == "Н" * 31
        assert names[long_name + "!"] == "Н" * 27 + " (2)"
        assert all(len(name) <= MAX_SHEET_NAME_LENGTH for name in names.values())


def test_quote_sheet_name() -> None:
    """Apostrophes are doubled inside the quotes."""
    assert quote_sheet_name("76 мм") == "'76 мм'"
    assert quote_sheet_name("Б'юро") == "'Б''юро'"
