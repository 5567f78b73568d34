"""Row builders shared by the test modules."""

from __future__ import annotations

from datetime import datetime
from typing import Any

OPENING = "Перенесено з книги №10"
HEADER = (
    None,
    "Дата",
    "Найменування",
    "Документ",
    "Номер",
    "Дата документа",
    "Від кого",
    "Кому",
    "Ціна",
    "Категорія",
    "Кількість",
)


def make_row(
    group: str,
    doc_name: str,
    from_entity: str | None,
    to_entity: str | None,
    category: Any,
    quantity: Any,
    date: Any = datetime(2024, 1, 10),
    doc_number: Any = "15",
    doc_date: Any = datetime(2024, 1, 9),
    price: Any = 100,
) -> tuple[Any, ...]:
    """Return a full sheet row (column A empty) in input-column order."""
    return (None, date, group, doc_name, doc_number, doc_date, from_entity, to_entity, price, category, quantity)
