"""Recommended category vocabularies for each transaction kind.

Categories are open strings: these lists drive pickers and defaults, but
any displayable value (e.g. from an imported file) is accepted as-is.
"""

from typing import List

from models.transaction import INCOME, EXPENSE

INCOME_CATEGORIES = ["Зарплата", "Премия", "Подработка", "Проценты", "Другое"]

EXPENSE_CATEGORIES = [
    "Рестораны",
    "Супермаркеты",
    "Транспорт",
    "Одежда",
    "Развлечения",
    "Коммунальные услуги",
    "Кредиты",
    "Другое",
]

_CATEGORIES = {
    INCOME: INCOME_CATEGORIES,
    EXPENSE: EXPENSE_CATEGORIES,
}


def get_categories(kind: str) -> List[str]:
    """Get the recommended categories for a kind."""
    if kind not in _CATEGORIES:
        raise ValueError(f"Unknown transaction kind: {kind}")
    return list(_CATEGORIES[kind])


def get_default_category(kind: str) -> str:
    """Get the category preselected for new records of a kind."""
    return get_categories(kind)[0]


def get_all_categories() -> List[str]:
    """Get the union of both vocabularies, de-duplicated in order."""
    return list(dict.fromkeys(INCOME_CATEGORIES + EXPENSE_CATEGORIES))


def is_known_category(kind: str, category: str) -> bool:
    """Check whether a category is in the recommended set for a kind."""
    return category in _CATEGORIES.get(kind, ())
