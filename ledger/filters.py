"""Ad-hoc multi-field filtering of a ledger."""

from typing import Iterable, List, Mapping, Union

from models.criteria import FilterCriteria
from models.transaction import Transaction, format_amount


def _field_text(transaction: Transaction, name: str) -> str:
    if name == "amount":
        return format_amount(transaction.amount)
    return getattr(transaction, name) or ""


def _as_criteria(criteria: Union[FilterCriteria, Mapping, None]) -> FilterCriteria:
    if criteria is None:
        return FilterCriteria()
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.from_dict(criteria)


def matches(transaction: Transaction, criteria: Union[FilterCriteria, Mapping]) -> bool:
    """Check a transaction against every present criterion.

    kind must be equal; every other field must contain the criterion value
    as a case-sensitive substring.
    """
    for name, value in _as_criteria(criteria).active_fields().items():
        if name == "kind":
            if transaction.kind != value:
                return False
        elif value not in _field_text(transaction, name):
            return False
    return True


def apply_filter(
    ledger: Iterable[Transaction],
    criteria: Union[FilterCriteria, Mapping, None],
) -> List[Transaction]:
    """Keep the transactions matching the criteria, preserving order.

    Args:
        ledger: A Ledger or any iterable of transactions.
        criteria: FilterCriteria, a mapping of field values, or None.

    Returns:
        Matching transactions in input order. Empty criteria returns every
        transaction.
    """
    criteria = _as_criteria(criteria)
    if criteria.is_empty():
        return list(ledger)
    return [t for t in ledger if matches(t, criteria)]
