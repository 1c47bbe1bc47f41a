"""Spreadsheet export of a ledger with a trailing balance row."""

from decimal import Decimal
from typing import Any, Iterable, List

from ledger.importer import BALANCE_LABELS, HEADERS
from ledger.merge import compute_balance
from models.transaction import Transaction, format_amount

SHEET_TITLE = "Доходы и Расходы"
DEFAULT_FILENAME = "доходы_расходы.xlsx"


def export_table(ledger: Iterable[Transaction]) -> List[List[Any]]:
    """Serialize transactions into rows for a single-sheet document.

    Amounts are written as non-negative magnitudes; the type column carries
    the sign. The last row holds the balance of exactly the rows exported.

    Args:
        ledger: A Ledger, a filtered list, or any iterable of transactions.

    Returns:
        Header row, one row per transaction, then the balance row.
    """
    transactions = list(ledger)

    rows: List[List[Any]] = [list(HEADERS["ru"])]
    for t in transactions:
        rows.append([t.date, t.kind, t.category, t.description, _cell_amount(t.amount)])

    balance = compute_balance(transactions)
    rows.append(["", "", "", BALANCE_LABELS["ru"], _cell_amount(balance)])
    return rows


def _cell_amount(amount: Decimal) -> Decimal:
    # Amounts read back from REAL columns carry a trailing ".0"
    return Decimal(format_amount(amount))
