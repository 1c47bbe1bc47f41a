"""Merge income and expense records into a single typed ledger."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator, List, Mapping, Optional

from errors import DataUnavailable
from logger import get_logger
from models.transaction import (
    EXPENSE,
    INCOME,
    TABLES,
    Transaction,
    parse_amount,
)

logger = get_logger()


@dataclass
class Ledger:
    """An owner's merged transactions and their balance.

    Attributes:
        transactions: Incomes in source order followed by expenses in source order.
        balance: Sum of income amounts minus sum of expense amounts.
    """

    transactions: List[Transaction] = field(default_factory=list)
    balance: Decimal = field(default_factory=lambda: Decimal("0"))

    def __len__(self) -> int:
        return len(self.transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def incomes(self) -> List[Transaction]:
        return [t for t in self.transactions if t.kind == INCOME]

    def expenses(self) -> List[Transaction]:
        return [t for t in self.transactions if t.kind == EXPENSE]


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Sum income amounts and subtract expense amounts."""
    return sum((t.signed_amount for t in transactions), Decimal("0"))


def record_to_transaction(record: Mapping, kind: str) -> Optional[Transaction]:
    """Tag an untagged store record with its kind.

    Args:
        record: Mapping with id, user_id, amount, category, description, date.
        kind: 'income' or 'expense', implied by the source table.

    Returns:
        Transaction, or None if the stored amount breaks the non-negative invariant.
    """
    amount = parse_amount(record.get("amount"))
    if amount is None:
        logger.warning(
            f"Excluding {kind} record {record.get('id')} with invalid amount: "
            f"{record.get('amount')!r}"
        )
        return None

    return Transaction(
        id=record.get("id"),
        owner_id=record.get("user_id"),
        amount=amount,
        category=record.get("category") or "",
        description=record.get("description") or "",
        date=record.get("date") or "",
        kind=kind,
    )


def merge_ledger(incomes: Iterable[Mapping], expenses: Iterable[Mapping]) -> Ledger:
    """Combine income and expense records into one ledger.

    Order is the concatenation of the sources: incomes first, then
    expenses, each as provided. Nothing is re-sorted.

    Args:
        incomes: Untagged income records.
        expenses: Untagged expense records.

    Returns:
        Ledger with tagged transactions and the computed balance.
    """
    transactions = []
    for kind, records in ((INCOME, incomes), (EXPENSE, expenses)):
        for record in records:
            transaction = record_to_transaction(record, kind)
            if transaction is not None:
                transactions.append(transaction)

    return Ledger(transactions=transactions, balance=compute_balance(transactions))


def load_ledger(store, session) -> Optional[Ledger]:
    """Fetch both record collections for the current owner and merge them.

    Args:
        store: RecordStore to read from.
        session: SessionProvider supplying the owner id.

    Returns:
        The merged Ledger, or None if no owner is signed in.

    Raises:
        DataUnavailable: If either collection cannot be fetched. No partial
            ledger is produced.
    """
    owner_id = session.owner_id()
    if owner_id is None:
        logger.info("No owner in session - ledger not loaded")
        return None

    fetched = {}
    for kind in (INCOME, EXPENSE):
        table = TABLES[kind]
        try:
            fetched[kind] = store.fetch_by_owner(table, owner_id)
        except Exception as e:
            logger.error(f"Failed to fetch {table} for owner {owner_id}: {e}")
            raise DataUnavailable(table, str(e)) from e

    ledger = merge_ledger(fetched[INCOME], fetched[EXPENSE])
    logger.debug(
        f"Loaded ledger for {owner_id}: {len(ledger)} transaction(s), balance {ledger.balance}"
    )
    return ledger
