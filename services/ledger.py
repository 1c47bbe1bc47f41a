"""Ledger service: wires the ledger engine to a record store and session."""

import re
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from errors import ValidationFailure
from ingestion import read_grid, write_grid
from ledger.exporter import SHEET_TITLE, export_table
from ledger.filters import apply_filter
from ledger.importer import ImportBatch, import_into_store
from ledger.merge import Ledger, load_ledger
from ledger.view import LedgerView
from logger import get_logger
from models.category import get_default_category
from models.criteria import FilterCriteria
from models.transaction import KINDS, Transaction, parse_amount

logger = get_logger()

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_transaction(
    owner_id: str,
    kind: str,
    amount: Any,
    category: Optional[str] = None,
    description: Optional[str] = None,
    transaction_date: Optional[str] = None,
) -> Transaction:
    """Check a single submitted record and build its Transaction.

    Args:
        owner_id: Owner to stamp on the record.
        kind: 'income' or 'expense'.
        amount: Raw amount as submitted (number or numeric text).
        category: Category; defaults to the first recommended one for the kind.
        description: Free text; defaults to empty.
        transaction_date: Date as YYYY-MM-DD; defaults to today.

    Returns:
        Transaction without an id.

    Raises:
        ValidationFailure: If kind, amount or date is invalid.
    """
    if kind not in KINDS:
        raise ValidationFailure("kind", kind, f"must be one of: {', '.join(KINDS)}")

    parsed_amount = parse_amount(amount)
    if parsed_amount is None:
        raise ValidationFailure(
            "amount", amount, "must be a finite, non-negative number"
        )

    if transaction_date is None or transaction_date == "":
        transaction_date = date.today().isoformat()
    else:
        transaction_date = str(transaction_date).strip()
        try:
            if not _ISO_DATE_RE.match(transaction_date):
                raise ValueError("not in YYYY-MM-DD format")
            date.fromisoformat(transaction_date)
        except ValueError as e:
            raise ValidationFailure("date", transaction_date, str(e)) from e

    return Transaction(
        id=None,
        owner_id=owner_id,
        amount=parsed_amount,
        category=category or get_default_category(kind),
        description=description or "",
        date=transaction_date,
        kind=kind,
    )


class LedgerService:
    """High-level ledger operations for the signed-in owner.

    Args:
        store: RecordStore holding incomes and expenses.
        session: SessionProvider supplying the owner id.
        chronological: Sort monthly buckets by date instead of first-seen order.
    """

    def __init__(self, store, session, chronological: bool = False):
        self.store = store
        self.session = session
        self.chronological = chronological

    def load(self) -> Optional[Ledger]:
        """Load the merged ledger, or None if no owner is signed in.

        Raises:
            DataUnavailable: If either collection cannot be fetched.
        """
        return load_ledger(self.store, self.session)

    def view(
        self, criteria: Union[FilterCriteria, Mapping, None] = None
    ) -> Optional[LedgerView]:
        """Load the ledger into a LedgerView with the given criteria applied."""
        ledger = self.load()
        if ledger is None:
            return None

        view = LedgerView(ledger, chronological=self.chronological)
        view.set_criteria(criteria)
        return view

    def add_transaction(
        self,
        kind: str,
        amount: Any,
        category: Optional[str] = None,
        description: Optional[str] = None,
        transaction_date: Optional[str] = None,
    ) -> Optional[Transaction]:
        """Validate and insert one income or expense.

        Returns:
            The inserted Transaction with its id, or None if no owner is signed in.

        Raises:
            ValidationFailure: If the record is invalid. Nothing is inserted.
            StoreError: If the insert fails.
        """
        owner_id = self.session.owner_id()
        if owner_id is None:
            logger.info("No owner in session - nothing to add")
            return None

        transaction = validate_transaction(
            owner_id, kind, amount, category, description, transaction_date
        )
        ids = self.store.insert_batch(transaction.table, [transaction])
        transaction.id = ids[0]
        logger.debug(f"Added {kind} {transaction.id}: {transaction.amount}")
        return transaction

    def import_file(self, path: Path) -> Optional[ImportBatch]:
        """Read a spreadsheet file and import its rows.

        Raises:
            ValueError: If the file format is not supported.
            ImportRejected: If the file cannot be decoded or any row is invalid.
                Nothing is inserted.
            ImportPersistFailure: If the store rejects a batch.
        """
        grid = read_grid(Path(path))
        return import_into_store(grid, self.store, self.session)

    def export_file(
        self, path: Path, criteria: Union[FilterCriteria, Mapping, None] = None
    ) -> Optional[int]:
        """Export the (filtered) ledger to a spreadsheet file.

        Returns:
            Number of transactions written, or None if no owner is signed in.

        Raises:
            DataUnavailable: If the ledger cannot be loaded.
            ValueError: If the file format is not supported.
        """
        ledger = self.load()
        if ledger is None:
            return None

        transactions = apply_filter(ledger, criteria)
        write_grid(export_table(transactions), Path(path), sheet_title=SHEET_TITLE)
        return len(transactions)
