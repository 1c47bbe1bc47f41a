"""Helper utilities for tests."""

from decimal import Decimal
from pathlib import Path
import sqlite3

from errors import StoreError
from models.transaction import Transaction
from services.records import RecordStore


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text(encoding="utf-8"))

    conn.commit()


def make_transaction(
    kind: str,
    amount,
    date: str = "2024-01-05",
    category: str = "Другое",
    description: str = "",
    owner_id: str = "user-1",
    id=None,
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    return Transaction(
        id=id,
        owner_id=owner_id,
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        date=date,
        kind=kind,
    )


def make_record(amount, date="2024-01-05", category="Другое", description="", id=1, user_id="user-1") -> dict:
    """Build an untagged store record."""
    return {
        "id": id,
        "user_id": user_id,
        "amount": amount,
        "category": category,
        "description": description,
        "date": date,
    }


class FailingStore(RecordStore):
    """Store double that fails on chosen tables and records what it was asked.

    Args:
        records: Records returned by fetch_by_owner, keyed by table.
        fail_fetch: Tables whose fetch raises StoreError.
        fail_insert: Tables whose insert raises StoreError.
    """

    def __init__(self, records=None, fail_fetch=(), fail_insert=()):
        self.records = records or {"incomes": [], "expenses": []}
        self.fail_fetch = set(fail_fetch)
        self.fail_insert = set(fail_insert)
        self.inserted = {"incomes": [], "expenses": []}
        self.insert_calls = []

    def fetch_by_owner(self, table, owner_id):
        if table in self.fail_fetch:
            raise StoreError(f"{table} unavailable")
        return [r for r in self.records[table] if r["user_id"] == owner_id]

    def insert_batch(self, table, records):
        self.insert_calls.append(table)
        if table in self.fail_insert:
            raise StoreError(f"{table} is read-only")
        start = len(self.inserted[table]) + 1
        self.inserted[table].extend(records)
        return list(range(start, start + len(records)))
