"""Record store: owner-scoped income and expense tables."""

import sqlite3
from abc import ABC, abstractmethod
from typing import List

from errors import StoreError
from models.transaction import TABLES, Transaction

_RECORD_SELECT_FIELDS = "id, user_id, amount, category, description, date"

_RECORD_INSERT_FIELDS = "user_id, amount, category, description, date"

# Automatically generate placeholders from field count
_RECORD_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_RECORD_INSERT_FIELDS.split(',')))})"
)


def validate_table(table: str) -> str:
    """Check that a table name is one of the record tables.

    Raises:
        ValueError: If the table is unknown.
    """
    if table not in TABLES.values():
        raise ValueError(
            f"Unknown table: {table}. Must be one of: {', '.join(TABLES.values())}"
        )
    return table


class RecordStore(ABC):
    """Abstract interface of the durable record store.

    Records are kept per owner in two tables, 'incomes' and 'expenses'.
    Records carry no kind tag; the table implies it.
    """

    @abstractmethod
    def fetch_by_owner(self, table: str, owner_id: str) -> List[dict]:
        """Get all records of one owner from a table.

        Returns:
            List of dicts with id, user_id, amount, category, description, date.

        Raises:
            StoreError: If the records cannot be read.
        """
        pass

    @abstractmethod
    def insert_batch(self, table: str, records: List[Transaction]) -> List[int]:
        """Insert records into a table as one unit.

        Returns:
            Ids assigned to the records, in order.

        Raises:
            StoreError: If the insert fails. No record of the batch is kept.
        """
        pass


class SqliteRecordStore(RecordStore):
    """RecordStore backed by the application's SQLite database."""

    def __init__(self, db_manager):
        """Initialize the record store.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def fetch_by_owner(self, table: str, owner_id: str) -> List[dict]:
        validate_table(table)

        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    f"""
                    SELECT {_RECORD_SELECT_FIELDS}
                    FROM {table}
                    WHERE user_id = ?
                    ORDER BY id
                    """,
                    (owner_id,),
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Error reading {table}: {e}") from e

        return [self._row_to_record(row) for row in rows]

    def insert_batch(self, table: str, records: List[Transaction]) -> List[int]:
        validate_table(table)

        if not records:
            return []

        ids = []
        with self.db_manager.connect() as conn:
            try:
                for record in records:
                    cursor = conn.execute(
                        f"""
                        INSERT INTO {table} ({_RECORD_INSERT_FIELDS})
                        VALUES {_RECORD_INSERT_PLACEHOLDERS}
                        """,
                        (
                            record.owner_id,
                            float(record.amount),
                            record.category,
                            record.description,
                            record.date,
                        ),
                    )
                    ids.append(cursor.lastrowid)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError(f"Error inserting into {table}: {e}") from e

        return ids

    def _row_to_record(self, row: tuple) -> dict:
        """Convert a database row to an untagged record."""
        return {
            "id": row[0],
            "user_id": row[1],
            "amount": row[2],
            "category": row[3],
            "description": row[4],
            "date": row[5],
        }
