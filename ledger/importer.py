"""Spreadsheet import: validate a cell grid into owner-stamped transactions.

Expected layout (positions are fixed, header text is informational):
- Row 0: header, either English (Date, Type, Category, Description, Amount)
  or Russian (Дата, Тип, Категория, Описание, Сумма)
- Row 1+: date, type, category, description, amount

Import is all-or-nothing: any invalid row rejects the whole sheet before
anything reaches the store.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional, Sequence

from errors import EmptySheet, ImportPersistFailure, InvalidAmount, MalformedRow
from logger import get_logger
from models.transaction import (
    EXPENSE,
    INCOME,
    TABLES,
    Transaction,
    parse_amount,
)

logger = get_logger()

HEADERS = {
    "en": ["Date", "Type", "Category", "Description", "Amount"],
    "ru": ["Дата", "Тип", "Категория", "Описание", "Сумма"],
}

BALANCE_LABELS = {
    "en": "Total balance:",
    "ru": "Итоговый баланс:",
}

# Localized type labels accepted on top of the canonical kinds
_KIND_LABELS = {
    "en": {INCOME: INCOME, EXPENSE: EXPENSE},
    "ru": {INCOME: INCOME, EXPENSE: EXPENSE, "доход": INCOME, "расход": EXPENSE},
}

_CYRILLIC_RE = re.compile(r"[а-яА-ЯЁё]")

MIN_COLUMNS = 5


@dataclass
class ImportBatch:
    """Validated, partitioned records ready for insertion."""

    incomes: List[Transaction] = field(default_factory=list)
    expenses: List[Transaction] = field(default_factory=list)
    language: str = "en"

    def __len__(self) -> int:
        return len(self.incomes) + len(self.expenses)


def detect_language(header: Sequence[Any]) -> str:
    """Return 'ru' if any header cell contains Cyrillic, else 'en'."""
    for cell in header:
        if cell is not None and _CYRILLIC_RE.search(str(cell)):
            return "ru"
    return "en"


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(_cell_text(cell) == "" for cell in row)


def _is_balance_row(row: Sequence[Any]) -> bool:
    """Check for the trailing total row written by the exporter."""
    if len(row) < 4:
        return False
    if any(_cell_text(cell) for cell in row[:3]):
        return False
    return _cell_text(row[3]) in BALANCE_LABELS.values()


def parse_row(
    row: Sequence[Any], row_index: int, owner_id: str, language: str = "en"
) -> Transaction:
    """Convert one data row into a Transaction.

    Args:
        row: Cell values for the row.
        row_index: Position of the row in the sheet (header is 0).
        owner_id: Owner to stamp on the record.
        language: Header language, selects the accepted type labels.

    Raises:
        MalformedRow: If the row has fewer than 5 cells or an unknown type.
        InvalidAmount: If the amount is not a finite, non-negative number.
    """
    if len(row) < MIN_COLUMNS:
        raise MalformedRow(
            row_index, f"expected {MIN_COLUMNS} columns, found {len(row)}"
        )

    raw_amount = row[4]
    amount = parse_amount(raw_amount)
    if amount is None:
        raise InvalidAmount(row_index, raw_amount)

    type_label = _cell_text(row[1]).lower()
    kind = _KIND_LABELS.get(language, _KIND_LABELS["en"]).get(type_label)
    if kind is None:
        raise MalformedRow(row_index, f"unknown type {type_label!r}")

    return Transaction(
        id=None,
        owner_id=owner_id,
        amount=amount,
        category=_cell_text(row[2]),
        description=_cell_text(row[3]),
        date=_cell_text(row[0]),
        kind=kind,
    )


def import_table(grid: Sequence[Sequence[Any]], owner_id: str) -> ImportBatch:
    """Validate a cell grid and partition its rows by kind.

    Args:
        grid: Rows of cell values, row 0 being the header.
        owner_id: Owner to stamp on every record.

    Returns:
        ImportBatch with incomes and expenses in sheet order.

    Raises:
        EmptySheet: If the grid has no data rows.
        MalformedRow: If any row is short or has an unknown type.
        InvalidAmount: If any row has an invalid amount.
    """
    if not grid or len(grid) < 2:
        raise EmptySheet()

    language = detect_language(grid[0])
    logger.info(f"Detected {language} header: {list(grid[0])}")

    batch = ImportBatch(language=language)
    for row_index, row in enumerate(grid[1:], start=1):
        if _is_blank_row(row) or _is_balance_row(row):
            continue

        transaction = parse_row(row, row_index, owner_id, language)
        if transaction.kind == INCOME:
            batch.incomes.append(transaction)
        else:
            batch.expenses.append(transaction)

    logger.info(
        f"Parsed {len(batch.incomes)} income(s) and {len(batch.expenses)} expense(s)"
    )
    return batch


def import_into_store(grid, store, session) -> Optional[ImportBatch]:
    """Validate a grid, then insert incomes followed by expenses.

    Args:
        grid: Rows of cell values, row 0 being the header.
        store: RecordStore to insert into.
        session: SessionProvider supplying the owner id.

    Returns:
        The inserted ImportBatch (records carry their new ids), or None if
        no owner is signed in.

    Raises:
        ImportRejected: If validation fails. Nothing is inserted.
        ImportPersistFailure: If the store rejects a batch.
    """
    owner_id = session.owner_id()
    if owner_id is None:
        logger.info("No owner in session - import not applicable")
        return None

    batch = import_table(grid, owner_id)

    persisted = 0
    for kind, records in ((INCOME, batch.incomes), (EXPENSE, batch.expenses)):
        if not records:
            continue
        table = TABLES[kind]
        try:
            ids = store.insert_batch(table, records)
        except Exception as e:
            logger.error(f"Insert into {table} failed: {e}")
            raise ImportPersistFailure(table, persisted, str(e)) from e

        for record, new_id in zip(records, ids):
            record.id = new_id
        persisted += len(records)
        logger.info(f"Inserted {len(records)} record(s) into {table}")

    return batch
