"""Error taxonomy for ledger operations.

Every error carries enough context (table, row index, field, raw value)
for the caller to display or log it without re-deriving anything.
"""

from typing import Any, Optional


class BalansError(Exception):
    """Base exception for all ledger errors."""

    pass


class StoreError(BalansError):
    """The record store failed to read or write."""

    pass


class DataUnavailable(BalansError):
    """A source collection could not be fetched from the store."""

    def __init__(self, table: str, detail: str = ""):
        self.table = table
        self.detail = detail
        message = f"Could not load {table}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ImportRejected(BalansError):
    """Base exception for spreadsheet rows that fail validation.

    Raising any subclass aborts the whole import before anything is inserted.
    """

    pass


class EmptySheet(ImportRejected):
    """The sheet has no data rows below the header."""

    def __init__(self):
        super().__init__("File is empty or contains no data rows")


class UnreadableFile(ImportRejected):
    """The file could not be decoded as the format its extension names."""

    def __init__(self, path: Any, detail: str = ""):
        self.path = path
        self.detail = detail
        message = f"Could not read {path}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class MalformedRow(ImportRejected):
    """A data row does not have the expected shape."""

    def __init__(self, row_index: int, reason: str):
        self.row_index = row_index
        self.reason = reason
        super().__init__(f"Row {row_index}: {reason}")


class InvalidAmount(ImportRejected):
    """A data row's amount cell is not a finite, non-negative number."""

    def __init__(self, row_index: int, raw_value: Any):
        self.row_index = row_index
        self.raw_value = raw_value
        super().__init__(f"Row {row_index}: invalid amount {raw_value!r}")


class ImportPersistFailure(BalansError):
    """Validated import data could not be written to the store.

    Attributes:
        table: The table whose insert failed.
        persisted: Number of records already written by earlier batches.
    """

    def __init__(self, table: str, persisted: int = 0, detail: str = ""):
        self.table = table
        self.persisted = persisted
        message = f"Failed to insert into {table}"
        if detail:
            message += f": {detail}"
        if persisted:
            message += f" ({persisted} record(s) were already saved)"
        super().__init__(message)


class ValidationFailure(BalansError):
    """A directly submitted record fails the record invariants."""

    def __init__(self, field: str, value: Optional[Any], reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
