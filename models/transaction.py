from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import math
import re

from dateutil import parser as date_parser

INCOME = "income"
EXPENSE = "expense"
KINDS = (INCOME, EXPENSE)

# Store table holding each kind
TABLES = {INCOME: "incomes", EXPENSE: "expenses"}

_YEAR_RE = re.compile(r"\d{4}")


@dataclass
class Transaction:
    id: Optional[int]  # assigned by the store on insert
    owner_id: str
    amount: Decimal  # always non-negative, sign comes from kind
    category: str
    description: str
    date: str  # calendar date as text, ISO for records created here
    kind: str  # 'income' or 'expense'

    @property
    def table(self) -> str:
        """Store table this transaction belongs to."""
        return TABLES[self.kind]

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by kind."""
        return self.amount if self.kind == INCOME else -self.amount


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a raw amount into a finite, non-negative Decimal.

    Accepts numbers and numeric strings (surrounding whitespace ignored).

    Returns:
        The parsed Decimal, or None if the value is not a finite,
        non-negative number.
    """
    # bool is an int subclass; a True cell is not an amount
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None

    if not amount.is_finite() or amount < 0:
        return None
    # Amounts are stored as REAL, so they must fit a finite float
    if not math.isfinite(float(amount)):
        return None
    return amount


def format_amount(amount: Decimal) -> str:
    """Render an amount as plain decimal text without trailing zeros.

    Examples: Decimal("1000.0") -> "1000", Decimal("12.50") -> "12.5".
    """
    normalized = amount.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse a transaction date into a calendar date.

    ISO text is tried first; other textual forms are accepted only if they
    carry a four-digit year and are read day-first (e.g. "05.01.2024").

    Returns:
        The date, or None if the value cannot be read as a calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        pass

    if not _YEAR_RE.search(text):
        return None

    try:
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError):
        return None
