"""MonthlyBucket model for the income/expense trend."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class MonthlyBucket:
    """Income and expense totals for one calendar month.

    Attributes:
        year: Calendar year.
        month: Calendar month (1-12).
        income: Sum of income amounts dated in this month.
        expense: Sum of expense amounts dated in this month.
    """

    year: int
    month: int
    income: Decimal = field(default_factory=lambda: Decimal("0"))
    expense: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def key(self) -> tuple:
        return (self.year, self.month)

    @property
    def label(self) -> str:
        """Chart axis label, e.g. '2024-1'."""
        return f"{self.year}-{self.month}"

    @property
    def net(self) -> Decimal:
        return self.income - self.expense
