"""Derived table/chart state for a ledger under a filter."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Mapping, Optional, Union

from ledger.aggregate import aggregate_by_month
from ledger.filters import apply_filter
from ledger.merge import Ledger, compute_balance
from models.bucket import MonthlyBucket
from models.criteria import FilterCriteria
from models.transaction import INCOME, Transaction, format_amount


def display_amount(transaction: Transaction) -> str:
    """Amount as shown in the table: '+1000' for income, '-300' for expense."""
    sign = "+" if transaction.kind == INCOME else "-"
    return f"{sign}{format_amount(transaction.amount)}"


@dataclass
class DerivedState:
    """Everything computed from one (ledger, criteria) revision."""

    revision: int
    rows: List[Transaction] = field(default_factory=list)
    filtered_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    buckets: List[MonthlyBucket] = field(default_factory=list)


class LedgerView:
    """Holds a ledger and filter criteria and keeps derived state current.

    Every change to the ledger or the criteria bumps the revision and
    recomputes synchronously. publish() refuses results computed for an
    older revision, so a stale recompute can never replace a newer one.

    The headline balance covers the full ledger; the filtered balance and
    table rows cover the filtered set. The chart covers the full ledger.
    """

    def __init__(self, ledger: Optional[Ledger] = None, chronological: bool = False):
        self.ledger = ledger or Ledger()
        self.criteria = FilterCriteria()
        self.chronological = chronological
        self.revision = 0
        self.state = DerivedState(revision=0)
        self.refresh()

    def set_ledger(self, ledger: Ledger) -> DerivedState:
        self.ledger = ledger
        return self.refresh()

    def set_criteria(
        self, criteria: Union[FilterCriteria, Mapping, None]
    ) -> DerivedState:
        if criteria is None:
            criteria = FilterCriteria()
        elif not isinstance(criteria, FilterCriteria):
            criteria = FilterCriteria.from_dict(criteria)
        self.criteria = criteria
        return self.refresh()

    def update_criterion(self, name: str, value: Optional[str]) -> DerivedState:
        """Change one filter field, keeping the others. 'type' names the kind field."""
        if name == "type":
            name = "kind"
        values = self.criteria.active_fields()
        values[name] = value
        return self.set_criteria(values)

    def compute(self, revision: int) -> DerivedState:
        """Compute derived state from the current ledger and criteria."""
        rows = apply_filter(self.ledger, self.criteria)
        return DerivedState(
            revision=revision,
            rows=rows,
            filtered_balance=compute_balance(rows),
            balance=self.ledger.balance,
            buckets=aggregate_by_month(self.ledger, chronological=self.chronological),
        )

    def publish(self, state: DerivedState) -> bool:
        """Install a computed state unless a newer one is already in place."""
        if state.revision < self.state.revision:
            return False
        self.state = state
        return True

    def refresh(self) -> DerivedState:
        self.revision += 1
        self.publish(self.compute(self.revision))
        return self.state

    def table_rows(self) -> List[List[str]]:
        """Rows for the table view: date, type, category, description, signed amount."""
        return [
            [t.date, t.kind, t.category, t.description, display_amount(t)]
            for t in self.state.rows
        ]
