"""FilterCriteria model for ad-hoc ledger filtering."""

from dataclasses import dataclass, fields
from typing import Mapping, Optional


@dataclass
class FilterCriteria:
    """A sparse set of field predicates combined with AND.

    Attributes:
        date: Substring the record's date text must contain.
        kind: Exact kind. A value other than 'income' or 'expense' matches nothing.
        category: Substring the category must contain.
        description: Substring the description must contain.
        amount: Substring the amount's plain decimal text must contain.

    A field left as None (or empty string) places no constraint.
    """

    date: Optional[str] = None
    kind: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[str] = None

    def __post_init__(self):
        # Cleared inputs arrive as empty strings
        for f in fields(self):
            if getattr(self, f.name) == "":
                setattr(self, f.name, None)

    @classmethod
    def from_dict(cls, data: Mapping) -> "FilterCriteria":
        """Build criteria from a mapping, accepting 'type' as an alias for 'kind'."""
        values = {f.name: data.get(f.name) for f in fields(cls)}
        if values["kind"] is None and "type" in data:
            values["kind"] = data["type"]
        # Amount criteria may arrive as numbers
        if values["amount"] is not None:
            values["amount"] = str(values["amount"])
        return cls(**values)

    def active_fields(self) -> dict:
        """Get the fields that constrain the filter."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        """Check whether the criteria constrain nothing."""
        return not self.active_fields()
