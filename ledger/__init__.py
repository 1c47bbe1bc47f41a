"""Ledger engine: merge, filter, aggregate, import and export."""

from ledger.aggregate import aggregate_by_month
from ledger.exporter import export_table
from ledger.filters import apply_filter, matches
from ledger.importer import ImportBatch, import_into_store, import_table
from ledger.merge import Ledger, compute_balance, load_ledger, merge_ledger
from ledger.view import LedgerView, display_amount

__all__ = [
    "Ledger",
    "LedgerView",
    "ImportBatch",
    "aggregate_by_month",
    "apply_filter",
    "compute_balance",
    "display_amount",
    "export_table",
    "import_into_store",
    "import_table",
    "load_ledger",
    "matches",
    "merge_ledger",
]
