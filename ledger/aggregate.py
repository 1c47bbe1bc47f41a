"""Monthly income/expense aggregation for the trend chart."""

from typing import Dict, Iterable, List, Tuple

from logger import get_logger
from models.bucket import MonthlyBucket
from models.transaction import INCOME, Transaction, parse_calendar_date

logger = get_logger()


def aggregate_by_month(
    ledger: Iterable[Transaction], chronological: bool = False
) -> List[MonthlyBucket]:
    """Bucket transactions into per-month income and expense sums.

    Buckets are returned in the order their month is first seen in the
    ledger unless chronological is set, in which case they are sorted by
    (year, month). Transactions whose date cannot be parsed are left out
    of every bucket.

    Args:
        ledger: A Ledger or any iterable of transactions.
        chronological: Sort buckets by (year, month).

    Returns:
        List of MonthlyBucket objects, freshly built on every call.
    """
    buckets: Dict[Tuple[int, int], MonthlyBucket] = {}
    skipped = 0

    for transaction in ledger:
        parsed = parse_calendar_date(transaction.date)
        if parsed is None:
            skipped += 1
            logger.debug(
                f"Skipping transaction {transaction.id} with unparseable date: "
                f"{transaction.date!r}"
            )
            continue

        key = (parsed.year, parsed.month)
        if key not in buckets:
            buckets[key] = MonthlyBucket(year=parsed.year, month=parsed.month)

        if transaction.kind == INCOME:
            buckets[key].income += transaction.amount
        else:
            buckets[key].expense += transaction.amount

    if skipped:
        logger.info(f"{skipped} transaction(s) left out of the trend: unparseable date")

    result = list(buckets.values())
    if chronological:
        result.sort(key=lambda b: b.key)
    return result
