"""Spending aggregation by category over the trailing month"""

from collections import defaultdict
from datetime import date
from typing import Iterable, List, Tuple
from fincoach_gateway.domain.categorizer import categorize
from fincoach_gateway.domain.metrics import transactions_since
from fincoach_gateway.domain.models import (
    CategorySpending,
    SpendingByCategory,
    Transaction,
    TransactionType,
)
from fincoach_gateway.utils.date_utils import subtract_months

SPENDING_WINDOW_MONTHS = 1


def aggregate_spending(transactions: Iterable[Transaction], as_of: date | None = None) -> SpendingByCategory:
    """
    Bucket last month's expenses by category.

    Each bucket carries the absolute amount spent, the number of transactions
    and its share of the month's total expense in percent. Shares are 0 when
    there was no spending. Only categories that occurred are present.
    """
    if as_of is None:
        as_of = date.today()

    window = transactions_since(transactions, subtract_months(as_of, SPENDING_WINDOW_MONTHS))
    expenses = [t for t in window if t.type == TransactionType.EXPENSE]

    buckets: dict[str, CategorySpending] = defaultdict(CategorySpending)
    for txn in expenses:
        bucket = buckets[categorize(txn.description).value]
        bucket.amount += abs(txn.amount)
        bucket.transaction_count += 1

    total = sum(bucket.amount for bucket in buckets.values())
    for bucket in buckets.values():
        bucket.percentage = bucket.amount / total * 100 if total > 0 else 0.0

    return dict(buckets)


def sorted_by_amount(spending: SpendingByCategory) -> List[Tuple[str, CategorySpending]]:
    """Largest categories first, for display"""
    return sorted(spending.items(), key=lambda item: item[1].amount, reverse=True)
