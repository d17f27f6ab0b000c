"""Financial metrics engine - income, expense, savings and debt ratios"""

import logging
from datetime import date
from typing import Iterable, List
from fincoach_gateway.domain.categorizer import categorize
from fincoach_gateway.domain.models import (
    Account,
    Category,
    FinancialMetrics,
    Transaction,
    TransactionType,
)
from fincoach_gateway.utils.date_utils import subtract_months

logger = logging.getLogger(__name__)

METRICS_WINDOW_MONTHS = 3


def transactions_since(transactions: Iterable[Transaction], cutoff: date) -> List[Transaction]:
    """Keep transactions dated on or after the cutoff"""
    return [t for t in transactions if t.date >= cutoff]


def _sum_abs(transactions: Iterable[Transaction]) -> float:
    return sum(abs(t.amount) for t in transactions)


def compute_metrics(
    transactions: Iterable[Transaction],
    emergency_fund_balance: float = 0.0,
    as_of: date | None = None,
) -> FinancialMetrics:
    """
    Derive summary metrics from the trailing three calendar months.

    Requirements:
    - Income and expenses use absolute amounts; transfers count toward neither
    - Every ratio is zero-guarded, so an empty history yields all zeros
    - Debt payments are window expenses that categorize as Debt

    The debt-to-income ratio compares monthly-averaged debt payments with
    monthly-averaged income, so the window length cancels out.
    """
    if as_of is None:
        as_of = date.today()

    window = transactions_since(transactions, subtract_months(as_of, METRICS_WINDOW_MONTHS))
    expenses = [t for t in window if t.type == TransactionType.EXPENSE]

    total_income = _sum_abs(t for t in window if t.type == TransactionType.INCOME)
    total_expenses = _sum_abs(expenses)
    net_income = total_income - total_expenses

    savings_rate = net_income / total_income * 100 if total_income > 0 else 0.0

    # Emergency fund coverage in months of average spending
    monthly_expenses = total_expenses / METRICS_WINDOW_MONTHS
    emergency_fund_months = emergency_fund_balance / monthly_expenses if monthly_expenses > 0 else 0.0

    debt_payments = _sum_abs(t for t in expenses if categorize(t.description) == Category.DEBT)
    monthly_income = total_income / METRICS_WINDOW_MONTHS
    debt_to_income_ratio = (
        debt_payments / METRICS_WINDOW_MONTHS / monthly_income * 100 if monthly_income > 0 else 0.0
    )

    logger.debug(
        "Computed metrics",
        extra={"window_transactions": len(window), "as_of": as_of.isoformat()},
    )

    return FinancialMetrics(
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=net_income,
        savings_rate=savings_rate,
        debt_to_income_ratio=debt_to_income_ratio,
        emergency_fund_months=emergency_fund_months,
        monthly_budget_variance=0.0,  # no budget source yet
    )


def emergency_fund_balance(accounts: Iterable[Account]) -> float:
    """Total balance held in savings accounts"""
    return sum(a.current_balance for a in accounts if a.account_type == "savings")
