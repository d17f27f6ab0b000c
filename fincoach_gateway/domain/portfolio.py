"""Portfolio evaluation and savings-goal projection"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable
from fincoach_gateway.domain.models import GoalProjection, Holding, PortfolioPerformance
from fincoach_gateway.utils.date_utils import add_months

# Prior-day price assumed when no price history is supplied
SYNTHETIC_PREVIOUS_PRICE_RATIO = 0.99
DIVERSIFICATION_TARGET_HOLDINGS = 10
MAX_PROJECTION_MONTHS = 50 * 12


def previous_price(holding: Holding) -> float:
    """Supplied prior close, or a synthetic one 1% below the current price"""
    if holding.previous_price is not None:
        return holding.previous_price
    return holding.current_price * SYNTHETIC_PREVIOUS_PRICE_RATIO


def performance(holdings: Iterable[Holding]) -> PortfolioPerformance:
    """
    Value the portfolio and measure gain/loss.

    Requirements:
    - Gain percentage is relative to total cost basis (0 with no cost)
    - Day change uses previous_price() per holding
    - Diversification is the distinct symbol count against a 10-holding
      target, capped at 100
    """
    holdings = list(holdings)

    total_value = sum(h.shares * h.current_price for h in holdings)
    total_cost = sum(h.shares * h.purchase_price for h in holdings)
    day_change = sum(h.shares * (h.current_price - previous_price(h)) for h in holdings)

    total_gain = total_value - total_cost
    total_gain_percentage = total_gain / total_cost * 100 if total_cost > 0 else 0.0
    day_change_percentage = day_change / total_value * 100 if total_value > 0 else 0.0

    distinct_symbols = len({h.symbol for h in holdings})
    diversification_score = min(distinct_symbols / DIVERSIFICATION_TARGET_HOLDINGS * 100, 100)

    return PortfolioPerformance(
        total_value=total_value,
        total_gain=total_gain,
        total_gain_percentage=total_gain_percentage,
        day_change=day_change,
        day_change_percentage=day_change_percentage,
        diversification_score=diversification_score,
    )


def allocation_by_type(holdings: Iterable[Holding]) -> Dict[str, float]:
    """Market value per investment type; unpriced holdings fall back to cost"""
    totals: Dict[str, float] = defaultdict(float)
    for h in holdings:
        price = h.current_price or h.purchase_price
        totals[h.investment_type or "other"] += h.shares * price
    return dict(totals)


def monthly_contribution_needed(
    current_amount: float,
    target_amount: float,
    years_to_goal: float,
    expected_annual_return: float,
) -> float:
    """
    Monthly deposit that grows current_amount into target_amount.

    Uses monthly compounding at expected_annual_return / 12 and the
    ordinary-annuity payment formula for whatever the current balance will
    not cover. A zero rate spreads the gap evenly over the months.

    A monthly loss beyond 100% wipes the balance out each month (growth
    factor 0). Growth too large for a float covers any target.

    Example:
        monthly_contribution_needed(0, 12000, 1, 0) -> 1000.0
    """
    if years_to_goal <= 0:
        return target_amount - current_amount

    monthly_return = expected_annual_return / 12
    total_months = years_to_goal * 12
    monthly_factor = max(1 + monthly_return, 0.0)

    try:
        growth = monthly_factor ** total_months
    except OverflowError:
        return 0.0

    amount_needed = target_amount - current_amount * growth
    if amount_needed <= 0:
        return 0.0

    if monthly_factor == 1:
        annuity_factor = total_months
    else:
        annuity_factor = (growth - 1) / (monthly_factor - 1)

    return max(amount_needed / annuity_factor, 0.0)


def project_goal(
    current_amount: float,
    monthly_contribution: float,
    expected_annual_return: float,
    target_amount: float,
    as_of: date | None = None,
) -> GoalProjection:
    """
    Simulate month-end contributions until the target is reached.

    The simulation stops at 50 years; a goal is on track only if it is
    reached before that cap.
    """
    if as_of is None:
        as_of = date.today()

    monthly_return = expected_annual_return / 12
    amount = current_amount
    months = 0

    while amount < target_amount and months < MAX_PROJECTION_MONTHS:
        amount = amount * (1 + monthly_return) + monthly_contribution
        months += 1

    return GoalProjection(
        projected_amount=amount,
        years_to_target=months / 12,
        on_track=months < MAX_PROJECTION_MONTHS,
        projected_completion=add_months(as_of, months),
    )
