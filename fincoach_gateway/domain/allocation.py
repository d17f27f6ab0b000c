"""Asset allocation engine - age rules, goal horizons, blending and risk"""

import logging
import math
from datetime import date
from typing import Dict, Iterable, Tuple
from fincoach_gateway.domain.exceptions import IncompleteProfileError
from fincoach_gateway.domain.metrics import emergency_fund_balance
from fincoach_gateway.domain.models import (
    Account,
    AssetAllocation,
    InvestmentProfile,
    InvestmentRecommendation,
    RiskAssessment,
    RiskTolerance,
    SimpleAllocation,
    UserProfile,
)
from fincoach_gateway.utils.date_utils import whole_years_between

logger = logging.getLogger(__name__)

# (K, floor) for "stock% = max(K - age, floor)": rules of 100/110/120
AGE_RULES: Dict[str, Tuple[int, int]] = {
    RiskTolerance.CONSERVATIVE.value: (100, 20),
    RiskTolerance.MODERATE.value: (110, 30),
    RiskTolerance.AGGRESSIVE.value: (120, 40),
}

RISK_MULTIPLIERS: Dict[str, float] = {
    RiskTolerance.CONSERVATIVE.value: 0.7,
    RiskTolerance.MODERATE.value: 1.0,
    RiskTolerance.AGGRESSIVE.value: 1.3,
}

# Long-run return and volatility assumptions per asset class
EXPECTED_RETURNS = AssetAllocation(stocks=0.10, bonds=0.04, real_estate=0.08, commodities=0.06, cash=0.02)
VOLATILITIES = AssetAllocation(stocks=0.16, bonds=0.04, real_estate=0.12, commodities=0.20, cash=0.01)

GOAL_WEIGHT = 0.6

RISK_RECOMMENDATIONS = {
    "Low": [
        "Your portfolio has low risk but may have limited growth potential",
        "Consider increasing stock allocation if you have a long time horizon",
    ],
    "Moderate": [
        "Your portfolio has balanced risk and return potential",
        "Good diversification across asset classes",
        "Review allocation annually and rebalance as needed",
    ],
    "High": [
        "Your portfolio has high growth potential but significant volatility",
        "Ensure you can handle potential short-term losses",
        "Consider reducing risk as you approach your investment goals",
    ],
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def age_based_allocation(age: int, risk_tolerance: str) -> AssetAllocation:
    """
    Rule-of-100/110/120 allocation.

    Stocks get max(K - age, floor), bonds take up to 60 of the rest, and what
    remains is spread across real estate, commodities and cash with caps
    (cash has a 5% floor). The result is intentionally not normalized: for
    older investors the components can add up to more than 100.
    """
    k, floor = AGE_RULES.get(risk_tolerance, AGE_RULES[RiskTolerance.MODERATE.value])

    stocks = max(k - age, floor)
    bonds = min(100 - stocks, 60)
    remaining = 100 - stocks - bonds

    return AssetAllocation(
        stocks=stocks,
        bonds=bonds,
        real_estate=min(remaining * 0.6, 15),
        commodities=min(remaining * 0.3, 10),
        cash=max(remaining * 0.1, 5),
    )


def _horizon_base(time_horizon_years: float) -> AssetAllocation:
    if time_horizon_years < 3:
        return AssetAllocation(stocks=30, bonds=50, real_estate=5, commodities=5, cash=10)
    elif time_horizon_years < 10:
        return AssetAllocation(stocks=50, bonds=35, real_estate=8, commodities=5, cash=2)
    else:
        return AssetAllocation(stocks=70, bonds=20, real_estate=7, commodities=2, cash=1)


def goal_based_allocation(
    time_horizon_years: float,
    risk_tolerance: str,
    goal_type: str = "general",
) -> AssetAllocation:
    """
    Horizon-bucket allocation tilted by risk tolerance, normalized to 100.

    The tilt moves stocks by (base_stocks - 50) * (multiplier - 1), clamped to
    [10, 90]; bonds move 0.7x that amount the other way, clamped to [5, 80].
    goal_type does not change the weights today.
    """
    base = _horizon_base(time_horizon_years)
    multiplier = RISK_MULTIPLIERS.get(risk_tolerance, RISK_MULTIPLIERS[RiskTolerance.MODERATE.value])

    shift = (base.stocks - 50) * (multiplier - 1)
    stocks = max(min(base.stocks + shift, 90), 10)
    bonds = max(min(base.bonds - shift * 0.7, 80), 5)

    total = stocks + bonds + base.real_estate + base.commodities + base.cash
    return AssetAllocation(
        stocks=stocks / total * 100,
        bonds=bonds / total * 100,
        real_estate=base.real_estate / total * 100,
        commodities=base.commodities / total * 100,
        cash=base.cash / total * 100,
    )


def blend_allocations(
    goal_based: AssetAllocation,
    age_based: AssetAllocation,
    goal_weight: float = GOAL_WEIGHT,
) -> AssetAllocation:
    """Weighted per-component blend, each component rounded to a whole percent"""
    age_weight = 1 - goal_weight
    goal = goal_based.as_dict()
    age = age_based.as_dict()
    return AssetAllocation(
        **{name: _round_half_up(goal[name] * goal_weight + age[name] * age_weight) for name in goal}
    )


def expected_return(allocation: AssetAllocation) -> float:
    """Annual return implied by the allocation, as a fraction"""
    weights = allocation.as_dict()
    returns = EXPECTED_RETURNS.as_dict()
    return sum(weights[name] * returns[name] for name in weights) / 100


def risk_level_for(risk_tolerance: str) -> str:
    if risk_tolerance == RiskTolerance.AGGRESSIVE:
        return "High"
    elif risk_tolerance == RiskTolerance.MODERATE:
        return "Medium"
    else:
        return "Low"


def recommend(profile: InvestmentProfile) -> InvestmentRecommendation:
    """
    Main entry point: blended allocation with expected return and rationale.

    The risk label follows the declared tolerance, not the blended mix.
    """
    age_based = age_based_allocation(profile.current_age, profile.risk_tolerance)
    goal_type = profile.investment_goals[0] if profile.investment_goals else "general"
    goal_based = goal_based_allocation(profile.time_horizon_years, profile.risk_tolerance, goal_type)

    allocation = blend_allocations(goal_based, age_based)
    annual_return = expected_return(allocation)
    risk_level = risk_level_for(profile.risk_tolerance)
    horizon = f"{profile.time_horizon_years:g}"

    reasoning = [
        f"Based on your {profile.risk_tolerance} risk tolerance and {horizon}-year time horizon",
        f"Age-appropriate allocation considering you are {profile.current_age} years old",
        "Diversified across multiple asset classes to reduce risk",
        f"Expected annual return of {annual_return * 100:.1f}% based on historical averages",
    ]

    logger.debug("Built recommendation", extra={"risk_level": risk_level, "expected_return": annual_return})

    return InvestmentRecommendation(
        allocation=allocation,
        expected_return=annual_return,
        risk_level=risk_level,
        description=f"A {risk_level.lower()}-risk portfolio designed for {horizon}-year investment horizon",
        reasoning=reasoning,
    )


def assess_risk(allocation: AssetAllocation) -> RiskAssessment:
    """
    Score an allocation by a simplified volatility estimate.

    Volatility treats asset classes as uncorrelated:
    sqrt(sum((weight * sigma) ** 2)). The 0-100 score is volatility * 500,
    capped at 100. Bands: <30 Low, <60 Moderate, otherwise High.
    """
    weights = allocation.as_dict()
    sigmas = VOLATILITIES.as_dict()
    volatility = math.sqrt(sum((weights[name] / 100 * sigmas[name]) ** 2 for name in weights))
    risk_score = min(volatility * 500, 100)

    if risk_score < 30:
        risk_level = "Low"
    elif risk_score < 60:
        risk_level = "Moderate"
    else:
        risk_level = "High"

    return RiskAssessment(
        risk_score=risk_score,
        volatility=volatility,
        risk_level=risk_level,
        recommendations=list(RISK_RECOMMENDATIONS[risk_level]),
    )


def simple_allocation(risk_tolerance: str) -> SimpleAllocation:
    """Quick stocks/bonds/cash split from risk tolerance alone"""
    if risk_tolerance == RiskTolerance.CONSERVATIVE:
        label, stocks, bonds, cash = "conservative", 30, 60, 10
    elif risk_tolerance == RiskTolerance.AGGRESSIVE:
        label, stocks, bonds, cash = "aggressive", 80, 15, 5
    else:
        label, stocks, bonds, cash = "moderate", 60, 30, 10

    description = (
        f"Based on your {label} risk tolerance, we recommend a portfolio allocation of "
        f"{stocks}% stocks, {bonds}% bonds, and {cash}% cash equivalents."
    )
    return SimpleAllocation(stocks=stocks, bonds=bonds, cash=cash, description=description)


def build_investment_profile(
    profile: UserProfile,
    accounts: Iterable[Account],
    as_of: date | None = None,
    retirement_age: int = 65,
    investable_fraction: float = 0.8,
    minimum_investable: float = 1000.0,
) -> InvestmentProfile:
    """
    Derive allocation inputs from a stored profile and account balances.

    Horizon runs to retirement (at least one year); the investable amount is
    a fraction of savings balances with a floor.

    Raises:
        IncompleteProfileError: if the profile has no date of birth
    """
    if profile.date_of_birth is None:
        raise IncompleteProfileError("Date of birth is required to build an investment profile")

    if as_of is None:
        as_of = date.today()

    current_age = whole_years_between(profile.date_of_birth, as_of)
    savings = emergency_fund_balance(accounts)

    return InvestmentProfile(
        risk_tolerance=profile.risk_tolerance,
        time_horizon_years=max(retirement_age - current_age, 1),
        current_age=current_age,
        retirement_age=retirement_age,
        available_to_invest=max(savings * investable_fraction, minimum_investable),
        investment_goals=list(profile.financial_goals),
    )
