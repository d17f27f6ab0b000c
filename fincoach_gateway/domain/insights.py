"""Rule-based advisory insights over metrics and category spending"""

from dataclasses import dataclass
from typing import Callable, List, Optional
from fincoach_gateway.domain.models import (
    Category,
    FinancialInsight,
    FinancialMetrics,
    InsightType,
    Priority,
    SpendingByCategory,
    UserProfile,
)

PRIORITY_WEIGHT = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


@dataclass(frozen=True)
class InsightRule:
    """
    One threshold rule.

    `value` extracts the figure the rule looks at (None when the rule does not
    apply, e.g. a category with no spending). `predicate` decides on that
    figure. The description template receives it as `{value:.1f}`.
    """

    name: str
    value: Callable[[FinancialMetrics, SpendingByCategory], Optional[float]]
    predicate: Callable[[float], bool]
    type: InsightType
    priority: Priority
    title: str
    description: str
    recommendation: str

    def evaluate(self, metrics: FinancialMetrics, spending: SpendingByCategory) -> Optional[FinancialInsight]:
        value = self.value(metrics, spending)
        if value is None or not self.predicate(value):
            return None
        return FinancialInsight(
            type=self.type,
            title=self.title,
            description=self.description.format(value=value),
            recommendation=self.recommendation,
            priority=self.priority,
        )


def _savings_rate(metrics: FinancialMetrics, spending: SpendingByCategory) -> float:
    return metrics.savings_rate


def _emergency_fund(metrics: FinancialMetrics, spending: SpendingByCategory) -> float:
    return metrics.emergency_fund_months


def _debt_to_income(metrics: FinancialMetrics, spending: SpendingByCategory) -> float:
    return metrics.debt_to_income_ratio


def _category_share(category: Category) -> Callable[[FinancialMetrics, SpendingByCategory], Optional[float]]:
    def share(metrics: FinancialMetrics, spending: SpendingByCategory) -> Optional[float]:
        bucket = spending.get(category.value)
        return bucket.percentage if bucket is not None else None

    return share


# Evaluation order. Within a family the predicates are mutually exclusive;
# families are independent and can all fire.
INSIGHT_RULES: List[InsightRule] = [
    # Savings rate
    InsightRule(
        name="savings_rate_low",
        value=_savings_rate,
        predicate=lambda rate: rate < 10,
        type=InsightType.CRITICAL,
        priority=Priority.HIGH,
        title="Low Savings Rate",
        description="Your current savings rate is {value:.1f}%, which is below the recommended 20%.",
        recommendation=(
            "Consider reducing discretionary spending and automating your savings "
            "to reach at least 20% savings rate."
        ),
    ),
    InsightRule(
        name="savings_rate_moderate",
        value=_savings_rate,
        predicate=lambda rate: 10 <= rate < 20,
        type=InsightType.WARNING,
        priority=Priority.MEDIUM,
        title="Moderate Savings Rate",
        description="Your savings rate of {value:.1f}% is good, but could be improved.",
        recommendation="Try to increase your savings rate to 20% or higher for better financial security.",
    ),
    InsightRule(
        name="savings_rate_excellent",
        value=_savings_rate,
        predicate=lambda rate: rate >= 20,
        type=InsightType.POSITIVE,
        priority=Priority.LOW,
        title="Excellent Savings Rate",
        description="Your savings rate of {value:.1f}% is excellent!",
        recommendation="Keep up the great work! Consider investing your excess savings for long-term growth.",
    ),
    # Emergency fund
    InsightRule(
        name="emergency_fund_insufficient",
        value=_emergency_fund,
        predicate=lambda months: months < 3,
        type=InsightType.CRITICAL,
        priority=Priority.HIGH,
        title="Insufficient Emergency Fund",
        description="Your emergency fund covers only {value:.1f} months of expenses.",
        recommendation=(
            "Build your emergency fund to cover 3-6 months of expenses "
            "before focusing on other investments."
        ),
    ),
    InsightRule(
        name="emergency_fund_growing",
        value=_emergency_fund,
        predicate=lambda months: 3 <= months < 6,
        type=InsightType.WARNING,
        priority=Priority.MEDIUM,
        title="Emergency Fund Needs Growth",
        description="Your emergency fund covers {value:.1f} months of expenses.",
        recommendation="Consider building your emergency fund to 6 months of expenses for better security.",
    ),
    # Debt-to-income
    InsightRule(
        name="debt_to_income_high",
        value=_debt_to_income,
        predicate=lambda ratio: ratio > 40,
        type=InsightType.CRITICAL,
        priority=Priority.HIGH,
        title="High Debt-to-Income Ratio",
        description="Your debt-to-income ratio of {value:.1f}% is concerning.",
        recommendation="Focus on debt reduction strategies like the debt avalanche or snowball method.",
    ),
    InsightRule(
        name="debt_to_income_moderate",
        value=_debt_to_income,
        predicate=lambda ratio: 20 < ratio <= 40,
        type=InsightType.WARNING,
        priority=Priority.MEDIUM,
        title="Moderate Debt Load",
        description="Your debt-to-income ratio of {value:.1f}% could be improved.",
        recommendation="Consider accelerating debt payments to reduce your debt burden.",
    ),
    # Category shares
    InsightRule(
        name="housing_share_high",
        value=_category_share(Category.HOUSING),
        predicate=lambda share: share > 30,
        type=InsightType.WARNING,
        priority=Priority.MEDIUM,
        title="High Housing Costs",
        description="Housing costs represent {value:.1f}% of your spending.",
        recommendation=(
            "Consider ways to reduce housing costs or increase income, "
            "as the recommended limit is 30%."
        ),
    ),
    InsightRule(
        name="food_share_high",
        value=_category_share(Category.FOOD),
        predicate=lambda share: share > 15,
        type=InsightType.WARNING,
        priority=Priority.LOW,
        title="High Food Spending",
        description="Food expenses represent {value:.1f}% of your spending.",
        recommendation="Consider meal planning and cooking at home more often to reduce food costs.",
    ),
]


def generate_insights(
    metrics: FinancialMetrics,
    spending_by_category: SpendingByCategory,
    profile: UserProfile | None = None,
    rules: List[InsightRule] | None = None,
) -> List[FinancialInsight]:
    """
    Evaluate every rule and rank the resulting insights.

    Ranking is by priority (high, medium, low). sorted() is stable, so
    insights of equal priority keep the order their rules were evaluated in.
    The profile is accepted for callers that pass it along; no current rule
    reads it.
    """
    insights = []
    for rule in INSIGHT_RULES if rules is None else rules:
        insight = rule.evaluate(metrics, spending_by_category)
        if insight is not None:
            insights.append(insight)

    return sorted(insights, key=lambda i: PRIORITY_WEIGHT[i.priority], reverse=True)
