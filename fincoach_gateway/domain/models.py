"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Category(str, Enum):
    """Closed spending taxonomy. Declaration order is the match order."""

    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    EDUCATION = "Education"
    SAVINGS = "Savings"
    DEBT = "Debt"
    INCOME = "Income"
    OTHER = "Other"


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    CRITICAL = "critical"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Transaction:
    """Recorded transaction snapshot from the transaction store"""

    amount: float  # signed; expenses are usually negative
    description: str
    type: TransactionType
    date: date


@dataclass(frozen=True)
class Account:
    """Account balance snapshot"""

    account_type: str  # checking, savings, investment, retirement, credit_card, loan
    current_balance: float


@dataclass(frozen=True)
class UserProfile:
    """Stored user profile fields the engine reads"""

    risk_tolerance: str = RiskTolerance.MODERATE.value
    financial_goals: List[str] = field(default_factory=list)
    annual_income: float = 0.0
    date_of_birth: Optional[date] = None


@dataclass(frozen=True)
class FinancialMetrics:
    """Summary ratios over the trailing three-month window"""

    total_income: float
    total_expenses: float
    net_income: float
    savings_rate: float  # percent of income
    debt_to_income_ratio: float  # percent
    emergency_fund_months: float
    monthly_budget_variance: float = 0.0


@dataclass
class CategorySpending:
    """Spending bucket for one category"""

    amount: float = 0.0
    percentage: float = 0.0
    transaction_count: int = 0


# Category name -> bucket. Ordering carries no meaning.
SpendingByCategory = Dict[str, CategorySpending]


@dataclass(frozen=True)
class FinancialInsight:
    """Advisory message produced by a threshold rule"""

    type: InsightType
    title: str
    description: str
    recommendation: str
    priority: Priority


@dataclass(frozen=True)
class InvestmentProfile:
    """Inputs to the allocation engine"""

    risk_tolerance: str
    time_horizon_years: float
    current_age: int
    retirement_age: int
    available_to_invest: float
    investment_goals: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AssetAllocation:
    """Target mix in percent per asset class"""

    stocks: float
    bonds: float
    real_estate: float
    commodities: float
    cash: float

    def total(self) -> float:
        return self.stocks + self.bonds + self.real_estate + self.commodities + self.cash

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class InvestmentRecommendation:
    """Blended allocation plus the explanation shown to the user"""

    allocation: AssetAllocation
    expected_return: float  # annual, as a fraction (0.075 == 7.5%)
    risk_level: str
    description: str
    reasoning: List[str]


@dataclass(frozen=True)
class SimpleAllocation:
    """Three-bucket allocation keyed only on risk tolerance"""

    stocks: int
    bonds: int
    cash: int
    description: str


@dataclass(frozen=True)
class RiskAssessment:
    """Volatility-based risk summary of an allocation"""

    risk_score: float  # 0-100
    volatility: float
    risk_level: str
    recommendations: List[str]


@dataclass(frozen=True)
class Holding:
    """Investment position snapshot"""

    symbol: str
    shares: float
    purchase_price: float
    current_price: float
    investment_type: str = "other"
    previous_price: Optional[float] = None  # prior close, when price history exists


@dataclass(frozen=True)
class PortfolioPerformance:
    """Valuation and gain/loss for a set of holdings"""

    total_value: float
    total_gain: float
    total_gain_percentage: float
    day_change: float
    day_change_percentage: float
    diversification_score: float  # 0-100


@dataclass(frozen=True)
class GoalProjection:
    """Outcome of simulating monthly contributions toward a target"""

    projected_amount: float
    years_to_target: float
    on_track: bool
    projected_completion: date

