"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from fincoach_gateway.domain.models import (
    Account,
    Category,
    Holding,
    InsightType,
    Priority,
    Transaction,
    TransactionType,
    UserProfile,
)

RiskToleranceLiteral = Literal["conservative", "moderate", "aggressive"]
AccountTypeLiteral = Literal["checking", "savings", "investment", "retirement", "credit_card", "loan"]
InvestmentTypeLiteral = Literal["stock", "bond", "etf", "mutual_fund", "crypto", "other"]


class DomainResponse(BaseModel):
    """Response model populated straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# --- Requests -------------------------------------------------------------


class TransactionSchema(BaseModel):
    """Transaction record as stored by the transaction service"""

    amount: float = Field(..., description="Signed amount; expenses are usually negative")
    description: str = ""
    transaction_type: TransactionType
    transaction_date: date

    def to_domain(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            description=self.description,
            type=self.transaction_type,
            date=self.transaction_date,
        )


class AccountSchema(BaseModel):
    """Account balance snapshot"""

    account_type: AccountTypeLiteral
    current_balance: float = 0.0

    def to_domain(self) -> Account:
        return Account(account_type=self.account_type, current_balance=self.current_balance)


class ProfileSchema(BaseModel):
    """Stored user profile"""

    risk_tolerance: Optional[RiskToleranceLiteral] = None
    financial_goals: List[str] = Field(default_factory=list)
    annual_income: float = Field(0.0, ge=0)
    date_of_birth: Optional[date] = None

    def to_domain(self, default_risk_tolerance: str) -> UserProfile:
        return UserProfile(
            risk_tolerance=self.risk_tolerance or default_risk_tolerance,
            financial_goals=list(self.financial_goals),
            annual_income=self.annual_income,
            date_of_birth=self.date_of_birth,
        )


class HoldingSchema(BaseModel):
    """Investment position"""

    symbol: str = Field(..., min_length=1)
    shares: float = Field(..., ge=0)
    purchase_price: float = Field(..., ge=0)
    current_price: Optional[float] = Field(None, ge=0, description="Defaults to purchase price")
    previous_price: Optional[float] = Field(None, ge=0, description="Prior close, if known")
    investment_type: InvestmentTypeLiteral = "other"

    def to_domain(self) -> Holding:
        return Holding(
            symbol=self.symbol.upper(),
            shares=self.shares,
            purchase_price=self.purchase_price,
            current_price=self.purchase_price if self.current_price is None else self.current_price,
            investment_type=self.investment_type,
            previous_price=self.previous_price,
        )


class CategorizeRequest(BaseModel):
    """Request body for POST /v1/transactions/categorize"""

    transactions: List[TransactionSchema]


class AnalysisRequest(BaseModel):
    """Request body for POST /v1/analysis"""

    transactions: List[TransactionSchema] = Field(default_factory=list)
    accounts: List[AccountSchema] = Field(default_factory=list)
    profile: ProfileSchema = Field(default_factory=ProfileSchema)
    as_of: Optional[date] = None


class RecommendationRequest(BaseModel):
    """Request body for POST /v1/recommendations"""

    profile: ProfileSchema
    accounts: List[AccountSchema] = Field(default_factory=list)
    retirement_age: Optional[int] = Field(None, gt=0, le=120)
    as_of: Optional[date] = None


class AllocationSchema(DomainResponse):
    """Asset allocation in percent"""

    stocks: float = Field(..., ge=0)
    bonds: float = Field(..., ge=0)
    real_estate: float = Field(..., ge=0)
    commodities: float = Field(..., ge=0)
    cash: float = Field(..., ge=0)


class SimpleAllocationRequest(BaseModel):
    """Request body for POST /v1/allocation/simple"""

    risk_tolerance: RiskToleranceLiteral


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/portfolio"""

    holdings: List[HoldingSchema] = Field(default_factory=list)


class GoalProjectionRequest(BaseModel):
    """Request body for POST /v1/goals/projection"""

    current_amount: float = Field(0.0, ge=0)
    target_amount: float = Field(..., gt=0)
    years_to_goal: float = Field(..., le=100)
    expected_return: float = Field(..., gt=-1, le=1, description="Annual return as a fraction, e.g. 0.07")
    monthly_contribution: Optional[float] = Field(
        None, ge=0, description="Defaults to the contribution needed to reach the target"
    )
    as_of: Optional[date] = None


# --- Responses ------------------------------------------------------------


class CategorizedTransactionSchema(TransactionSchema):
    category: Category


class CategorizeResponse(BaseModel):
    """Response for POST /v1/transactions/categorize"""

    transactions: List[CategorizedTransactionSchema]


class MetricsSchema(DomainResponse):
    total_income: float
    total_expenses: float
    net_income: float
    savings_rate: float
    debt_to_income_ratio: float
    emergency_fund_months: float
    monthly_budget_variance: float


class CategorySpendingSchema(DomainResponse):
    amount: float
    percentage: float
    transaction_count: int


class InsightSchema(DomainResponse):
    type: InsightType
    title: str
    description: str
    recommendation: str
    priority: Priority


class AnalysisResponse(BaseModel):
    """Response for POST /v1/analysis"""

    metrics: MetricsSchema
    spending_by_category: Dict[str, CategorySpendingSchema]
    insights: List[InsightSchema]
    transaction_count: int


class InvestmentProfileSchema(DomainResponse):
    risk_tolerance: str
    time_horizon_years: float
    current_age: int
    retirement_age: int
    available_to_invest: float
    investment_goals: List[str]


class RecommendationSchema(DomainResponse):
    allocation: AllocationSchema
    expected_return: float
    risk_level: str
    description: str
    reasoning: List[str]


class RiskAssessmentSchema(DomainResponse):
    risk_score: float
    volatility: float
    risk_level: str
    recommendations: List[str]


class RecommendationResponse(BaseModel):
    """Response for POST /v1/recommendations"""

    recommendation: RecommendationSchema
    risk_assessment: RiskAssessmentSchema
    profile: InvestmentProfileSchema


class SimpleAllocationSchema(DomainResponse):
    """Response for POST /v1/allocation/simple"""

    stocks: int
    bonds: int
    cash: int
    description: str


class PerformanceSchema(DomainResponse):
    total_value: float
    total_gain: float
    total_gain_percentage: float
    day_change: float
    day_change_percentage: float
    diversification_score: float


class PortfolioResponse(BaseModel):
    """Response for POST /v1/portfolio"""

    performance: PerformanceSchema
    allocation_by_type: Dict[str, float]
    total_investments: int


class GoalProjectionSchema(DomainResponse):
    projected_amount: float
    years_to_target: float
    on_track: bool
    projected_completion: date


class GoalProjectionResponse(BaseModel):
    """Response for POST /v1/goals/projection"""

    monthly_contribution_needed: float
    projection: GoalProjectionSchema
