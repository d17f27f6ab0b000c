"""POST /v1/portfolio and /v1/goals/projection - holdings and goal endpoints"""

from fastapi import APIRouter

from fincoach_gateway.api.v1.schemas import (
    GoalProjectionRequest,
    GoalProjectionResponse,
    GoalProjectionSchema,
    PerformanceSchema,
    PortfolioRequest,
    PortfolioResponse,
)
from fincoach_gateway.domain.portfolio import (
    allocation_by_type,
    monthly_contribution_needed,
    performance,
    project_goal,
)
from fincoach_gateway.infrastructure.observability.metrics import record_portfolio_evaluation

router = APIRouter()


@router.post("/portfolio", response_model=PortfolioResponse)
def evaluate_portfolio(request_body: PortfolioRequest):
    """
    Value holdings and break them down by investment type.

    Holdings without a current price are valued at purchase price.
    """
    holdings = [h.to_domain() for h in request_body.holdings]
    result = performance(holdings)
    record_portfolio_evaluation(result.total_value)

    return PortfolioResponse(
        performance=PerformanceSchema.model_validate(result),
        allocation_by_type=allocation_by_type(holdings),
        total_investments=len(holdings),
    )


@router.post("/goals/projection", response_model=GoalProjectionResponse)
def project_savings_goal(request_body: GoalProjectionRequest):
    """
    Contribution needed for a goal, and where that (or a given) contribution lands.
    """
    needed = monthly_contribution_needed(
        request_body.current_amount,
        request_body.target_amount,
        request_body.years_to_goal,
        request_body.expected_return,
    )
    contribution = needed if request_body.monthly_contribution is None else request_body.monthly_contribution

    projection = project_goal(
        request_body.current_amount,
        max(contribution, 0.0),
        request_body.expected_return,
        request_body.target_amount,
        as_of=request_body.as_of,
    )

    return GoalProjectionResponse(
        monthly_contribution_needed=needed,
        projection=GoalProjectionSchema.model_validate(projection),
    )
