"""POST /v1/recommendations and /v1/allocation/* - allocation endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from fincoach_gateway.api.v1.schemas import (
    AllocationSchema,
    InvestmentProfileSchema,
    RecommendationRequest,
    RecommendationResponse,
    RecommendationSchema,
    RiskAssessmentSchema,
    SimpleAllocationRequest,
    SimpleAllocationSchema,
)
from fincoach_gateway.api.dependencies import get_request_id, get_settings
from fincoach_gateway.config import Settings
from fincoach_gateway.domain.allocation import (
    assess_risk,
    build_investment_profile,
    recommend,
    simple_allocation,
)
from fincoach_gateway.domain.exceptions import IncompleteProfileError
from fincoach_gateway.domain.models import AssetAllocation
from fincoach_gateway.infrastructure.observability.logging import log_recommendation
from fincoach_gateway.infrastructure.observability.metrics import record_recommendation

router = APIRouter()


@router.post("/recommendations", response_model=RecommendationResponse)
def create_recommendation(
    request_body: RecommendationRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Recommend a blended asset allocation for a user.

    Flow:
    1. Derive age, horizon and investable amount from profile + accounts
    2. Blend goal-based and age-based allocations
    3. Assess the blended allocation's risk
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        investment_profile = build_investment_profile(
            request_body.profile.to_domain(config.default_risk_tolerance),
            [a.to_domain() for a in request_body.accounts],
            as_of=request_body.as_of,
            retirement_age=request_body.retirement_age or config.default_retirement_age,
            investable_fraction=config.investable_savings_fraction,
            minimum_investable=config.minimum_investable_amount,
        )
        recommendation = recommend(investment_profile)
        risk = assess_risk(recommendation.allocation)

        duration_ms = (time.time() - start_time) * 1000
        record_recommendation(recommendation.risk_level)
        log_recommendation(request_id, recommendation, risk.risk_score, duration_ms)

        return RecommendationResponse(
            recommendation=RecommendationSchema.model_validate(recommendation),
            risk_assessment=RiskAssessmentSchema.model_validate(risk),
            profile=InvestmentProfileSchema.model_validate(investment_profile),
        )

    except IncompleteProfileError as e:
        logging.warning(f"Incomplete profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/allocation/risk", response_model=RiskAssessmentSchema)
def assess_allocation_risk(request_body: AllocationSchema):
    """Volatility-based risk score for an arbitrary allocation"""
    allocation = AssetAllocation(**request_body.model_dump())
    return RiskAssessmentSchema.model_validate(assess_risk(allocation))


@router.post("/allocation/simple", response_model=SimpleAllocationSchema)
def quick_allocation(request_body: SimpleAllocationRequest):
    """Three-bucket allocation from risk tolerance alone"""
    return SimpleAllocationSchema.model_validate(simple_allocation(request_body.risk_tolerance))
