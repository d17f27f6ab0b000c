"""POST /v1/analysis and /v1/transactions/categorize - spending analysis endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from fincoach_gateway.api.v1.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    CategorizeRequest,
    CategorizeResponse,
    CategorizedTransactionSchema,
    CategorySpendingSchema,
    InsightSchema,
    MetricsSchema,
)
from fincoach_gateway.api.dependencies import get_request_id, get_settings
from fincoach_gateway.config import Settings
from fincoach_gateway.domain.categorizer import categorize_transactions
from fincoach_gateway.domain.insights import generate_insights
from fincoach_gateway.domain.metrics import compute_metrics, emergency_fund_balance
from fincoach_gateway.domain.spending import aggregate_spending
from fincoach_gateway.infrastructure.observability.logging import log_analysis
from fincoach_gateway.infrastructure.observability.metrics import record_analysis

router = APIRouter()


@router.post("/transactions/categorize", response_model=CategorizeResponse)
def categorize_batch(request_body: CategorizeRequest):
    """Tag each transaction with its spending category"""
    pairs = categorize_transactions(t.to_domain() for t in request_body.transactions)
    return CategorizeResponse(
        transactions=[
            CategorizedTransactionSchema(
                amount=txn.amount,
                description=txn.description,
                transaction_type=txn.type,
                transaction_date=txn.date,
                category=category,
            )
            for txn, category in pairs
        ]
    )


@router.post("/analysis", response_model=AnalysisResponse)
def analyze(
    request_body: AnalysisRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute metrics, category breakdown and insights for one user.

    Flow:
    1. Emergency fund = savings account balances
    2. Metrics over the trailing 3 months
    3. Category spending over the trailing month
    4. Ranked insights from both
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        transactions = [t.to_domain() for t in request_body.transactions]
        accounts = [a.to_domain() for a in request_body.accounts]
        profile = request_body.profile.to_domain(config.default_risk_tolerance)

        metrics = compute_metrics(
            transactions,
            emergency_fund_balance=emergency_fund_balance(accounts),
            as_of=request_body.as_of,
        )
        spending = aggregate_spending(transactions, as_of=request_body.as_of)
        insights = generate_insights(metrics, spending, profile)

        duration_ms = (time.time() - start_time) * 1000
        record_analysis(insights)
        log_analysis(request_id, len(transactions), metrics, insights, duration_ms)

        return AnalysisResponse(
            metrics=MetricsSchema.model_validate(metrics),
            spending_by_category={
                name: CategorySpendingSchema.model_validate(bucket) for name, bucket in spending.items()
            },
            insights=[InsightSchema.model_validate(i) for i in insights],
            transaction_count=len(transactions),
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
