"""Prometheus metrics for monitoring analyses, insights and recommendations"""

from typing import Iterable
from prometheus_client import Counter, Histogram

from fincoach_gateway.domain.models import FinancialInsight

# Analysis metrics
analysis_counter = Counter(
    "fincoach_analysis_total",
    "Total financial analyses computed",
)

insight_counter = Counter(
    "fincoach_insights_total",
    "Insights generated",
    ["type", "priority"],  # positive|warning|critical x low|medium|high
)

# Investment metrics
recommendation_counter = Counter(
    "fincoach_recommendation_total",
    "Investment recommendations produced",
    ["risk_level"],  # Low | Medium | High
)

portfolio_evaluation_counter = Counter(
    "fincoach_portfolio_evaluations_total",
    "Portfolio performance evaluations",
)

portfolio_value_histogram = Histogram(
    "fincoach_portfolio_value",
    "Total value of evaluated portfolios",
    buckets=[1_000, 10_000, 50_000, 100_000, 250_000, 1_000_000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(insights: Iterable[FinancialInsight]) -> None:
    """Count an analysis and the mix of insights it produced"""
    analysis_counter.inc()
    for insight in insights:
        insight_counter.labels(type=insight.type.value, priority=insight.priority.value).inc()


def record_recommendation(risk_level: str) -> None:
    recommendation_counter.labels(risk_level=risk_level).inc()


def record_portfolio_evaluation(total_value: float) -> None:
    portfolio_evaluation_counter.inc()
    portfolio_value_histogram.observe(total_value)
