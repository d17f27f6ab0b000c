"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable
from pythonjsonlogger import jsonlogger

from fincoach_gateway.config import settings
from fincoach_gateway.domain.models import FinancialInsight, FinancialMetrics, InvestmentRecommendation


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    request_id: str,
    transaction_count: int,
    metrics: FinancialMetrics,
    insights: Iterable[FinancialInsight],
    duration_ms: float,
) -> None:
    """Log structured analysis outcome (ratios only, never raw transactions)"""
    insights = list(insights)
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "transaction_count": transaction_count,
            "savings_rate": round(metrics.savings_rate, 1),
            "debt_to_income_ratio": round(metrics.debt_to_income_ratio, 1),
            "insight_count": len(insights),
            "critical_insights": sum(1 for i in insights if i.type == "critical"),
            "duration_ms": duration_ms,
        },
    )


def log_recommendation(
    request_id: str,
    recommendation: InvestmentRecommendation,
    risk_score: float,
    duration_ms: float,
) -> None:
    """Log structured recommendation outcome"""
    logging.info(
        "Recommendation completed",
        extra={
            "request_id": request_id,
            "step": "recommendation_complete",
            "risk_level": recommendation.risk_level,
            "expected_return": round(recommendation.expected_return, 4),
            "risk_score": round(risk_score, 1),
            "duration_ms": duration_ms,
        },
    )
