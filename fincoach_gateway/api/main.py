"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fincoach_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fincoach_gateway.api.v1 import analysis, investments, portfolio
from fincoach_gateway.infrastructure.observability.logging import setup_logging
from fincoach_gateway.config import settings


def create_app(log_level: str | None = None) -> FastAPI:
    """Create and configure FastAPI application (log_level defaults to settings)"""
    # Setup structured logging
    setup_logging(log_level or settings.log_level)

    app = FastAPI(
        title="FinCoach Gateway",
        description="Personal finance analytics: spending insights, allocations and portfolio evaluation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(investments.router, prefix="/v1", tags=["investments"])
    app.include_router(portfolio.router, prefix="/v1", tags=["portfolio"])

    return app


app = create_app()
