"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from agrilend_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from agrilend_gateway.api.v1 import applications, assessments, decision, eligibility, portfolio
from agrilend_gateway.infrastructure.observability.logging import setup_logging
from agrilend_gateway.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="AgriLend Gateway",
        description="Credit risk scoring and loan underwriting decisions for farmer loans",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first: request ID is set before metrics are recorded
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(eligibility.router, prefix="/v1", tags=["eligibility"])
    app.include_router(applications.router, prefix="/v1", tags=["applications"])
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])
    app.include_router(assessments.router, prefix="/v1", tags=["assessments"])
    app.include_router(portfolio.router, prefix="/v1", tags=["portfolio"])

    return app


app = create_app()
