"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from sprint_pricing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sprint_pricing.api.v1 import admin, deliverables, pricing, sprints
from sprint_pricing.infrastructure.observability.logging import setup_logging
from sprint_pricing.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Sprint Pricing Service",
        description="Points-based pricing for sprint drafts and packages",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(pricing.router, prefix="/v1", tags=["pricing"])
    app.include_router(deliverables.router, prefix="/v1", tags=["deliverables"])
    app.include_router(sprints.router, prefix="/v1", tags=["sprint-drafts"])
    app.include_router(admin.router, prefix="/v1", tags=["admin"])

    return app


app = create_app()
