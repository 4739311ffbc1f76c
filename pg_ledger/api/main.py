"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from pg_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from pg_ledger.api.v1 import billing, residents, rooms
from pg_ledger.infrastructure.database.models import Base
from pg_ledger.infrastructure.database.session import engine
from pg_ledger.infrastructure.observability.logging import setup_logging
from pg_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(create_tables: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""
    if create_tables:
        Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="PG Ledger",
        description="Rent dues, arrears and payment recording for PG/hostel residents",
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
    app.include_router(billing.router, prefix="/v1", tags=["billing"])
    app.include_router(residents.router, prefix="/v1", tags=["residents"])
    app.include_router(rooms.router, prefix="/v1", tags=["rooms"])

    return app


app = create_app()
