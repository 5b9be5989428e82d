"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fio_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fio_gateway.api.v1 import cursor, statements, transactions
from fio_gateway.infrastructure.observability.logging import setup_logging
from fio_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Fio Gateway",
        description="Statements, exports and download cursors of a Fio bank account",
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
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(statements.router, prefix="/v1", tags=["statements"])
    app.include_router(cursor.router, prefix="/v1", tags=["cursor"])

    return app


app = create_app()
