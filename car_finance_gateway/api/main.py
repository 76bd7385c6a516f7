"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from car_finance_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from car_finance_gateway.api.v1 import applications
from car_finance_gateway.api.v1.schemas import HealthResponse
from car_finance_gateway.config import settings
from car_finance_gateway.domain.exceptions import StorageUnavailableError
from car_finance_gateway.infrastructure.observability.logging import setup_logging
from car_finance_gateway.infrastructure.storage.factory import get_store
from car_finance_gateway.infrastructure.storage.store import ApplicationStore
from car_finance_gateway.tools.mcp_server import mcp

# Setup structured logging
setup_logging(settings.log_level)


def log_startup_summary(store: ApplicationStore) -> None:
    """Report storage state once at boot; an unreadable store is logged, not fatal"""
    try:
        count = len(store.load())
    except StorageUnavailableError as e:
        logging.warning(f"Data store not accessible: {e}", extra={"medium": store.medium.name})
        return

    logging.info(
        "Car financing gateway ready",
        extra={
            "medium": store.medium.name,
            "applications": count,
            "host": settings.host,
            "port": settings.port,
            "tools": ["get_car_financing_data", "add_car_financing_data"],
        },
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    # Stateless: each MCP request is independent, no session handshake required
    mcp_app = mcp.http_app(path="/mcp", stateless_http=True, json_response=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_startup_summary(get_store())
        async with mcp_app.lifespan(app):
            yield

    app = FastAPI(
        title="Car Finance Gateway",
        description="Finance application data tools for the car sales agent",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    def health_check(store: ApplicationStore = Depends(get_store)):
        try:
            count = len(store.load())
        except StorageUnavailableError:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "degraded",
                    "service": settings.service_name,
                    "storage": store.medium.name,
                    "applications": 0,
                },
            )
        return HealthResponse(
            status="ok",
            service=settings.service_name,
            storage=store.medium.name,
            applications=count,
        )

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(applications.router, prefix="/v1", tags=["applications"])

    # MCP streamable HTTP transport; mounted last so the routes above win
    app.mount("/", mcp_app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
