"""
Documentation Gateway - FastAPI Application

Main application entry point for the documentation gateway.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from docs_gateway.config import DocsGatewaySettings, settings as default_settings
from docs_gateway.fetcher import DocumentFetcher
from docs_gateway.hooks import DocsGatewayOptions
from docs_gateway.loader import load_configuration
from docs_gateway.middleware.cors import setup_cors
from docs_gateway.middleware.logging import logging_middleware
from docs_gateway.middleware.metrics import metrics_middleware
from docs_gateway.models.routes import GatewayConfiguration
from docs_gateway.monitoring.metrics import get_metrics_registry
from docs_gateway.pipeline import DocumentPipeline
from docs_gateway.routes import health
from docs_gateway.routes.docs import create_docs_router, register_exception_handlers
from docs_gateway.transformation.base import DocumentTransformer


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger = structlog.get_logger()
    settings = app.state.settings

    logger.info(
        "Starting documentation gateway",
        version=settings.GATEWAY_VERSION,
        name=settings.GATEWAY_NAME,
        endpoints=len(app.state.configuration.endpoints),
        routes=len(app.state.configuration.routes),
    )

    try:
        yield
    finally:
        logger.info("Shutting down documentation gateway")


def create_app(
    settings: DocsGatewaySettings | None = None,
    configuration: GatewayConfiguration | None = None,
    transformer: DocumentTransformer | None = None,
    options: DocsGatewayOptions | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Gateway settings, defaults to the environment-based settings
        configuration: Routes and swagger endpoints, loaded from
            ``settings.CONFIGURATION_FILE`` when omitted
        transformer: Document transformer, defaults to SwaggerJsonTransformer
        options: Downstream headers and reconfiguration hooks
    """
    settings = settings or default_settings
    if configuration is None:
        configuration = load_configuration(settings.CONFIGURATION_FILE)

    if options is None:
        options = DocsGatewayOptions(downstream_docs_headers=dict(settings.DOWNSTREAM_DOCS_HEADERS))

    app = FastAPI(
        title=settings.GATEWAY_NAME,
        description="Unified swagger documentation for the services behind the API gateway",
        version=settings.GATEWAY_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Routes and endpoints are read-only after this point
    app.state.settings = settings
    app.state.configuration = configuration
    app.state.pipeline = DocumentPipeline(
        configuration,
        transformer=transformer,
        options=options,
        fetcher=DocumentFetcher(
            headers=options.downstream_docs_headers,
            timeout=settings.REQUEST_TIMEOUT,
        ),
    )

    setup_cors(app, settings)

    @app.middleware("http")
    async def add_logging_middleware(request, call_next):
        return await logging_middleware(request, call_next)

    if settings.ENABLE_METRICS:
        @app.middleware("http")
        async def add_metrics_middleware(request, call_next):
            return await metrics_middleware(request, call_next)

        @app.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            return Response(
                content=generate_latest(get_metrics_registry()),
                media_type=CONTENT_TYPE_LATEST,
            )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(create_docs_router(settings), tags=["documentation"])

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docs_gateway.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level=default_settings.LOG_LEVEL.lower(),
        access_log=True,
    )
