"""
Documentation Endpoints

Serves rewritten downstream documents, the list of available documents and
a Swagger UI page selecting between them.
"""

from __future__ import annotations

import html
import json

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from docs_gateway.config import DocsGatewaySettings
from docs_gateway.errors import DocsGatewayError
from docs_gateway.models.health import SwaggerEndpointInfo
from docs_gateway.models.routes import GatewayConfiguration
from docs_gateway.pipeline import DocumentPipeline

logger = structlog.get_logger()

SWAGGER_UI_CDN = "https://cdn.jsdelivr.net/npm/swagger-ui-dist@5"

_SWAGGER_UI_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<link type="text/css" rel="stylesheet" href="{cdn}/swagger-ui.css">
</head>
<body>
<div id="swagger-ui"></div>
<script src="{cdn}/swagger-ui-bundle.js"></script>
<script src="{cdn}/swagger-ui-standalone-preset.js"></script>
<script>
window.ui = SwaggerUIBundle({{
    urls: {urls},
    dom_id: "#swagger-ui",
    deepLinking: true,
    presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
    layout: "StandaloneLayout",
}});
</script>
</body>
</html>
"""


def list_swagger_endpoints(
    configuration: GatewayConfiguration, docs_path_prefix: str
) -> list[SwaggerEndpointInfo]:
    """
    List every registered document version in registration order.

    Args:
        configuration: Routes and swagger endpoints
        docs_path_prefix: Path prefix documents are served under

    Returns:
        Display name and gateway URL per endpoint version
    """
    prefix = docs_path_prefix.rstrip("/")
    return [
        SwaggerEndpointInfo(
            name=doc.name or f"{endpoint.key} {doc.version}",
            url=f"{prefix}/{doc.version}/{endpoint.key_to_path}",
        )
        for endpoint in configuration.endpoints
        for doc in endpoint.versions
    ]


def swagger_ui_html(title: str, endpoints: list[SwaggerEndpointInfo]) -> str:
    """Render a Swagger UI page whose top bar selects between ``endpoints``."""
    urls = json.dumps([endpoint.model_dump() for endpoint in endpoints])
    return _SWAGGER_UI_TEMPLATE.format(
        title=html.escape(title),
        cdn=SWAGGER_UI_CDN,
        urls=urls.replace("</", "<\\/"),
    )


def create_docs_router(settings: DocsGatewaySettings) -> APIRouter:
    """Build the documentation router for the configured paths."""
    router = APIRouter()
    docs_prefix = settings.DOCS_PATH_PREFIX.rstrip("/")
    ui_path = settings.UI_PATH.rstrip("/")

    @router.get(f"{docs_prefix}/{{doc_path:path}}", summary="Rewritten downstream document")
    async def get_document(doc_path: str, request: Request) -> Response:
        """
        Serve the upstream view of a downstream swagger document.

        The path after the docs prefix has the form {version}/{key}.
        """
        pipeline: DocumentPipeline = request.app.state.pipeline
        host = request.headers.get("host") or request.url.netloc

        content = await pipeline.handle(f"/{doc_path}", host, request)
        return Response(content=content, media_type="application/json")

    @router.get(
        f"{ui_path}/endpoints",
        response_model=list[SwaggerEndpointInfo],
        summary="Available documents",
    )
    async def get_swagger_endpoints(request: Request) -> list[SwaggerEndpointInfo]:
        """List documents selectable in the Swagger UI."""
        return list_swagger_endpoints(request.app.state.configuration, docs_prefix)

    @router.get(ui_path, response_class=HTMLResponse, include_in_schema=False)
    async def swagger_ui(request: Request) -> HTMLResponse:
        """Swagger UI with one dropdown entry per document version."""
        endpoints = list_swagger_endpoints(request.app.state.configuration, docs_prefix)
        return HTMLResponse(swagger_ui_html(f"{settings.GATEWAY_NAME} - Swagger UI", endpoints))

    return router


def register_exception_handlers(app: FastAPI) -> None:
    """Report documentation gateway errors as JSON responses."""

    @app.exception_handler(DocsGatewayError)
    async def docs_gateway_error_handler(request: Request, exc: DocsGatewayError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )
