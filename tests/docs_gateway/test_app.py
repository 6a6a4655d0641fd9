"""
Integration tests for the documentation gateway FastAPI application.

Tests document serving, error mapping, the endpoint listing and health.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from docs_gateway.config import DocsGatewaySettings
from docs_gateway.errors import FetchError
from docs_gateway.hooks import DocsGatewayOptions
from docs_gateway.main import create_app
from docs_gateway.models.health import SwaggerEndpointInfo
from docs_gateway.models.routes import GatewayConfiguration
from docs_gateway.routes.docs import swagger_ui_html


@pytest.fixture
def settings() -> DocsGatewaySettings:
    """Settings independent of the environment."""
    return DocsGatewaySettings(GATEWAY_NAME="Test Docs Gateway", ENABLE_METRICS=True)


@pytest.fixture
def fetch(swagger_document: str) -> AsyncMock:
    """Downstream fetch returning the orders swagger document."""
    return AsyncMock(return_value=swagger_document)


@pytest.fixture
def client(
    settings: DocsGatewaySettings, configuration: GatewayConfiguration, fetch: AsyncMock
) -> TestClient:
    """Create test client with a mocked downstream fetch."""
    app = create_app(settings=settings, configuration=configuration)
    app.state.pipeline.fetcher.fetch = fetch
    return TestClient(app)


def test_app_creation(settings: DocsGatewaySettings, configuration: GatewayConfiguration) -> None:
    """FastAPI application is created with the configured title."""
    app = create_app(settings=settings, configuration=configuration)

    assert app.title == "Test Docs Gateway"
    assert app.state.configuration is configuration


def test_serves_rewritten_document(client: TestClient, fetch: AsyncMock) -> None:
    """Document is fetched for the requested version and rewritten."""
    response = client.get("/swagger/docs/v2/orders")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")

    document = response.json()
    assert document["host"] == "testserver"
    assert set(document["paths"]) == {"/api/v2/orders/{id}", "/api/orders/status"}
    fetch.assert_awaited_once_with("http://svc/v2/swagger.json")


def test_response_has_trace_headers(client: TestClient) -> None:
    """Logging middleware adds trace headers."""
    response = client.get("/swagger/docs/v1/orders", headers={"X-Trace-ID": "trace-1"})

    assert response.headers["X-Trace-ID"] == "trace-1"
    assert response.headers["X-Request-ID"] == "trace-1"


def test_trace_id_generated_when_absent(client: TestClient) -> None:
    """Requests without a trace id get a fresh one."""
    first = client.get("/live").headers["X-Trace-ID"]
    second = client.get("/live").headers["X-Trace-ID"]

    assert first
    assert first != second


def test_health_checks_are_logged_at_debug(client: TestClient) -> None:
    """Polling endpoints stay out of info-level request logs."""
    with capture_logs() as logs:
        client.get("/health")
        client.get("/swagger/docs/v1/orders")

    completed = [e["log_level"] for e in logs if e["event"] == "Request completed"]
    assert completed == ["debug", "info"]


@pytest.mark.parametrize(
    ("path", "status_code", "error"),
    [
        ("/swagger/docs/orders", 400, "MalformedPathError"),
        ("/swagger/docs/v1/billing", 404, "UnknownServiceKeyError"),
        ("/swagger/docs/v3/orders", 404, "UnresolvedVersionError"),
    ],
)
def test_resolution_errors(
    client: TestClient, fetch: AsyncMock, path: str, status_code: int, error: str
) -> None:
    """Resolution failures are reported as JSON without fetching."""
    response = client.get(path)

    assert response.status_code == status_code
    assert response.json()["error"] == error
    fetch.assert_not_awaited()


def test_fetch_error_is_bad_gateway(client: TestClient, fetch: AsyncMock) -> None:
    """Downstream failures map to 502 with the attempted URL."""
    fetch.side_effect = FetchError("http://svc/v1/swagger.json", OSError("down"))

    response = client.get("/swagger/docs/v1/orders")

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "FetchError"
    assert "http://svc/v1/swagger.json" in body["detail"]


def test_conflicting_hooks_are_server_error(
    settings: DocsGatewaySettings, configuration: GatewayConfiguration, fetch: AsyncMock
) -> None:
    """Both reconfiguration hooks configured fails the request before fetching."""
    options = DocsGatewayOptions(
        reconfigure_upstream_document=lambda context, document: document,
        reconfigure_upstream_document_async=AsyncMock(),
    )
    app = create_app(settings=settings, configuration=configuration, options=options)
    app.state.pipeline.fetcher.fetch = fetch

    response = TestClient(app).get("/swagger/docs/v1/orders")

    assert response.status_code == 500
    assert response.json()["error"] == "ConfigurationError"
    fetch.assert_not_awaited()


def test_reconfigure_hook_receives_request(
    settings: DocsGatewaySettings, configuration: GatewayConfiguration, fetch: AsyncMock
) -> None:
    """Sync hook gets the FastAPI request and rewrites the document."""

    def add_title(request, document: str) -> str:
        swagger = json.loads(document)
        swagger["info"]["title"] = f"Orders via {request.url.path}"
        return json.dumps(swagger)

    options = DocsGatewayOptions(reconfigure_upstream_document=add_title)
    app = create_app(settings=settings, configuration=configuration, options=options)
    app.state.pipeline.fetcher.fetch = fetch

    response = TestClient(app).get("/swagger/docs/v1/orders")

    assert response.json()["info"]["title"] == "Orders via /swagger/docs/v1/orders"


def test_lists_swagger_endpoints(client: TestClient) -> None:
    """Every endpoint version is listed in registration order."""
    response = client.get("/swagger/endpoints")

    assert response.status_code == 200
    assert response.json() == [
        {"name": "orders v1", "url": "/swagger/docs/v1/orders"},
        {"name": "orders v2", "url": "/swagger/docs/v2/orders"},
        {"name": "Customers", "url": "/swagger/docs/v1/people"},
    ]


def test_swagger_ui_page(client: TestClient) -> None:
    """Swagger UI page offers a top bar dropdown of the endpoint documents."""
    response = client.get("/swagger")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "swagger-ui-standalone-preset.js" in response.text
    assert "SwaggerUIStandalonePreset" in response.text
    assert 'layout: "StandaloneLayout"' in response.text
    assert '{"name": "orders v2", "url": "/swagger/docs/v2/orders"}' in response.text
    assert '{"name": "Customers", "url": "/swagger/docs/v1/people"}' in response.text
    assert "<title>Test Docs Gateway - Swagger UI</title>" in response.text


def test_swagger_ui_html_escapes_endpoint_names() -> None:
    """Endpoint names cannot close the inline script."""
    page = swagger_ui_html(
        "Docs <beta>",
        [SwaggerEndpointInfo(name="</script><b>", url="/swagger/docs/v1/orders")],
    )

    assert "<title>Docs &lt;beta&gt;</title>" in page
    assert "</script><b>" not in page
    assert "<\\/script><b>" in page


def test_health_endpoint(client: TestClient) -> None:
    """Health check reports configuration size."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["gateway"] == "Test Docs Gateway"
    assert data["configuration"] == {
        "swagger_endpoints": 2,
        "document_versions": 3,
        "routes": 3,
        "versioned_endpoints": ["orders"],
    }


def test_readiness_reports_document_versions(client: TestClient) -> None:
    """Configured gateway is ready."""
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"ready": True, "document_versions": 3}


def test_readiness_requires_endpoints(settings: DocsGatewaySettings) -> None:
    """Gateway without swagger endpoints is not ready."""
    app = create_app(settings=settings, configuration=GatewayConfiguration())

    response = TestClient(app).get("/ready")

    assert response.status_code == 503


def test_liveness_endpoint(client: TestClient) -> None:
    """Liveness check returns alive."""
    response = client.get("/live")

    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_metrics_endpoint(client: TestClient) -> None:
    """Document metrics are exported after a request."""
    client.get("/swagger/docs/v1/orders")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "docs_gateway_documents_total" in response.text
