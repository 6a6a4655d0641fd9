"""Documentation gateway pytest fixtures."""

from __future__ import annotations

import json

import pytest

from docs_gateway.models.routes import (
    DocEntry,
    GatewayConfiguration,
    RegistryEntry,
    RouteEntry,
)


@pytest.fixture
def orders_endpoint() -> RegistryEntry:
    """Swagger endpoint with two versions and a version placeholder."""
    return RegistryEntry(
        key="orders",
        versions=[
            DocEntry(version="v1", url="http://svc/v1/swagger.json"),
            DocEntry(version="v2", url="http://svc/v2/swagger.json"),
        ],
        version_placeholder="{version}",
    )


@pytest.fixture
def routes() -> list[RouteEntry]:
    """Route table with versioned, static and foreign routes."""
    return [
        RouteEntry(
            service_key="orders",
            upstream_http_method="GET",
            upstream_path_template="/api/{version}/orders/{everything}",
            downstream_path_template="/{version}/orders/{everything}",
        ),
        RouteEntry(
            service_key="orders",
            upstream_http_method="GET",
            upstream_path_template="/api/orders/status",
            downstream_path_template="/status",
        ),
        RouteEntry(
            service_key="customers",
            upstream_path_template="/api/customers/{everything}",
            downstream_path_template="/customers/{everything}",
        ),
    ]


@pytest.fixture
def configuration(orders_endpoint: RegistryEntry, routes: list[RouteEntry]) -> GatewayConfiguration:
    """Gateway configuration with orders and customers endpoints."""
    customers = RegistryEntry(
        key="customers",
        path_segment="people",
        versions=[DocEntry(version="v1", url="http://customers/swagger.json", name="Customers")],
        host_override="docs.example.com",
    )
    return GatewayConfiguration(routes=routes, endpoints=[orders_endpoint, customers])


@pytest.fixture
def swagger_document() -> str:
    """Swagger 2.0 document as served by the orders service."""
    return json.dumps(
        {
            "swagger": "2.0",
            "info": {"title": "Orders", "version": "v2"},
            "host": "orders.internal:5000",
            "basePath": "/",
            "paths": {
                "/v2/orders/{id}": {
                    "parameters": [{"name": "id", "in": "path", "required": True}],
                    "get": {"operationId": "getOrder"},
                    "delete": {"operationId": "deleteOrder"},
                },
                "/status": {"get": {"operationId": "status"}},
                "/internal/metrics": {"get": {"operationId": "metrics"}},
            },
        }
    )
