"""
Tests for Endpoint Resolution

Covers path parsing, key lookup, version lookup and the lazily built index.
"""

from __future__ import annotations

import threading
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from docs_gateway.errors import MalformedPathError, UnknownServiceKeyError
from docs_gateway.models.routes import DocEntry, GatewayConfiguration, RegistryEntry
from docs_gateway.routing.resolver import EndpointResolver, parse_endpoint_path


@pytest.fixture
def resolver(configuration: GatewayConfiguration) -> EndpointResolver:
    """Create endpoint resolver for testing."""
    return EndpointResolver(configuration.endpoints)


def test_resolves_version_url(resolver: EndpointResolver) -> None:
    """Version and key select the matching document URL."""
    url, endpoint = resolver.resolve("/v2/orders")

    assert url == "http://svc/v2/swagger.json"
    assert endpoint.key == "orders"


def test_unknown_version_returns_no_url(resolver: EndpointResolver) -> None:
    """Missing version is reported as an empty URL, not an error."""
    url, endpoint = resolver.resolve("/v3/orders")

    assert url is None
    assert endpoint.key == "orders"


def test_resolves_by_path_segment(resolver: EndpointResolver) -> None:
    """Entries are addressed by their path segment, not their key."""
    url, endpoint = resolver.resolve("/v1/people")

    assert url == "http://customers/swagger.json"
    assert endpoint.key == "customers"

    with pytest.raises(UnknownServiceKeyError):
        resolver.resolve("/v1/customers")


def test_unknown_key(resolver: EndpointResolver) -> None:
    """Unregistered key raises UnknownServiceKeyError."""
    with pytest.raises(UnknownServiceKeyError) as exc_info:
        resolver.resolve("/v1/billing")

    assert exc_info.value.key == "billing"


@pytest.mark.parametrize("path", ["/orders", "", "/"])
def test_malformed_path(resolver: EndpointResolver, path: str) -> None:
    """Paths without version and key raise MalformedPathError."""
    with pytest.raises(MalformedPathError) as exc_info:
        resolver.resolve(path)

    assert exc_info.value.path == path


def test_trailing_segments_are_ignored(resolver: EndpointResolver) -> None:
    """Segments after the key do not affect resolution."""
    url, _ = resolver.resolve("/v1/orders/extra")

    assert url == "http://svc/v1/swagger.json"


def test_parse_endpoint_path() -> None:
    """Second segment is the version, third the key."""
    info = parse_endpoint_path("/v1/orders")

    assert info.version == "v1"
    assert info.key == "orders"


def test_path_collision_last_registration_wins() -> None:
    """Two entries with the same path segment resolve to the later one."""
    first = RegistryEntry(
        key="orders-legacy",
        path_segment="orders",
        versions=[DocEntry(version="v1", url="http://legacy/swagger.json")],
    )
    second = RegistryEntry(
        key="orders",
        versions=[DocEntry(version="v1", url="http://svc/swagger.json")],
    )

    with capture_logs() as logs:
        url, endpoint = EndpointResolver([first, second]).resolve("/v1/orders")

    assert endpoint.key == "orders"
    assert url == "http://svc/swagger.json"

    [collision] = [
        e for e in logs if e["event"] == "Swagger endpoint path collision, last registration wins"
    ]
    assert collision["log_level"] == "warning"
    assert collision["path"] == "/orders"
    assert collision["shadowed_key"] == "orders-legacy"
    assert collision["key"] == "orders"


def test_first_matching_version_wins() -> None:
    """Duplicate version labels resolve to the first registration."""
    endpoint = RegistryEntry(
        key="orders",
        versions=[
            DocEntry(version="v1", url="http://first/swagger.json"),
            DocEntry(version="v1", url="http://second/swagger.json"),
        ],
    )

    url, _ = EndpointResolver([endpoint]).resolve("/v1/orders")

    assert url == "http://first/swagger.json"


def test_index_is_built_lazily_once(resolver: EndpointResolver) -> None:
    """Index is built on first resolve and reused afterwards."""
    with patch.object(resolver, "_build_index", wraps=resolver._build_index) as build:
        assert build.call_count == 0

        resolver.resolve("/v1/orders")
        resolver.resolve("/v2/orders")
        resolver.resolve("/v1/people")

        assert build.call_count == 1


def test_concurrent_first_use_builds_single_index(resolver: EndpointResolver) -> None:
    """Concurrent first requests observe the same index."""
    barrier = threading.Barrier(8)
    indexes: list[dict] = []

    def worker() -> None:
        barrier.wait()
        indexes.append(resolver.index)

    with patch.object(resolver, "_build_index", wraps=resolver._build_index) as build:
        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert build.call_count == 1

    assert len(indexes) == 8
    assert all(index is indexes[0] for index in indexes)
