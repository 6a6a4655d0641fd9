"""
Endpoint Resolution

Maps a documentation request path of the form /{version}/{key} to the
registered swagger endpoint and the downstream document URL for that version.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import NamedTuple

import structlog

from docs_gateway.errors import MalformedPathError, UnknownServiceKeyError
from docs_gateway.models.routes import RegistryEntry

logger = structlog.get_logger()


class ResolvedEndpoint(NamedTuple):
    """Downstream document URL and the endpoint it belongs to."""

    url: str | None
    endpoint: RegistryEntry


class EndpointInfo(NamedTuple):
    """Version and key segments parsed from a request path."""

    version: str
    key: str


def parse_endpoint_path(path: str) -> EndpointInfo:
    """
    Split a request path into version and key.

    Segments after the key are ignored.

    Raises:
        MalformedPathError: If the path has fewer than two segments after the leading slash
    """
    segments = path.split("/")
    if len(segments) < 3:
        raise MalformedPathError(path)

    return EndpointInfo(version=segments[1], key=segments[2])


class EndpointResolver:
    """
    Resolves documentation request paths against the swagger endpoint registry.

    The path index is built on first use and kept for the lifetime of the
    resolver, so the registry must not change afterwards. When two endpoints
    share a path segment the one registered last wins.
    """

    def __init__(self, endpoints: Sequence[RegistryEntry]):
        """
        Initialize endpoint resolver.

        Args:
            endpoints: Registered swagger endpoints, in registration order
        """
        self._endpoints = endpoints
        self._index: dict[str, RegistryEntry] | None = None
        self._lock = threading.Lock()

    @property
    def index(self) -> dict[str, RegistryEntry]:
        """Mapping of ``/{key_to_path}`` to swagger endpoint."""
        index = self._index
        if index is None:
            with self._lock:
                if self._index is None:
                    self._index = self._build_index()
                index = self._index
        return index

    def _build_index(self) -> dict[str, RegistryEntry]:
        index: dict[str, RegistryEntry] = {}
        for endpoint in self._endpoints:
            path = f"/{endpoint.key_to_path}"
            shadowed = index.get(path)
            if shadowed is not None:
                logger.warning(
                    "Swagger endpoint path collision, last registration wins",
                    path=path,
                    shadowed_key=shadowed.key,
                    key=endpoint.key,
                )
            index[path] = endpoint

        logger.debug("Swagger endpoint index built", endpoints=len(index))
        return index

    def resolve(self, path: str) -> ResolvedEndpoint:
        """
        Resolve a request path to a downstream document URL.

        Args:
            path: Request path of the form /{version}/{key}

        Returns:
            Document URL (None when the version is not registered) and endpoint

        Raises:
            MalformedPathError: If the path does not contain version and key
            UnknownServiceKeyError: If no endpoint is registered for the key
        """
        info = parse_endpoint_path(path)

        endpoint = self.index.get(f"/{info.key}")
        if endpoint is None:
            raise UnknownServiceKeyError(info.key)

        doc = endpoint.find_version(info.version)
        return ResolvedEndpoint(url=doc.url if doc else None, endpoint=endpoint)
