"""
Documentation Gateway Errors

Request-scoped failures raised while resolving, fetching and rewriting a
downstream document. Each error knows the HTTP status it maps to.
"""

from __future__ import annotations


class DocsGatewayError(Exception):
    """Base exception for documentation gateway errors."""

    status_code: int = 500


class MalformedPathError(DocsGatewayError):
    """Request path is not of the form /{version}/{key}."""

    status_code = 400

    def __init__(self, path: str) -> None:
        """Initialize with the offending request path."""
        self.path = path
        super().__init__(f"Path '{path}' does not match /{{version}}/{{key}}")


class UnknownServiceKeyError(DocsGatewayError):
    """No swagger endpoint is registered for the requested key."""

    status_code = 404

    def __init__(self, key: str) -> None:
        """Initialize with the requested service key."""
        self.key = key
        super().__init__(f"No swagger endpoint registered for key '{key}'")


class UnresolvedVersionError(DocsGatewayError):
    """Swagger endpoint exists but has no document for the requested version."""

    status_code = 404

    def __init__(self, key: str, version: str) -> None:
        """Initialize with the service key and requested version."""
        self.key = key
        self.version = version
        super().__init__(f"Swagger endpoint '{key}' has no version '{version}'")


class FetchError(DocsGatewayError):
    """Downstream document could not be fetched."""

    status_code = 502

    def __init__(self, url: str, cause: Exception) -> None:
        """
        Initialize fetch error.

        Args:
            url: Downstream document URL that was requested
            cause: Underlying transport or status error
        """
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch '{url}': {cause}")


class ConfigurationError(DocsGatewayError):
    """Gateway is configured in a way that cannot be served."""

    status_code = 500
