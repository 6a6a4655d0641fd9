"""
Route Expansion

Selects the routes documented by a swagger endpoint and expands routes whose
templates reference the endpoint's version placeholder into one route per
registered version.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from docs_gateway.models.routes import RegistryEntry, RouteEntry

logger = structlog.get_logger()


def expand_routes(entry: RegistryEntry, routes: Iterable[RouteEntry]) -> list[RouteEntry]:
    """
    Build the route set used to annotate a swagger endpoint's document.

    Placeholder replacement is plain substring substitution in both path
    templates. Routes without the placeholder are returned once, followed by
    the expanded routes grouped by original route, then by version order.

    Args:
        entry: Swagger endpoint registration
        routes: Full gateway route table

    Returns:
        Routes for ``entry.key``, expanded per version. Empty if none match.
    """
    key_routes = [route for route in routes if route.service_key == entry.key]

    placeholder = entry.version_placeholder
    if not placeholder or not placeholder.strip():
        return key_routes

    static_routes = [route for route in key_routes if not route.contains(placeholder)]
    versioned_routes = [route for route in key_routes if route.contains(placeholder)]

    expanded = list(static_routes)
    for route in versioned_routes:
        expanded.extend(route.with_version(placeholder, doc.version) for doc in entry.versions)

    logger.debug(
        "Routes expanded",
        key=entry.key,
        static=len(static_routes),
        versioned=len(versioned_routes),
        versions=len(entry.versions),
    )

    return expanded
