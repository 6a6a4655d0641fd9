"""
Documentation Routing

Route expansion and endpoint resolution for downstream swagger documents.
"""

from __future__ import annotations

from .expander import expand_routes
from .resolver import EndpointInfo, EndpointResolver, ResolvedEndpoint, parse_endpoint_path

__all__ = [
    "EndpointInfo",
    "EndpointResolver",
    "ResolvedEndpoint",
    "expand_routes",
    "parse_endpoint_path",
]
