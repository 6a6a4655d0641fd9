"""
Swagger JSON Transformer

Rewrites Swagger 2.0 and OpenAPI 3.x JSON documents so that their paths and
host describe the gateway's upstream routes instead of the backend service.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import structlog

from docs_gateway.models.routes import RouteEntry

logger = structlog.get_logger()

HTTP_OPERATIONS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

_PLACEHOLDER = re.compile(r"(\{[^}]+\})")


def _trim(path: str) -> str:
    path = path if path.startswith("/") else f"/{path}"
    return path.rstrip("/") or "/"


@dataclass
class _RouteMatcher:
    """Compiled downstream template of one route."""

    route: RouteEntry
    pattern: re.Pattern[str]
    placeholders: list[str]

    @classmethod
    def compile(cls, route: RouteEntry) -> _RouteMatcher:
        template = route.downstream_path_template
        virtual_directory = route.virtual_directory
        if virtual_directory:
            prefix = _trim(virtual_directory)
            if prefix != "/" and template.lower().startswith(prefix.lower()):
                template = template[len(prefix):]
        template = _trim(template)

        tokens = _PLACEHOLDER.split(template)
        placeholders: list[str] = []
        regex = ""
        for i, token in enumerate(tokens):
            if not _PLACEHOLDER.fullmatch(token):
                regex += re.escape(token)
                continue
            # trailing placeholder swallows the rest of the path
            is_last = i == len(tokens) - 2 and tokens[-1] == ""
            regex += f"(?P<p{len(placeholders)}>{'.+' if is_last else '[^/]+'})"
            placeholders.append(token)

        return cls(route, re.compile(regex, re.IGNORECASE), placeholders)

    def accepts(self, method: str) -> bool:
        expected = self.route.upstream_http_method
        return not expected or any(m.lower() == method.lower() for m in expected)

    def upstream_path(self, downstream_path: str) -> str | None:
        match = self.pattern.fullmatch(downstream_path)
        if match is None:
            return None

        upstream = self.route.upstream_path_template
        for i, placeholder in enumerate(self.placeholders):
            upstream = upstream.replace(placeholder, match.group(f"p{i}"))
        return _trim(upstream)


class SwaggerJsonTransformer:
    """
    Default document transformer for JSON swagger documents.

    Operations that no route exposes are removed. Documents that are not
    JSON objects are passed through unchanged.
    """

    def transform(self, document: str, routes: Sequence[RouteEntry], host: str) -> str:
        """Rewrite paths and host of a swagger document."""
        try:
            swagger = json.loads(document)
        except json.JSONDecodeError as e:
            logger.warning("Downstream document is not JSON, passing through", error=str(e))
            return document

        if not isinstance(swagger, dict):
            logger.warning("Downstream document is not a JSON object, passing through")
            return document

        matchers = [_RouteMatcher.compile(route) for route in routes]
        base_path = self._base_path(swagger)

        paths = swagger.get("paths")
        if not isinstance(paths, dict):
            paths = {}
        swagger["paths"] = self._transform_paths(paths, matchers, base_path)
        self._set_host(swagger, host)

        return json.dumps(swagger, ensure_ascii=False)

    def _base_path(self, swagger: dict[str, Any]) -> str:
        if "swagger" in swagger:
            return swagger.get("basePath") or ""

        servers = swagger.get("servers") or []
        if servers and isinstance(servers[0], dict):
            return urlsplit(servers[0].get("url", "")).path
        return ""

    def _transform_paths(
        self,
        paths: dict[str, Any],
        matchers: list[_RouteMatcher],
        base_path: str,
    ) -> dict[str, Any]:
        upstream_paths: dict[str, Any] = {}

        for path, item in paths.items():
            if not isinstance(item, dict):
                continue

            downstream_path = _trim(base_path.rstrip("/") + path)
            shared = {k: v for k, v in item.items() if k not in HTTP_OPERATIONS}

            for method, operation in item.items():
                if method not in HTTP_OPERATIONS:
                    continue

                upstream_path = self._match(matchers, downstream_path, method)
                if upstream_path is None:
                    continue

                upstream_item = upstream_paths.setdefault(upstream_path, dict(shared))
                upstream_item[method] = operation

        return upstream_paths

    def _match(self, matchers: list[_RouteMatcher], path: str, method: str) -> str | None:
        for matcher in matchers:
            if not matcher.accepts(method):
                continue
            upstream_path = matcher.upstream_path(path)
            if upstream_path is not None:
                return upstream_path
        return None

    def _set_host(self, swagger: dict[str, Any], host: str) -> None:
        if "swagger" in swagger:
            swagger["host"] = host
            swagger.pop("basePath", None)
            return

        servers = swagger.get("servers") or []
        scheme = "http"
        if servers and isinstance(servers[0], dict):
            scheme = urlsplit(servers[0].get("url", "")).scheme or scheme
        swagger["servers"] = [{"url": f"{scheme}://{host}"}]
