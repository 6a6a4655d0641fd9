"""
Document Pipeline

Resolves a documentation request, fetches the downstream document, rewrites
it for the expanded route set and applies the application's reconfiguration
hook.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

import structlog

from docs_gateway.errors import DocsGatewayError, UnresolvedVersionError
from docs_gateway.fetcher import DocumentFetcher
from docs_gateway.hooks import DocsGatewayOptions
from docs_gateway.models.routes import GatewayConfiguration
from docs_gateway.monitoring.metrics import DOCUMENTS_SERVED, FETCH_DURATION
from docs_gateway.routing.expander import expand_routes
from docs_gateway.routing.resolver import EndpointResolver, parse_endpoint_path
from docs_gateway.transformation.base import DocumentTransformer
from docs_gateway.transformation.swagger import SwaggerJsonTransformer

logger = structlog.get_logger()


class PipelineStage(str, Enum):
    """Stages a documentation request passes through."""

    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    EXPANDING = "expanding"
    TRANSFORMING = "transforming"
    HOOKING = "hooking"
    DONE = "done"
    FAILED = "failed"


class DocumentPipeline:
    """
    Serve rewritten swagger documents for documentation requests.

    Stages run strictly in order for each request. Nothing is retried or
    cached, and cancellation of the calling task is never caught.
    """

    def __init__(
        self,
        configuration: GatewayConfiguration,
        transformer: DocumentTransformer | None = None,
        options: DocsGatewayOptions | None = None,
        fetcher: DocumentFetcher | None = None,
    ):
        """
        Initialize document pipeline.

        Args:
            configuration: Routes and swagger endpoints
            transformer: Document transformer, defaults to SwaggerJsonTransformer
            options: Downstream headers and reconfiguration hooks
            fetcher: Document fetcher, defaults to one using the option headers
        """
        self.configuration = configuration
        self.transformer = transformer or SwaggerJsonTransformer()
        self.options = options or DocsGatewayOptions()
        self.fetcher = fetcher or DocumentFetcher(headers=self.options.downstream_docs_headers)
        self.resolver = EndpointResolver(configuration.endpoints)

    async def handle(self, request_path: str, request_host: str, context: Any = None) -> str:
        """
        Produce the upstream document for a request path.

        Args:
            request_path: Path of the form /{version}/{key}
            request_host: Host of the inbound request
            context: Request context passed to the reconfiguration hook

        Returns:
            Rewritten document text

        Raises:
            DocsGatewayError: Subclass describing the failed stage

        Unexpected errors from transformers or hooks are logged with the
        failing stage and re-raised unchanged.
        """
        stage = PipelineStage.IDLE
        log = logger.bind(path=request_path)
        key = version = ""

        try:
            reconfiguration = self.options.reconfiguration()

            stage = self._enter(log, PipelineStage.RESOLVING)
            url, endpoint = self.resolver.resolve(request_path)
            key = endpoint.key
            requested_version = parse_endpoint_path(request_path).version
            if not url:
                raise UnresolvedVersionError(key, requested_version)
            version = requested_version
            log = log.bind(key=key, version=version, url=url)

            stage = self._enter(log, PipelineStage.FETCHING)
            start_time = time.time()
            document = await self.fetcher.fetch(url)
            FETCH_DURATION.labels(key=endpoint.key).observe(time.time() - start_time)

            host = endpoint.host_override or request_host

            stage = self._enter(log, PipelineStage.EXPANDING)
            routes = expand_routes(endpoint, self.configuration.routes)

            stage = self._enter(log, PipelineStage.TRANSFORMING)
            document = self.transformer.transform(document, routes, host)

            stage = self._enter(log, PipelineStage.HOOKING)
            document = await reconfiguration.apply(context, document)

        except DocsGatewayError as e:
            # Only registered keys and versions are used as labels
            DOCUMENTS_SERVED.labels(key=key, version=version, outcome=type(e).__name__).inc()
            log.warning(
                "Documentation request failed",
                stage=stage.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._enter(log, PipelineStage.FAILED)
            raise

        except Exception as e:
            DOCUMENTS_SERVED.labels(key=key, version=version, outcome=type(e).__name__).inc()
            log.error(
                "Documentation request failed",
                stage=stage.value,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            self._enter(log, PipelineStage.FAILED)
            raise

        self._enter(log, PipelineStage.DONE)
        DOCUMENTS_SERVED.labels(key=key, version=version, outcome="served").inc()
        log.info("Documentation served", host=host, routes=len(routes))

        return document

    def _enter(self, log: Any, stage: PipelineStage) -> PipelineStage:
        log.debug("Pipeline stage", stage=stage.value)
        return stage
