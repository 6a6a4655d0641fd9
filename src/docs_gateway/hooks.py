"""
Upstream Document Reconfiguration

Application-supplied hooks that post-process the rewritten document before
it is returned. At most one of the synchronous and asynchronous hooks may be
configured.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from docs_gateway.errors import ConfigurationError

ReconfigureHook = Callable[[Any, str], str]
AsyncReconfigureHook = Callable[[Any, str], Awaitable[str]]


class ReconfigurationKind(str, Enum):
    """Which reconfiguration hook, if any, is applied."""

    NONE = "none"
    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class Reconfiguration:
    """The single reconfiguration behaviour selected for a request."""

    kind: ReconfigurationKind = ReconfigurationKind.NONE
    hook: ReconfigureHook | AsyncReconfigureHook | None = None

    async def apply(self, context: Any, document: str) -> str:
        """Run the selected hook over ``document``."""
        if self.kind is ReconfigurationKind.SYNC:
            return self.hook(context, document)  # type: ignore[misc, return-value]

        if self.kind is ReconfigurationKind.ASYNC:
            return await self.hook(context, document)  # type: ignore[misc]

        return document


@dataclass
class DocsGatewayOptions:
    """Application options for the document pipeline."""

    downstream_docs_headers: dict[str, str] = field(default_factory=dict)
    """Static headers attached to downstream document requests"""

    reconfigure_upstream_document: ReconfigureHook | None = None
    """Synchronous (context, document) -> document hook"""

    reconfigure_upstream_document_async: AsyncReconfigureHook | None = None
    """Asynchronous (context, document) -> document hook"""

    def reconfiguration(self) -> Reconfiguration:
        """
        Select the configured reconfiguration hook.

        Raises:
            ConfigurationError: If both hooks are configured
        """
        sync_hook = self.reconfigure_upstream_document
        async_hook = self.reconfigure_upstream_document_async

        if sync_hook is not None and async_hook is not None:
            raise ConfigurationError(
                "Both reconfigure_upstream_document and reconfigure_upstream_document_async "
                "cannot have a value. Only use one method."
            )

        if sync_hook is not None:
            return Reconfiguration(ReconfigurationKind.SYNC, sync_hook)

        if async_hook is not None:
            return Reconfiguration(ReconfigurationKind.ASYNC, async_hook)

        return Reconfiguration()
