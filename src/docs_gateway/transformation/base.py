"""
Document Transformer Protocol

Contract between the document pipeline and the component rewriting a
downstream document to the gateway's upstream surface.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from docs_gateway.models.routes import RouteEntry


class DocumentTransformer(Protocol):
    """Rewrite a downstream document for the given routes and host."""

    def transform(self, document: str, routes: Sequence[RouteEntry], host: str) -> str:
        """
        Produce a document whose paths and host reflect the upstream surface.

        Args:
            document: Downstream document text
            routes: Routes documented by this document, already expanded
            host: Host to present in the rewritten document

        Returns:
            Rewritten document text
        """
        ...
