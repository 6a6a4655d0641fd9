"""
CORS Middleware

Cross-Origin Resource Sharing configuration for documentation UIs hosted on
another origin.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docs_gateway.config import DocsGatewaySettings


def setup_cors(app: FastAPI, settings: DocsGatewaySettings) -> None:
    """
    Configure CORS middleware for the documentation gateway.

    Documents are read-only, so only GET and OPTIONS are allowed.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID", "X-Request-ID"],
    )
