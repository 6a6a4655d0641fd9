"""
Document Transformation

Rewriting of downstream swagger documents to the gateway's upstream routes.
"""

from __future__ import annotations

from .base import DocumentTransformer
from .swagger import SwaggerJsonTransformer

__all__ = [
    "DocumentTransformer",
    "SwaggerJsonTransformer",
]
