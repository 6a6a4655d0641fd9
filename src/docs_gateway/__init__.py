"""
Documentation Gateway

Serves a unified Swagger/OpenAPI document for the services behind an API
gateway. Downstream documents are fetched per request, rewritten to the
gateway's upstream routes and expanded across registered API versions.
"""

__version__ = "0.1.0"
