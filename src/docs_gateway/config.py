"""
Documentation Gateway Configuration

Environment-based configuration management for the documentation gateway.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DocsGatewaySettings(BaseSettings):
    """Documentation gateway configuration loaded from environment variables."""

    # Application
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8080, description="Server port")

    # CORS Configuration
    ALLOWED_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    # Gateway Configuration
    GATEWAY_NAME: str = Field(default="Docs Gateway", description="Gateway service name")
    GATEWAY_VERSION: str = Field(default="0.1.0", description="Gateway version")
    REQUEST_TIMEOUT: float = Field(
        default=30.0, description="Downstream document fetch timeout in seconds"
    )

    # Routes and documentation registry
    CONFIGURATION_FILE: str = Field(
        default="gateway.yaml",
        description="Path to the YAML/JSON file holding routes and swagger endpoints"
    )
    DOCS_PATH_PREFIX: str = Field(
        default="/swagger/docs",
        description="Path prefix under which rewritten documents are served"
    )
    UI_PATH: str = Field(default="/swagger", description="Swagger UI path")
    DOWNSTREAM_DOCS_HEADERS: dict[str, str] = Field(
        default={},
        description="Static headers attached to every downstream document request"
    )

    # Monitoring
    ENABLE_METRICS: bool = Field(default=True, description="Enable Prometheus metrics")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_file": ".env",
        "env_prefix": "DOCS_GATEWAY_",
        "case_sensitive": True,
        "extra": "ignore",
    }


# Global settings instance
settings = DocsGatewaySettings()
