"""
Gateway Status Models

Response models for the health, readiness and endpoint listing routes. Health
responses summarize the loaded gateway configuration instead of calling
downstream services, which are only contacted when a document is requested.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from docs_gateway.models.routes import GatewayConfiguration


class ConfigurationSummary(BaseModel):
    """Size of the loaded route table and documentation registry."""

    swagger_endpoints: int = Field(..., ge=0, description="Registered service keys")
    document_versions: int = Field(..., ge=0, description="Servable document versions")
    routes: int = Field(..., ge=0, description="Gateway routes")
    versioned_endpoints: list[str] = Field(
        default_factory=list, description="Keys whose routes are expanded per version"
    )

    @classmethod
    def of(cls, configuration: GatewayConfiguration) -> ConfigurationSummary:
        endpoints = configuration.endpoints
        return cls(
            swagger_endpoints=len(endpoints),
            document_versions=sum(len(e.versions) for e in endpoints),
            routes=len(configuration.routes),
            versioned_endpoints=[
                e.key for e in endpoints if e.version_placeholder and e.version_placeholder.strip()
            ],
        )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Overall health status")
    gateway: str = Field(..., description="Gateway name")
    version: str = Field(..., description="Gateway version")
    timestamp: str = Field(..., description="Check timestamp in ISO format")
    configuration_file: str = Field(..., description="Gateway configuration source")
    configuration: ConfigurationSummary


class ReadinessResponse(BaseModel):
    """Ready once at least one document can be served."""

    ready: bool
    document_versions: int = Field(..., ge=0)


class LivenessResponse(BaseModel):
    status: str = "alive"


class SwaggerEndpointInfo(BaseModel):
    """One entry of the Swagger UI document dropdown."""

    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Gateway URL serving the rewritten document")
