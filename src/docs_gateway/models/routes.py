"""
Route and Swagger Endpoint Models

Pydantic models for the gateway route table and the documentation registry.
Field names are snake_case; configuration files may use the PascalCase names
of Ocelot-style gateway configuration instead.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class _ConfigModel(BaseModel):
    """Immutable model accepting both snake_case and PascalCase keys."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
    )


class RouteEntry(_ConfigModel):
    """One gateway route mapping an upstream path to a downstream path."""

    service_key: str = Field(..., alias="SwaggerKey", description="Swagger endpoint key")
    upstream_http_method: list[str] = Field(
        default_factory=list, description="Upstream HTTP methods, empty for any"
    )
    upstream_path_template: str = Field(..., description="Public path template")
    downstream_path_template: str = Field(..., description="Backend path template")
    virtual_directory: str | None = Field(
        default=None, description="Path prefix the backend is hosted under"
    )

    @field_validator("upstream_http_method", mode="before")
    @classmethod
    def normalize_methods(cls, v: object) -> object:
        """Accept a single method string as well as a list of methods."""
        if v is None:
            return []
        if isinstance(v, str):
            return [m.strip() for m in v.split(",") if m.strip()]
        return v

    def contains(self, token: str) -> bool:
        """Check whether either path template contains ``token``."""
        return token in self.upstream_path_template or token in self.downstream_path_template

    def with_version(self, placeholder: str, version: str) -> RouteEntry:
        """Return a copy with ``placeholder`` replaced by ``version`` in both templates."""
        return self.model_copy(
            update={
                "upstream_path_template": self.upstream_path_template.replace(placeholder, version),
                "downstream_path_template": self.downstream_path_template.replace(
                    placeholder, version
                ),
            }
        )


class DocEntry(_ConfigModel):
    """One version of a service's documentation source."""

    version: str = Field(..., description="API version label")
    url: str = Field(..., description="Absolute URL of the downstream document")
    name: str | None = Field(default=None, description="Display name in the UI")


class RegistryEntry(_ConfigModel):
    """Documentation registration for one service key."""

    key: str = Field(..., description="Service key shared with the routes")
    path_segment: str | None = Field(
        default=None, alias="KeyToPath", description="Path segment clients use for this key"
    )
    versions: list[DocEntry] = Field(..., alias="Config", min_length=1)
    version_placeholder: str | None = Field(
        default=None, description="Token in route templates replaced per version"
    )
    host_override: str | None = Field(
        default=None, description="Host presented in the rewritten document"
    )

    @property
    def key_to_path(self) -> str:
        """Path segment addressing this entry."""
        return self.path_segment or self.key

    def find_version(self, version: str) -> DocEntry | None:
        """Return the first version entry labelled ``version``."""
        return next((doc for doc in self.versions if doc.version == version), None)


class GatewayConfiguration(_ConfigModel):
    """Routes and swagger endpoints, loaded once and never mutated."""

    routes: list[RouteEntry] = Field(
        default_factory=list,
        validation_alias=AliasChoices("routes", "Routes", "ReRoutes"),
    )
    endpoints: list[RegistryEntry] = Field(
        default_factory=list,
        validation_alias=AliasChoices("endpoints", "SwaggerEndPoints", "SwaggerEndpoints"),
    )
