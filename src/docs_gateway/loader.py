"""
Gateway Configuration Loader

Reads the route table and swagger endpoint registry from a YAML or JSON file.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from docs_gateway.errors import ConfigurationError
from docs_gateway.models.routes import GatewayConfiguration

logger = structlog.get_logger()


def load_configuration(path: str | Path) -> GatewayConfiguration:
    """
    Load gateway configuration from file.

    JSON files are parsed by the YAML loader as well. A missing file yields
    an empty configuration.

    Args:
        path: Path to the configuration file

    Returns:
        Validated gateway configuration

    Raises:
        ConfigurationError: If the file cannot be parsed or validated
    """
    config_path = Path(path)

    if not config_path.exists():
        logger.warning("Gateway configuration file not found", path=str(config_path))
        return GatewayConfiguration()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid gateway configuration '{config_path}': {e}") from e

    return parse_configuration(data, source=str(config_path))


def parse_configuration(data: object, source: str = "<memory>") -> GatewayConfiguration:
    """
    Validate already parsed configuration data.

    Args:
        data: Mapping with routes and swagger endpoints
        source: Where the data came from, for error messages

    Returns:
        Validated gateway configuration

    Raises:
        ConfigurationError: If the data does not match the schema
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Gateway configuration '{source}' must be a mapping")

    try:
        configuration = GatewayConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid gateway configuration '{source}': {e}") from e

    logger.info(
        "Gateway configuration loaded",
        source=source,
        routes=len(configuration.routes),
        endpoints=len(configuration.endpoints),
    )
    return configuration
