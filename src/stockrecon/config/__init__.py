"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogApiConfig, get_catalog_api_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .matching import DEFAULT_MATCHING_CONFIG, MatchingConfig, get_matching_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "CatalogApiConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MatchingConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_catalog_api_config",
    "get_database_config",
    "get_database_uri",
    "get_matching_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
