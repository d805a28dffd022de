"""Catalog REST endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_int, env_str, require_env_vars
from .errors import ConfigurationError

DEFAULT_CATALOG_TABLE: Final[str] = "medications"
DEFAULT_CATALOG_PAGE_SIZE: Final[int] = 1000


@dataclass(frozen=True, slots=True)
class CatalogApiConfig:
    """Connection settings for a PostgREST-style catalog table."""

    base_url: str
    api_key: str
    table: str = DEFAULT_CATALOG_TABLE
    page_size: int = DEFAULT_CATALOG_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ConfigurationError(f"page_size must be positive, got {self.page_size}")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    @classmethod
    def from_environment(cls) -> CatalogApiConfig:
        values = require_env_vars(("CATALOG_API_URL", "CATALOG_API_KEY"))
        return cls(
            base_url=values["CATALOG_API_URL"].rstrip("/"),
            api_key=values["CATALOG_API_KEY"],
            table=env_str("CATALOG_TABLE", DEFAULT_CATALOG_TABLE),
            page_size=env_int("CATALOG_PAGE_SIZE", DEFAULT_CATALOG_PAGE_SIZE),
        )


def get_catalog_api_config() -> CatalogApiConfig:
    return CatalogApiConfig.from_environment()
