"""Public interface for the catalog REST adapter."""

from __future__ import annotations

from .client import CatalogAPIError, HttpCatalogFetcher
from .schema import CatalogEntryPayload, CatalogEntryPayloadInput
from .translator import parse_catalog_entry

__all__ = [
    "CatalogAPIError",
    "CatalogEntryPayload",
    "CatalogEntryPayloadInput",
    "HttpCatalogFetcher",
    "parse_catalog_entry",
]
