"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CatalogFetcher
from .persistence import InventoryRepository, Repository
from .unit_of_work import (
    InventoryRepositories,
    InventoryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogFetcher",
    "InventoryRepositories",
    "InventoryRepository",
    "InventoryUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
