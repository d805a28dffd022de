"""SQLAlchemy adapter package for stockrecon."""

from __future__ import annotations

from .mappings import create_all_tables, inventory_item_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyInventoryRepository

__all__ = [
    "SqlAlchemyInventoryRepository",
    "create_all_tables",
    "inventory_item_table",
    "mapper_registry",
    "start_mappers",
]
