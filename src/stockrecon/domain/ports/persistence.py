"""Ports for persisting supplier inventory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from stockrecon.domain.model import InventoryItem

if TYPE_CHECKING:
    from stockrecon.domain.model import SupplierId


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class InventoryRepository(Repository[InventoryItem], Protocol):
    """Persistence contract for supplier inventory lines."""

    def list_for_supplier(self, supplier_id: SupplierId) -> list[InventoryItem]: ...

    def delete_for_supplier(self, supplier_id: SupplierId) -> int:
        """Remove every line of ``supplier_id`` and return how many were removed."""
        ...


__all__ = ["InventoryRepository", "Repository"]
