"""Persisted supplier inventory lines."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .primitives import CatalogEntryId, SupplierId
    from .rows import ImportRow


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(kw_only=True)
class InventoryItem:
    """Stock line of one supplier, linked to a canonical catalog entry."""

    supplier_id: SupplierId
    catalog_entry_id: CatalogEntryId
    quantity: int
    unit_price: Decimal
    expiry_date: date | None = None
    delivery_regions: tuple[str, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    imported_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_row(
        cls,
        row: ImportRow,
        *,
        supplier_id: SupplierId,
        catalog_entry_id: CatalogEntryId,
        delivery_regions: tuple[str, ...] = (),
    ) -> InventoryItem:
        return cls(
            supplier_id=supplier_id,
            catalog_entry_id=catalog_entry_id,
            quantity=row.quantity,
            unit_price=row.unit_price,
            expiry_date=row.expiry_date,
            delivery_regions=delivery_regions,
        )
