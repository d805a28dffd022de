"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select

from stockrecon.adapters.sqlalchemy.mappings import inventory_item_table
from stockrecon.domain.model import InventoryItem

if TYPE_CHECKING:
    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session

    from stockrecon.domain.model import SupplierId

log = logging.getLogger(__name__)


class SqlAlchemyInventoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: InventoryItem) -> None:
        self.session.add(entity)

    def list_for_supplier(self, supplier_id: SupplierId) -> list[InventoryItem]:
        stmt = (
            select(InventoryItem)
            .where(inventory_item_table.c.supplier_id == supplier_id)
            .order_by(inventory_item_table.c.imported_at, inventory_item_table.c.catalog_entry_id)
        )
        return list(self.session.execute(stmt).scalars())

    def delete_for_supplier(self, supplier_id: SupplierId) -> int:
        stmt = delete(InventoryItem).where(inventory_item_table.c.supplier_id == supplier_id)
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        removed = result.rowcount
        log.info("Deleted %s inventory lines of supplier %s", removed, supplier_id)
        return removed


if TYPE_CHECKING:
    from stockrecon.domain.ports.persistence import InventoryRepository

    def _repository_check(session: Session) -> InventoryRepository:
        return SqlAlchemyInventoryRepository(session)
