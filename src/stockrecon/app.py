"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from stockrecon.adapters.catalog_api import HttpCatalogFetcher
from stockrecon.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    is_started,
    startup,
)
from stockrecon.config.matching import get_matching_config
from stockrecon.domain.model import InventoryItem
from stockrecon.domain.ports.unit_of_work import InventoryUnitOfWork
from stockrecon.domain.reconciliation import CatalogIndex, ReconciliationSession

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from stockrecon.config.matching import MatchingConfig
    from stockrecon.domain.model import CatalogEntry, ImportRow, SupplierId
    from stockrecon.domain.ports.fetching import CatalogFetcher

UnitOfWorkFactory = Callable[[], InventoryUnitOfWork]


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PersistResult:
    stored: int
    replaced: int
    pending: int


def load_catalog_index(
    *,
    fetcher: CatalogFetcher | None = None,
    catalog: Iterable[CatalogEntry] | None = None,
) -> CatalogIndex:
    """Build the catalog index from ``catalog`` or, when absent, from ``fetcher``."""

    if catalog is None:
        effective_fetcher = fetcher or HttpCatalogFetcher()
        catalog = effective_fetcher()
    return CatalogIndex.build(catalog)


def start_import(
    rows: Sequence[ImportRow],
    *,
    fetcher: CatalogFetcher | None = None,
    catalog: Iterable[CatalogEntry] | None = None,
    config: MatchingConfig | None = None,
) -> ReconciliationSession:
    """Classify an uploaded batch and return the session holding its outcomes."""

    effective_config = config or get_matching_config()
    index = load_catalog_index(fetcher=fetcher, catalog=catalog)
    log.info(
        "Starting import: rows=%s, catalog=%s, similarity=%s, workers=%s",
        len(rows),
        len(index),
        effective_config.similarity,
        effective_config.max_workers,
    )
    return ReconciliationSession.classify(rows, index, effective_config)


def persist_matched(
    session: ReconciliationSession,
    *,
    supplier_id: SupplierId,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    replace_existing: bool = False,
    delivery_regions: Sequence[str] = (),
) -> PersistResult:
    """Store every matched row that was not stored before, then mark it persisted.

    Pending rows are left in the session. With ``replace_existing`` the supplier's
    previous inventory is deleted in the same transaction.
    """

    if not supplier_id.strip():
        raise ValueError("supplier_id must not be blank")

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyInventoryUnitOfWork

    matches = session.unpersisted_matches()
    regions = tuple(delivery_regions)

    with unit_of_work_factory() as uow:
        inventory = uow.repositories.inventory
        replaced = inventory.delete_for_supplier(supplier_id) if replace_existing else 0
        for match in matches:
            inventory.add(
                InventoryItem.from_row(
                    match.row,
                    supplier_id=supplier_id,
                    catalog_entry_id=match.catalog_entry_id,
                    delivery_regions=regions,
                )
            )
        uow.commit()

    session.mark_persisted(match.row_index for match in matches)
    result = PersistResult(
        stored=len(matches),
        replaced=replaced,
        pending=len(session.pending_indices()),
    )
    log.info(
        "Persisted inventory for supplier %s: stored=%s, replaced=%s, pending=%s",
        supplier_id,
        result.stored,
        result.replaced,
        result.pending,
    )
    return result
