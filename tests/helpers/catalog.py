"""Reusable fakes and builders for reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Literal

from stockrecon.domain.model import CatalogEntry, ImportRow, InventoryItem
from stockrecon.domain.ports.fetching import CatalogFetcher

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stockrecon.domain.model import SupplierId


def make_entry(
    entry_id: str,
    name: str,
    *,
    form: str = "",
    dosage: str = "",
    packaging: str | None = None,
    manufacturer: str | None = None,
) -> CatalogEntry:
    return CatalogEntry(
        id=entry_id,
        name=name,
        form=form,
        dosage=dosage,
        packaging=packaging,
        manufacturer=manufacturer,
    )


def make_row(
    name: str | None = "Doliprane",
    *,
    form: str | None = None,
    dosage: str | None = None,
    packaging: str | None = None,
    manufacturer: str | None = None,
    quantity: int = 10,
    unit_price: str = "100.00",
    source_row: int | None = None,
) -> ImportRow:
    return ImportRow(
        name=name,
        form=form,
        dosage=dosage,
        packaging=packaging,
        manufacturer=manufacturer,
        quantity=quantity,
        unit_price=Decimal(unit_price),
        source_row=source_row,
    )


def sample_catalog() -> tuple[CatalogEntry, ...]:
    """Small catalog with near-duplicate names."""

    return (
        make_entry(
            "A1", "Doliprane", form="Sachet", dosage="300mg", manufacturer="Sanofi"
        ),
        make_entry(
            "A2", "Doliprane", form="Comprimé", dosage="1000mg", manufacturer="Sanofi"
        ),
        make_entry(
            "B1", "Dafalgan", form="Comprimé", dosage="500mg", manufacturer="UPSA"
        ),
        make_entry(
            "C1",
            "Amoxicilline",
            form="Gélule",
            dosage="500mg",
            packaging="B/12",
            manufacturer="Saidal",
        ),
        make_entry(
            "D1", "Spasfon", form="Comprimé", dosage="80mg", manufacturer="Teva"
        ),
    )


class FakeCatalogFetcher(CatalogFetcher):
    """In-memory catalog source counting its calls."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        self._entries = list(entries)
        self.calls = 0

    def __call__(self) -> list[CatalogEntry]:
        self.calls += 1
        return list(self._entries)


class FakeInventoryRepository:
    """Simple in-memory repository for inventory lines."""

    def __init__(self, initial: Iterable[InventoryItem] | None = None) -> None:
        self.items: list[InventoryItem] = list(initial or [])

    def add(self, entity: InventoryItem) -> None:
        self.items.append(entity)

    def list_for_supplier(self, supplier_id: SupplierId) -> list[InventoryItem]:
        return [item for item in self.items if item.supplier_id == supplier_id]

    def delete_for_supplier(self, supplier_id: SupplierId) -> int:
        kept = [item for item in self.items if item.supplier_id != supplier_id]
        removed = len(self.items) - len(kept)
        self.items = kept
        return removed


@dataclass(slots=True)
class _FakeInventoryRepositories:
    inventory: FakeInventoryRepository


class FakeInventoryUnitOfWork:
    """Unit of work capturing inventory persistence interactions."""

    def __init__(self, repository: FakeInventoryRepository) -> None:
        self.repositories = _FakeInventoryRepositories(inventory=repository)
        self.committed = False
        self.rollback_called = False

    def __enter__(self) -> FakeInventoryUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rollback_called = True
