"""Translate catalog payloads into domain catalog entries."""

from __future__ import annotations

from stockrecon.domain.model import CatalogEntry

from .schema import CatalogEntryPayload, CatalogEntryPayloadInput


def parse_catalog_entry(payload: CatalogEntryPayloadInput | CatalogEntryPayload) -> CatalogEntry:
    model = (
        payload
        if isinstance(payload, CatalogEntryPayload)
        else CatalogEntryPayload.model_validate(payload)
    )
    return CatalogEntry(
        id=model.id,
        name=model.name,
        form=model.form or "",
        dosage=model.dosage or "",
        packaging=model.packaging,
        manufacturer=model.manufacturer,
    )
