"""Canonical catalog records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .primitives import CatalogEntryId


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogEntry:
    """One read-only product record of the controlled catalog.

    Exact identity is the normalized ``(name, form, dosage, packaging, manufacturer)``
    tuple; ``id`` is opaque and only ever compared for equality.
    """

    id: CatalogEntryId
    name: str
    form: str = ""
    dosage: str = ""
    packaging: str | None = None
    manufacturer: str | None = None
