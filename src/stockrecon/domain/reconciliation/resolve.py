"""Exact composite-key resolution of import rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .normalize import row_key

if TYPE_CHECKING:
    from stockrecon.domain.model import CatalogEntryId, ImportRow

    from .index import CatalogIndex


def resolve_exact(row: ImportRow, index: CatalogIndex) -> CatalogEntryId | None:
    """Return the catalog id whose normalized identity tuple equals the row's, if any."""

    return index.lookup_key(row_key(row))
