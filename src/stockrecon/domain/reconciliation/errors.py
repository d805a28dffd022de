"""Errors raised by reconciliation session mutations.

All of them derive from ``InvalidResolution`` and are raised before any state
changes, so callers may retry with corrected input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stockrecon.domain.model import CatalogEntryId, RowIndex


class InvalidResolution(ValueError):  # noqa: N818
    """Raised when a session mutation is not legal for the addressed row."""

    def __init__(self, message: str, *, row_index: RowIndex) -> None:
        super().__init__(message)
        self.row_index = row_index


class RowIndexOutOfRangeError(InvalidResolution):
    def __init__(self, *, row_index: RowIndex, row_count: int) -> None:
        super().__init__(
            f"Row index {row_index} is out of range for a batch of {row_count} rows",
            row_index=row_index,
        )
        self.row_count = row_count


class RowNotPendingError(InvalidResolution):
    def __init__(self, *, row_index: RowIndex) -> None:
        super().__init__(f"Row {row_index} is already matched", row_index=row_index)


class RowNotMatchedError(InvalidResolution):
    def __init__(self, *, row_index: RowIndex) -> None:
        super().__init__(f"Row {row_index} is still pending resolution", row_index=row_index)


class UnknownCatalogEntryError(InvalidResolution):
    def __init__(self, *, row_index: RowIndex, catalog_entry_id: CatalogEntryId) -> None:
        super().__init__(
            f"Catalog entry {catalog_entry_id!r} does not exist (row {row_index})",
            row_index=row_index,
        )
        self.catalog_entry_id = catalog_entry_id


class RowNotRevertibleError(InvalidResolution):
    def __init__(self, *, row_index: RowIndex, reason: str) -> None:
        super().__init__(f"Row {row_index} cannot be unresolved: {reason}", row_index=row_index)
        self.reason = reason
