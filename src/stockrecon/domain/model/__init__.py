"""Domain model for stock import reconciliation."""

from __future__ import annotations

from .catalog import CatalogEntry
from .inventory import InventoryItem
from .outcomes import (
    AmbiguousOutcome,
    MatchCandidate,
    MatchedOutcome,
    MatchKind,
    OutcomeStatus,
    ReconciliationOutcome,
)
from .primitives import CatalogEntryId, RowIndex, Score, SupplierId
from .rows import ImportRow

__all__ = [
    "AmbiguousOutcome",
    "CatalogEntry",
    "CatalogEntryId",
    "ImportRow",
    "InventoryItem",
    "MatchCandidate",
    "MatchKind",
    "MatchedOutcome",
    "OutcomeStatus",
    "ReconciliationOutcome",
    "RowIndex",
    "Score",
    "SupplierId",
]
