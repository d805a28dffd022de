"""Matching supplier rows against the canonical catalog."""

from __future__ import annotations

from .classify import classify_batch, classify_row
from .errors import (
    InvalidResolution,
    RowIndexOutOfRangeError,
    RowNotMatchedError,
    RowNotPendingError,
    RowNotRevertibleError,
    UnknownCatalogEntryError,
)
from .index import CatalogIndex, IndexedEntry
from .normalize import CompositeKey, composite_key, entry_key, normalize_text, row_key
from .rank import FuzzyRanker, Ranker, attribute_bonus, rank
from .resolve import resolve_exact
from .session import ReconciliationSession, SessionSummary, UnpersistedMatch
from .similarity import (
    DICE,
    TOKEN_SORT,
    SimilarityMetric,
    dice_coefficient,
    get_similarity,
    token_sort_similarity,
)

__all__ = [
    "DICE",
    "TOKEN_SORT",
    "CatalogIndex",
    "CompositeKey",
    "FuzzyRanker",
    "IndexedEntry",
    "InvalidResolution",
    "Ranker",
    "ReconciliationSession",
    "RowIndexOutOfRangeError",
    "RowNotMatchedError",
    "RowNotPendingError",
    "RowNotRevertibleError",
    "SessionSummary",
    "SimilarityMetric",
    "UnknownCatalogEntryError",
    "UnpersistedMatch",
    "attribute_bonus",
    "classify_batch",
    "classify_row",
    "composite_key",
    "dice_coefficient",
    "entry_key",
    "get_similarity",
    "normalize_text",
    "rank",
    "resolve_exact",
    "row_key",
    "token_sort_similarity",
]
