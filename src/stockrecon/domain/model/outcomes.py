"""Per-row reconciliation outcomes.

A row is either matched to exactly one catalog entry or left ambiguous with a
ranked (possibly empty) list of suggestions. The status lives on the type, so
"pending" rows cannot be confused with matched ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .primitives import CatalogEntryId, Score
    from .rows import ImportRow


class OutcomeStatus(StrEnum):
    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"


class MatchKind(StrEnum):
    """How a matched row got its catalog entry."""

    EXACT = "exact"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    catalog_entry_id: CatalogEntryId
    score: Score

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Candidate score must be within [0, 1], got {self.score}")


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedOutcome:
    """Row resolved to one catalog entry and ready to persist."""

    row: ImportRow
    catalog_entry_id: CatalogEntryId
    match_kind: MatchKind = MatchKind.EXACT
    score: Score | None = 1.0
    status: Literal[OutcomeStatus.MATCHED] = OutcomeStatus.MATCHED


@dataclass(frozen=True, slots=True, kw_only=True)
class AmbiguousOutcome:
    """Row without an exact match; ``candidates`` are best first and may be empty."""

    row: ImportRow
    candidates: tuple[MatchCandidate, ...] = ()
    status: Literal[OutcomeStatus.AMBIGUOUS] = OutcomeStatus.AMBIGUOUS

    @property
    def has_suggestions(self) -> bool:
        return bool(self.candidates)

    def candidate_for(self, catalog_entry_id: CatalogEntryId) -> MatchCandidate | None:
        for candidate in self.candidates:
            if candidate.catalog_entry_id == catalog_entry_id:
                return candidate
        return None


type ReconciliationOutcome = MatchedOutcome | AmbiguousOutcome
