"""Per-upload reconciliation state.

A session owns the ordered rows of one upload and exactly one outcome per row.
Only ``resolve`` (ambiguous -> matched), ``unresolve`` (manual match -> ambiguous)
and ``mark_persisted`` change it; each runs under the session lock and validates
before mutating.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockrecon.config.matching import DEFAULT_MATCHING_CONFIG, MatchingConfig
from stockrecon.domain.model import MatchedOutcome, MatchKind, OutcomeStatus

from .classify import classify_batch
from .errors import (
    RowIndexOutOfRangeError,
    RowNotMatchedError,
    RowNotPendingError,
    RowNotRevertibleError,
    UnknownCatalogEntryError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from stockrecon.domain.model import (
        AmbiguousOutcome,
        CatalogEntryId,
        ImportRow,
        ReconciliationOutcome,
        RowIndex,
    )

    from .index import CatalogIndex
    from .rank import Ranker

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSummary:
    total: int
    matched: int
    exact: int
    manual: int
    ambiguous: int
    without_suggestions: int
    persisted: int


@dataclass(frozen=True, slots=True)
class UnpersistedMatch:
    """Matched row that the caller has not persisted yet."""

    row_index: RowIndex
    row: ImportRow
    catalog_entry_id: CatalogEntryId


class ReconciliationSession:
    def __init__(
        self,
        rows: Sequence[ImportRow],
        outcomes: Sequence[ReconciliationOutcome],
        index: CatalogIndex,
    ) -> None:
        if len(rows) != len(outcomes):
            raise ValueError(
                f"Session needs one outcome per row (rows={len(rows)}, outcomes={len(outcomes)})"
            )
        for position, (row, outcome) in enumerate(zip(rows, outcomes, strict=True)):
            if outcome.row is not row:
                raise ValueError(f"Outcome {position} does not belong to row {position}")

        self.id = uuid.uuid4()
        self._rows = tuple(rows)
        self._index = index
        self._initial = tuple(outcomes)
        self._outcomes: list[ReconciliationOutcome] = list(outcomes)
        self._pending: set[RowIndex] = {
            position
            for position, outcome in enumerate(outcomes)
            if outcome.status is OutcomeStatus.AMBIGUOUS
        }
        self._persisted: set[RowIndex] = set()
        self._lock = threading.Lock()

    @classmethod
    def classify(
        cls,
        rows: Sequence[ImportRow],
        index: CatalogIndex,
        config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
        *,
        ranker: Ranker | None = None,
    ) -> ReconciliationSession:
        """Run every row through the matcher and open a session over the results."""

        row_tuple = tuple(rows)
        outcomes = classify_batch(row_tuple, index, config, ranker=ranker)
        session = cls(row_tuple, outcomes, index)
        log.info(
            "Opened reconciliation session %s: rows=%s, pending=%s",
            session.id,
            len(row_tuple),
            len(session._pending),
        )
        return session

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> tuple[ImportRow, ...]:
        return self._rows

    @property
    def index(self) -> CatalogIndex:
        return self._index

    @property
    def is_complete(self) -> bool:
        with self._lock:
            return not self._pending

    def outcome(self, row_index: RowIndex) -> ReconciliationOutcome:
        self._check_range(row_index)
        with self._lock:
            return self._outcomes[row_index]

    def outcomes(self) -> tuple[ReconciliationOutcome, ...]:
        with self._lock:
            return tuple(self._outcomes)

    def pending_indices(self) -> tuple[RowIndex, ...]:
        with self._lock:
            return tuple(sorted(self._pending))

    def resolve(self, row_index: RowIndex, catalog_entry_id: CatalogEntryId) -> MatchedOutcome:
        """Match the ambiguous row at ``row_index`` to the chosen catalog entry.

        The choice need not be the top suggestion, nor a suggestion at all, but it
        has to exist in the catalog.
        """

        self._check_range(row_index)
        with self._lock:
            current = self._outcomes[row_index]
            if current.status is OutcomeStatus.MATCHED:
                raise RowNotPendingError(row_index=row_index)
            if catalog_entry_id not in self._index:
                raise UnknownCatalogEntryError(
                    row_index=row_index, catalog_entry_id=catalog_entry_id
                )
            candidate = current.candidate_for(catalog_entry_id)
            resolved = MatchedOutcome(
                row=current.row,
                catalog_entry_id=catalog_entry_id,
                match_kind=MatchKind.MANUAL,
                score=candidate.score if candidate is not None else None,
            )
            self._outcomes[row_index] = resolved
            self._pending.discard(row_index)
            remaining = len(self._pending)

        log.info(
            "Session %s: resolved row %s to %s (%s pending)",
            self.id,
            row_index,
            catalog_entry_id,
            remaining,
        )
        return resolved

    def unresolve(self, row_index: RowIndex) -> AmbiguousOutcome:
        """Undo a manual resolution that has not been persisted yet."""

        self._check_range(row_index)
        with self._lock:
            current = self._outcomes[row_index]
            if current.status is OutcomeStatus.AMBIGUOUS:
                raise RowNotRevertibleError(row_index=row_index, reason="row is not matched")
            if current.match_kind is MatchKind.EXACT:
                raise RowNotRevertibleError(row_index=row_index, reason="exact matches are final")
            if row_index in self._persisted:
                raise RowNotRevertibleError(row_index=row_index, reason="row is already persisted")
            restored = self._initial[row_index]
            if restored.status is not OutcomeStatus.AMBIGUOUS:
                raise RowNotRevertibleError(
                    row_index=row_index, reason="row was matched at classification time"
                )
            self._outcomes[row_index] = restored
            self._pending.add(row_index)

        log.info("Session %s: row %s is pending again", self.id, row_index)
        return restored

    def matched_rows(self, *, include_persisted: bool = True) -> list[tuple[ImportRow, CatalogEntryId]]:
        """Currently matched rows in input order; a partial export while rows are pending."""

        return [
            (match.row, match.catalog_entry_id)
            for match in self._matches(include_persisted=include_persisted)
        ]

    def unpersisted_matches(self) -> list[UnpersistedMatch]:
        return self._matches(include_persisted=False)

    def mark_persisted(self, row_indices: Iterable[RowIndex]) -> None:
        """Record that the caller stored these matched rows."""

        indices = tuple(row_indices)
        for row_index in indices:
            self._check_range(row_index)
        with self._lock:
            for row_index in indices:
                if self._outcomes[row_index].status is not OutcomeStatus.MATCHED:
                    raise RowNotMatchedError(row_index=row_index)
            self._persisted.update(indices)

    def summary(self) -> SessionSummary:
        with self._lock:
            outcomes = tuple(self._outcomes)
            persisted = len(self._persisted)

        exact = manual = without_suggestions = 0
        for outcome in outcomes:
            if outcome.status is OutcomeStatus.MATCHED:
                if outcome.match_kind is MatchKind.EXACT:
                    exact += 1
                else:
                    manual += 1
            elif not outcome.candidates:
                without_suggestions += 1
        matched = exact + manual
        return SessionSummary(
            total=len(outcomes),
            matched=matched,
            exact=exact,
            manual=manual,
            ambiguous=len(outcomes) - matched,
            without_suggestions=without_suggestions,
            persisted=persisted,
        )

    def _matches(self, *, include_persisted: bool) -> list[UnpersistedMatch]:
        with self._lock:
            return [
                UnpersistedMatch(
                    row_index=position,
                    row=outcome.row,
                    catalog_entry_id=outcome.catalog_entry_id,
                )
                for position, outcome in enumerate(self._outcomes)
                if outcome.status is OutcomeStatus.MATCHED
                and (include_persisted or position not in self._persisted)
            ]

    def _check_range(self, row_index: RowIndex) -> None:
        if not 0 <= row_index < len(self._rows):
            raise RowIndexOutOfRangeError(row_index=row_index, row_count=len(self._rows))
