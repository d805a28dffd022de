"""Batch classification of import rows into matched and ambiguous outcomes."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

from stockrecon.config.matching import DEFAULT_MATCHING_CONFIG, MatchingConfig
from stockrecon.domain.model import AmbiguousOutcome, MatchedOutcome, MatchKind, OutcomeStatus

from .rank import FuzzyRanker
from .resolve import resolve_exact

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stockrecon.domain.model import ImportRow, ReconciliationOutcome

    from .index import CatalogIndex
    from .rank import Ranker

log = logging.getLogger(__name__)


def classify_row(row: ImportRow, index: CatalogIndex, *, ranker: Ranker) -> ReconciliationOutcome:
    """Match ``row`` exactly, or fall back to ranked suggestions.

    An exact hit is final; the ranker is never consulted for it.
    """

    catalog_entry_id = resolve_exact(row, index)
    if catalog_entry_id is not None:
        return MatchedOutcome(row=row, catalog_entry_id=catalog_entry_id, match_kind=MatchKind.EXACT)
    return AmbiguousOutcome(row=row, candidates=ranker(row, index))


def classify_batch(
    rows: Sequence[ImportRow],
    index: CatalogIndex,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
    *,
    ranker: Ranker | None = None,
) -> list[ReconciliationOutcome]:
    """Classify every row; the result has the same length and order as ``rows``.

    Rows are independent of each other, so with ``config.max_workers > 1`` they are
    classified on a thread pool and written back by position.
    """

    effective_ranker = ranker or FuzzyRanker(config)
    outcomes: list[ReconciliationOutcome | None] = [None] * len(rows)

    if config.max_workers == 1 or len(rows) < 2:  # noqa: PLR2004
        for position, row in enumerate(rows):
            outcomes[position] = classify_row(row, index, ranker=effective_ranker)
    else:
        with ThreadPoolExecutor(
            max_workers=config.max_workers, thread_name_prefix="stockrecon-classify"
        ) as executor:
            futures = {
                executor.submit(classify_row, row, index, ranker=effective_ranker): position
                for position, row in enumerate(rows)
            }
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()

    completed = [outcome for outcome in outcomes if outcome is not None]
    if len(completed) != len(rows):
        raise RuntimeError("Classification lost rows; outcome list is incomplete")

    matched = sum(1 for outcome in completed if outcome.status is OutcomeStatus.MATCHED)
    log.info(
        "Classified %s rows against %s catalog entries: matched=%s, ambiguous=%s",
        len(rows),
        len(index),
        matched,
        len(rows) - matched,
    )
    return completed
