"""Fuzzy candidate ranking for rows without an exact catalog match.

Scoring per catalog entry:
- name similarity in ``[0, 1]`` (the dominant term)
- ``+form_bonus`` / ``+dosage_bonus`` when one normalized value contains the other
- ``+manufacturer_bonus`` when normalized manufacturers are equal
- clamped to ``1.0``

Scores at or below the acceptance threshold are dropped. Survivors are ordered by
descending score, ties by catalog position, and truncated to ``max_candidates``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from stockrecon.config.matching import DEFAULT_MATCHING_CONFIG, MatchingConfig
from stockrecon.domain.model import MatchCandidate

from .normalize import row_key
from .similarity import get_similarity

if TYPE_CHECKING:
    from stockrecon.domain.model import ImportRow

    from .index import CatalogIndex
    from .normalize import CompositeKey

log = logging.getLogger(__name__)

# Float sums such as 0.1 + 0.2 land just above 0.3; compare at this many decimals.
_SCORE_DECIMALS = 9


class Ranker(Protocol):
    """Produce ranked suggestions for a row that has no exact match."""

    def __call__(self, row: ImportRow, index: CatalogIndex) -> tuple[MatchCandidate, ...]: ...


def _contains_either(left: str, right: str) -> bool:
    if not left or not right:
        return False
    return left in right or right in left


def attribute_bonus(row: CompositeKey, entry: CompositeKey, config: MatchingConfig) -> float:
    """Sum of the form, dosage and manufacturer bonuses earned by ``entry``."""

    bonus = 0.0
    if _contains_either(row.form, entry.form):
        bonus += config.form_bonus
    if _contains_either(row.dosage, entry.dosage):
        bonus += config.dosage_bonus
    if row.manufacturer and row.manufacturer == entry.manufacturer:
        bonus += config.manufacturer_bonus
    return bonus


def rank(
    row: ImportRow,
    index: CatalogIndex,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> tuple[MatchCandidate, ...]:
    """Return up to ``config.max_candidates`` suggestions for ``row``, best first."""

    key = row_key(row)
    if not key.name:
        return ()

    metric = get_similarity(config.similarity)
    block = index.block(key.name, metric.gram_size) if config.blocking else None

    scored: list[tuple[float, int, MatchCandidate]] = []
    for item in index.indexed():
        if block is None or item.position in block:
            similarity = metric(key.name, item.key.name)
        else:
            similarity = 0.0
        score = min(1.0, similarity + attribute_bonus(key, item.key, config))
        if round(score, _SCORE_DECIMALS) <= config.acceptance_threshold:
            continue
        scored.append((score, item.position, MatchCandidate(item.entry.id, score)))

    scored.sort(key=lambda scored_item: (-scored_item[0], scored_item[1]))
    candidates = tuple(candidate for _, _, candidate in scored[: config.max_candidates])
    log.debug(
        "Ranked row %r: %s above threshold, %s kept (scored %s of %s entries)",
        row.name,
        len(scored),
        len(candidates),
        len(index) if block is None else len(block),
        len(index),
    )
    return candidates


@dataclass(frozen=True, slots=True)
class FuzzyRanker:
    """``Ranker`` bound to one matching configuration."""

    config: MatchingConfig = DEFAULT_MATCHING_CONFIG

    def __call__(self, row: ImportRow, index: CatalogIndex) -> tuple[MatchCandidate, ...]:
        return rank(row, index, self.config)
