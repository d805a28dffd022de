from __future__ import annotations

import pytest

from stockrecon.config.matching import MatchingConfig
from stockrecon.domain.model import CatalogEntry
from stockrecon.domain.reconciliation import (
    CatalogIndex,
    CompositeKey,
    FuzzyRanker,
    attribute_bonus,
    rank,
)
from tests.helpers.catalog import make_entry, make_row

_CONFIG = MatchingConfig()


def _key(*, form: str = "", dosage: str = "", manufacturer: str = "") -> CompositeKey:
    return CompositeKey(
        name="x", form=form, dosage=dosage, packaging="", manufacturer=manufacturer
    )


def test_form_bonus_applies_when_either_value_contains_the_other() -> None:
    assert attribute_bonus(_key(form="sach"), _key(form="sachet"), _CONFIG) == 0.2
    assert attribute_bonus(_key(form="comprimes"), _key(form="comprime"), _CONFIG) == 0.2
    assert attribute_bonus(_key(form="sach."), _key(form="sachet"), _CONFIG) == 0.0


def test_blank_values_never_earn_a_bonus() -> None:
    assert attribute_bonus(_key(), _key(form="sachet", dosage="300mg"), _CONFIG) == 0.0
    assert attribute_bonus(_key(manufacturer=""), _key(manufacturer=""), _CONFIG) == 0.0


def test_manufacturer_bonus_needs_equality() -> None:
    assert attribute_bonus(_key(manufacturer="sanofi"), _key(manufacturer="sanofi"), _CONFIG) == 0.2
    assert attribute_bonus(_key(manufacturer="sano"), _key(manufacturer="sanofi"), _CONFIG) == 0.0


def test_all_bonuses_add_up() -> None:
    row = _key(form="sachet", dosage="300 mg", manufacturer="sanofi")
    entry = _key(form="sachet", dosage="300 mg", manufacturer="sanofi")

    assert attribute_bonus(row, entry, _CONFIG) == pytest.approx(0.6)


def test_candidates_are_sorted_and_truncated(catalog: tuple[CatalogEntry, ...]) -> None:
    index = CatalogIndex.build(catalog)
    config = MatchingConfig(max_candidates=2)

    candidates = rank(make_row("Doliprone", manufacturer="Sanofi"), index, config)

    assert [candidate.catalog_entry_id for candidate in candidates] == ["A1", "A2"]
    assert candidates[0].score >= candidates[1].score


def test_scores_are_clamped_to_one(catalog: tuple[CatalogEntry, ...]) -> None:
    index = CatalogIndex.build(catalog)
    row = make_row("Doliprane", form="Sachet", dosage="300mg", manufacturer="Sanofi", packaging="x")

    candidates = rank(row, index)

    assert candidates[0].catalog_entry_id == "A1"
    assert candidates[0].score == 1.0
    assert all(0.0 <= candidate.score <= 1.0 for candidate in candidates)


def test_score_equal_to_threshold_is_dropped() -> None:
    index = CatalogIndex.build(
        [
            make_entry("form-only", "abcd", form="Sachet"),
            make_entry("form-and-lab", "efgh", form="Sachet", manufacturer="Sanofi"),
        ]
    )
    config = MatchingConfig(acceptance_threshold=0.2)

    candidates = rank(make_row("zzzz", form="sachet", manufacturer="sanofi"), index, config)

    assert [candidate.catalog_entry_id for candidate in candidates] == ["form-and-lab"]


def test_float_sum_at_threshold_is_dropped() -> None:
    # one shared bigram out of 20: dice is 0.1, plus the 0.2 form bonus
    index = CatalogIndex.build([make_entry("near", "abzyxwvutsr", form="Sachet")])
    row = make_row("abcdefghijk", form="sachet")

    assert 0.1 + 0.2 > _CONFIG.acceptance_threshold
    assert rank(row, index) == ()


def test_ties_keep_catalog_order() -> None:
    index = CatalogIndex.build(
        [
            make_entry("second", "Spasfon", form="Lyoc"),
            make_entry("first", "Spasfon", form="Comprimé"),
        ]
    )

    candidates = rank(make_row("Spasfon", form="Sirop"), index)

    assert [candidate.catalog_entry_id for candidate in candidates] == ["second", "first"]


def test_empty_name_yields_no_candidates(catalog: tuple[CatalogEntry, ...]) -> None:
    index = CatalogIndex.build(catalog)

    row = make_row("   ", form="Sachet", dosage="300mg", manufacturer="Sanofi")

    assert rank(row, index) == ()


def test_empty_catalog_yields_no_candidates() -> None:
    assert rank(make_row("Doliprane"), CatalogIndex.build([])) == ()


@pytest.mark.parametrize("similarity", ["dice", "token_sort"])
def test_blocking_does_not_change_results(
    catalog: tuple[CatalogEntry, ...], similarity: str
) -> None:
    index = CatalogIndex.build(catalog)
    rows = [
        make_row("Dolipran", form="sach", manufacturer="Sanofi"),
        make_row("Qxw", form="Comprimé", dosage="500mg", manufacturer="UPSA"),
        make_row("amoxi", dosage="500"),
        make_row("d"),
    ]
    blocked = MatchingConfig(similarity=similarity, blocking=True)  # type: ignore[arg-type]
    exhaustive = MatchingConfig(similarity=similarity, blocking=False)  # type: ignore[arg-type]

    for row in rows:
        assert rank(row, index, blocked) == rank(row, index, exhaustive)


def test_bonuses_alone_can_suggest_entries_with_unrelated_names(
    catalog: tuple[CatalogEntry, ...],
) -> None:
    index = CatalogIndex.build(catalog)

    candidates = rank(make_row("Qxw", form="Comprimé", dosage="500mg", manufacturer="UPSA"), index)

    assert candidates[0].catalog_entry_id == "B1"
    assert candidates[0].score == pytest.approx(0.6)


def test_ranking_is_deterministic(catalog: tuple[CatalogEntry, ...]) -> None:
    index = CatalogIndex.build(catalog)
    row = make_row("Dafalgn", form="comprime")

    assert rank(row, index) == rank(row, index)


def test_fuzzy_ranker_uses_its_config(catalog: tuple[CatalogEntry, ...]) -> None:
    index = CatalogIndex.build(catalog)
    ranker = FuzzyRanker(MatchingConfig(max_candidates=1))

    assert len(ranker(make_row("Doliprane"), index)) == 1
