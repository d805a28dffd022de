from __future__ import annotations

import pytest

from stockrecon.config import DEFAULT_MATCHING_CONFIG, ConfigurationError, get_matching_config
from stockrecon.config.matching import MatchingConfig


def test_defaults() -> None:
    config = DEFAULT_MATCHING_CONFIG

    assert config.acceptance_threshold == 0.3
    assert config.form_bonus == config.dosage_bonus == config.manufacturer_bonus == 0.2
    assert config.max_candidates == 5
    assert config.similarity == "dice"
    assert config.blocking is True
    assert config.max_workers == 1


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOCKRECON_MATCH_THRESHOLD", "0.45")
    monkeypatch.setenv("STOCKRECON_MAX_CANDIDATES", "3")
    monkeypatch.setenv("STOCKRECON_SIMILARITY", "token_sort")
    monkeypatch.setenv("STOCKRECON_MATCH_BLOCKING", "false")
    monkeypatch.setenv("STOCKRECON_MATCH_WORKERS", "4")

    config = get_matching_config()

    assert config.acceptance_threshold == 0.45
    assert config.max_candidates == 3
    assert config.similarity == "token_sort"
    assert config.blocking is False
    assert config.max_workers == 4
    assert config.form_bonus == 0.2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"acceptance_threshold": 1.0},
        {"acceptance_threshold": -0.1},
        {"form_bonus": 1.5},
        {"max_candidates": 0},
        {"similarity": "levenshtein"},
        {"max_workers": 0},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        MatchingConfig(**kwargs)  # type: ignore[arg-type]


def test_unknown_similarity_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOCKRECON_SIMILARITY", "cosine")

    with pytest.raises(ConfigurationError, match="cosine"):
        get_matching_config()
