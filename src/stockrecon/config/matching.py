"""Tunable weights and thresholds for catalog matching.

The defaults keep suggestions strictly above ``0.3`` and let each agreeing
attribute add ``0.2`` on top of the name similarity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from .env import env_bool, env_float, env_int, env_str
from .errors import ConfigurationError

type SimilarityName = Literal["dice", "token_sort"]

DEFAULT_ACCEPTANCE_THRESHOLD: Final[float] = 0.3
DEFAULT_ATTRIBUTE_BONUS: Final[float] = 0.2
DEFAULT_MAX_CANDIDATES: Final[int] = 5
SIMILARITY_NAMES: Final[tuple[str, ...]] = ("dice", "token_sort")


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    acceptance_threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD
    form_bonus: float = DEFAULT_ATTRIBUTE_BONUS
    dosage_bonus: float = DEFAULT_ATTRIBUTE_BONUS
    manufacturer_bonus: float = DEFAULT_ATTRIBUTE_BONUS
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    similarity: SimilarityName = "dice"
    blocking: bool = True
    max_workers: int = 1

    def __post_init__(self) -> None:
        if not 0.0 <= self.acceptance_threshold < 1.0:
            raise ConfigurationError(
                f"acceptance_threshold must be in [0, 1), got {self.acceptance_threshold}"
            )
        for name in ("form_bonus", "dosage_bonus", "manufacturer_bonus"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if self.max_candidates < 1:
            raise ConfigurationError(
                f"max_candidates must be positive, got {self.max_candidates}"
            )
        if self.similarity not in SIMILARITY_NAMES:
            raise ConfigurationError(
                f"Unknown similarity {self.similarity!r}; expected one of {SIMILARITY_NAMES}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be positive, got {self.max_workers}")


DEFAULT_MATCHING_CONFIG: Final[MatchingConfig] = MatchingConfig()


def get_matching_config() -> MatchingConfig:
    """Build a matching configuration from ``STOCKRECON_*`` environment overrides."""

    return MatchingConfig(
        acceptance_threshold=env_float(
            "STOCKRECON_MATCH_THRESHOLD", DEFAULT_ACCEPTANCE_THRESHOLD
        ),
        form_bonus=env_float("STOCKRECON_FORM_BONUS", DEFAULT_ATTRIBUTE_BONUS),
        dosage_bonus=env_float("STOCKRECON_DOSAGE_BONUS", DEFAULT_ATTRIBUTE_BONUS),
        manufacturer_bonus=env_float("STOCKRECON_MANUFACTURER_BONUS", DEFAULT_ATTRIBUTE_BONUS),
        max_candidates=env_int("STOCKRECON_MAX_CANDIDATES", DEFAULT_MAX_CANDIDATES),
        similarity=env_str("STOCKRECON_SIMILARITY", "dice"),  # pyright: ignore[reportArgumentType]
        blocking=env_bool("STOCKRECON_MATCH_BLOCKING", default=True),
        max_workers=env_int("STOCKRECON_MATCH_WORKERS", 1),
    )
