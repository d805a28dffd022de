"""String similarity metrics for fuzzy catalog matching.

Each metric maps two normalized strings to ``[0, 1]`` with ``1.0`` for identical
input, and declares ``gram_size``: two strings sharing no character n-gram of that
size are guaranteed to score ``0.0``. The catalog index uses that guarantee to
skip scoring entries without changing any result.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from rapidfuzz import fuzz

if TYPE_CHECKING:
    from stockrecon.config.matching import SimilarityName

type SimilarityFunc = Callable[[str, str], float]


@dataclass(frozen=True, slots=True)
class SimilarityMetric:
    name: str
    func: SimilarityFunc
    gram_size: int

    def __call__(self, left: str, right: str) -> float:
        return self.func(left, right)


def compact(text: str) -> str:
    """Drop every whitespace character."""

    return "".join(text.split())


def char_ngrams(text: str, size: int) -> frozenset[str]:
    """Distinct character n-grams of ``text`` with whitespace removed."""

    squeezed = compact(text)
    return frozenset(squeezed[i : i + size] for i in range(len(squeezed) - size + 1))


def dice_coefficient(left: str, right: str) -> float:
    """Sørensen-Dice coefficient over character bigrams (multiset), ignoring spaces.

    >>> dice_coefficient("sachet", "sachets")
    0.9090909090909091
    """

    first = compact(left)
    second = compact(right)
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:  # noqa: PLR2004
        return 0.0

    first_bigrams = Counter(first[i : i + 2] for i in range(len(first) - 1))
    overlap = 0
    for i in range(len(second) - 1):
        bigram = second[i : i + 2]
        if first_bigrams[bigram] > 0:
            first_bigrams[bigram] -= 1
            overlap += 1
    return (2.0 * overlap) / (len(first) + len(second) - 2)


def token_sort_similarity(left: str, right: str) -> float:
    """Order-insensitive token similarity backed by rapidfuzz.

    Strings without a single common non-space character score ``0.0`` instead of
    getting credit for matching separators.
    """

    if left == right:
        return 1.0
    if not set(compact(left)) & set(compact(right)):
        return 0.0
    return fuzz.token_sort_ratio(left, right) / 100.0


DICE: Final[SimilarityMetric] = SimilarityMetric("dice", dice_coefficient, gram_size=2)
TOKEN_SORT: Final[SimilarityMetric] = SimilarityMetric(
    "token_sort", token_sort_similarity, gram_size=1
)

_METRICS: Final[dict[str, SimilarityMetric]] = {metric.name: metric for metric in (DICE, TOKEN_SORT)}


def get_similarity(name: SimilarityName | str) -> SimilarityMetric:
    try:
        return _METRICS[name]
    except KeyError:
        known = ", ".join(sorted(_METRICS))
        raise ValueError(f"Unknown similarity metric {name!r} (known: {known})") from None
