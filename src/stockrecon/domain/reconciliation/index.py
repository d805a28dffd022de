"""In-memory view of the canonical catalog for one import session.

The index is built once and never mutated afterwards, so classification workers
share it without locking.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .normalize import CompositeKey, composite_key, entry_key
from .similarity import char_ngrams, compact

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from stockrecon.domain.model import CatalogEntry, CatalogEntryId

log = logging.getLogger(__name__)

_INDEXED_GRAM_SIZES: Final[tuple[int, ...]] = (1, 2)


@dataclass(frozen=True, slots=True)
class IndexedEntry:
    """Catalog entry with its insertion position and precomputed normalized key."""

    position: int
    entry: CatalogEntry
    key: CompositeKey


class CatalogIndex:
    """Read-only lookup structure over an ordered catalog."""

    __slots__ = ("_by_compact_name", "_by_id", "_exact", "_grams", "_indexed")

    def __init__(self, indexed: tuple[IndexedEntry, ...]) -> None:
        self._indexed = indexed
        self._exact: dict[CompositeKey, CatalogEntryId] = {}
        self._by_id: dict[CatalogEntryId, IndexedEntry] = {}
        self._by_compact_name: dict[str, list[int]] = defaultdict(list)
        self._grams: dict[int, dict[str, list[int]]] = {
            size: defaultdict(list) for size in _INDEXED_GRAM_SIZES
        }

        duplicates = 0
        for item in indexed:
            if item.key in self._exact:
                duplicates += 1
            else:
                self._exact[item.key] = item.entry.id
            self._by_id.setdefault(item.entry.id, item)
            self._by_compact_name[compact(item.key.name)].append(item.position)
            for size, postings in self._grams.items():
                for gram in char_ngrams(item.key.name, size):
                    postings[gram].append(item.position)

        if duplicates:
            log.warning(
                "Catalog contains %s entries duplicating an earlier composite key; "
                "exact lookups resolve to the first one",
                duplicates,
            )

    @classmethod
    def build(cls, entries: Iterable[CatalogEntry]) -> CatalogIndex:
        indexed = tuple(
            IndexedEntry(position=position, entry=entry, key=entry_key(entry))
            for position, entry in enumerate(entries)
        )
        index = cls(indexed)
        log.debug("Built catalog index with %s entries", len(indexed))
        return index

    def __len__(self) -> int:
        return len(self._indexed)

    def __iter__(self) -> Iterator[IndexedEntry]:
        return iter(self._indexed)

    def __contains__(self, catalog_entry_id: object) -> bool:
        return catalog_entry_id in self._by_id

    def lookup_exact(
        self,
        name: str | None,
        form: str | None,
        dosage: str | None,
        packaging: str | None,
        manufacturer: str | None,
    ) -> CatalogEntryId | None:
        """Return the id of the first entry whose normalized tuple equals the input."""

        return self.lookup_key(composite_key(name, form, dosage, packaging, manufacturer))

    def lookup_key(self, key: CompositeKey) -> CatalogEntryId | None:
        return self._exact.get(key)

    def all(self) -> tuple[CatalogEntry, ...]:
        return tuple(item.entry for item in self._indexed)

    def indexed(self) -> tuple[IndexedEntry, ...]:
        return self._indexed

    def get(self, catalog_entry_id: CatalogEntryId) -> CatalogEntry | None:
        item = self._by_id.get(catalog_entry_id)
        return item.entry if item is not None else None

    def block(self, normalized_name: str, gram_size: int) -> frozenset[int]:
        """Positions of entries that share at least one ``gram_size`` n-gram with the name.

        Entries whose whitespace-free name equals the input are always included so
        names shorter than one n-gram can still score as identical.
        """

        if gram_size not in self._grams:
            return frozenset(range(len(self._indexed)))

        postings = self._grams[gram_size]
        positions: set[int] = set(self._by_compact_name.get(compact(normalized_name), ()))
        for gram in char_ngrams(normalized_name, gram_size):
            positions.update(postings.get(gram, ()))
        return frozenset(positions)
