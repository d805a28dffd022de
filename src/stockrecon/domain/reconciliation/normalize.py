"""Text canonicalisation for catalog matching.

Every comparison in the engine runs on normalized text: accents removed, case
folded, whitespace collapsed. Absent values normalize to ``""`` so a missing
field is never an error, only a weaker match.
"""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from stockrecon.domain.model import CatalogEntry, ImportRow


class CompositeKey(NamedTuple):
    """Normalized identity tuple used for exact matching."""

    name: str
    form: str
    dosage: str
    packaging: str
    manufacturer: str


def normalize_text(text: str | None) -> str:
    """Return ``text`` without diacritics, lower-cased, with single inner spaces.

    >>> normalize_text("  Dôliprâne   300 MG ")
    'doliprane 300 mg'
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(stripped.lower().split())


def composite_key(
    name: str | None,
    form: str | None,
    dosage: str | None,
    packaging: str | None,
    manufacturer: str | None,
) -> CompositeKey:
    return CompositeKey(
        name=normalize_text(name),
        form=normalize_text(form),
        dosage=normalize_text(dosage),
        packaging=normalize_text(packaging),
        manufacturer=normalize_text(manufacturer),
    )


def entry_key(entry: CatalogEntry) -> CompositeKey:
    return composite_key(
        entry.name, entry.form, entry.dosage, entry.packaging, entry.manufacturer
    )


def row_key(row: ImportRow) -> CompositeKey:
    return composite_key(row.name, row.form, row.dosage, row.packaging, row.manufacturer)
