"""Supplier import rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date  # noqa: TC003
from decimal import Decimal


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportRow:
    """A positional row of a supplier stock file.

    Text fields are kept verbatim; absent text is ``None`` and is treated as an empty
    string by matching. ``source_row`` is informational only.
    """

    name: str | None = None
    form: str | None = None
    dosage: str | None = None
    packaging: str | None = None
    manufacturer: str | None = None
    quantity: int = 0
    unit_price: Decimal = field(default_factory=lambda: Decimal(0))
    expiry_date: date | None = None
    source_row: int | None = None
