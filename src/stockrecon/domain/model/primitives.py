"""Domain primitives: scalar aliases shared across the model.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type CatalogEntryId = str
type SupplierId = str
type RowIndex = int
type Score = float
