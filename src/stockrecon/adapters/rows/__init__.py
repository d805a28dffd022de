"""Supplier row ingestion."""

from __future__ import annotations

from .reader import read_json_rows
from .schema import ImportRowPayload, ImportRowPayloadInput
from .translator import RowValidationError, parse_import_row, parse_import_rows, template_row

__all__ = [
    "ImportRowPayload",
    "ImportRowPayloadInput",
    "RowValidationError",
    "parse_import_row",
    "parse_import_rows",
    "read_json_rows",
    "template_row",
]
