"""Pydantic model for one raw supplier row as produced by a spreadsheet parser."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _number_to_text(value: object) -> object:
    # spreadsheet cells such as a bare dosage "500" arrive as numbers
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


def _blank_to_zero(value: object) -> object:
    if value is None:
        return 0
    if isinstance(value, str) and not value.strip():
        return 0
    return value


class ImportRowPayloadInput(TypedDict, total=False):
    commercial_name: str
    form: str
    dosage: str
    COND: str
    laboratory: str
    quantity: int | str
    price: float | str
    expiry_date: str | None


class ImportRowPayload(BaseModel):
    """Validated supplier row.

    Accepts the supplier template's column names (``commercial_name``, ``COND``,
    ``laboratory``, ``price``) as well as the field names themselves.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = Field(default=None, alias="commercial_name")
    form: str | None = None
    dosage: str | None = None
    packaging: str | None = Field(default=None, alias="COND")
    manufacturer: str | None = Field(default=None, alias="laboratory")
    quantity: int = Field(default=0, ge=0)
    unit_price: Decimal = Field(default=Decimal(0), ge=0, alias="price")
    expiry_date: date | None = None

    _text_from_numbers = field_validator(
        "name", "form", "dosage", "packaging", "manufacturer", mode="before"
    )(_number_to_text)
    _missing_amounts = field_validator("quantity", "unit_price", mode="before")(_blank_to_zero)
    _normalize_expiry = field_validator("expiry_date", mode="before")(_blank_to_none)
