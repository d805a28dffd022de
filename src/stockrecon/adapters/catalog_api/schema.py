"""Pydantic models describing catalog table rows returned by the REST endpoint."""

from __future__ import annotations

from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CatalogEntryPayloadInput(TypedDict, total=False):
    id: int | str
    commercial_name: str
    form: str | None
    dosage: str | None
    COND: str | None
    laboratory: str | None


class CatalogEntryPayload(CatalogBaseModel):
    """One ``medications`` row; ``COND`` is the packaging description."""

    id: str
    name: str = Field(alias="commercial_name")
    form: str | None = None
    dosage: str | None = None
    packaging: str | None = Field(default=None, alias="COND")
    manufacturer: str | None = Field(default=None, alias="laboratory")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    _normalize_optional = field_validator(
        "form", "dosage", "packaging", "manufacturer", mode="before"
    )(_blank_to_none)


class ErrorPayload(CatalogBaseModel):
    """PostgREST error body."""

    message: str
    code: str | None = None
    details: str | None = None
    hint: str | None = None
