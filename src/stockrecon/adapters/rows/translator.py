"""Translate raw supplier rows into domain import rows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from stockrecon.domain.model import ImportRow

from .schema import ImportRowPayload, ImportRowPayloadInput

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = logging.getLogger(__name__)

_TEMPLATE_ROW: ImportRowPayloadInput = {
    "commercial_name": "Doliprane",
    "form": "B/12",
    "dosage": "300MG",
    "COND": "PDRE. P. SOL. BUV. SACH.-DOSE",
    "laboratory": "SANOFI AVENTIS ALGERIE SPA",
    "quantity": 100,
    "price": "1000.00",
    "expiry_date": None,
}


class RowValidationError(ValueError):
    """A raw row that could not be turned into an ``ImportRow``."""

    def __init__(self, *, source_row: int, problems: tuple[str, ...]) -> None:
        super().__init__(f"Row {source_row}: " + "; ".join(problems))
        self.source_row = source_row
        self.problems = problems


def _describe(error: ValidationError) -> tuple[str, ...]:
    problems: list[str] = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "row"
        problems.append(f"{location}: {detail['msg']}")
    return tuple(problems)


def parse_import_row(
    payload: ImportRowPayloadInput | Mapping[str, object] | ImportRowPayload,
    *,
    source_row: int | None = None,
) -> ImportRow:
    model = (
        payload
        if isinstance(payload, ImportRowPayload)
        else ImportRowPayload.model_validate(payload)
    )
    return ImportRow(
        name=model.name,
        form=model.form,
        dosage=model.dosage,
        packaging=model.packaging,
        manufacturer=model.manufacturer,
        quantity=model.quantity,
        unit_price=model.unit_price,
        expiry_date=model.expiry_date,
        source_row=source_row,
    )


def parse_import_rows(
    payloads: Iterable[Mapping[str, object]],
    *,
    first_row: int = 1,
) -> tuple[list[ImportRow], list[RowValidationError]]:
    """Translate every payload, collecting failures instead of raising.

    ``first_row`` is the 1-based source row number of the first payload. Accepted
    rows keep their relative order.
    """

    rows: list[ImportRow] = []
    errors: list[RowValidationError] = []
    for offset, payload in enumerate(payloads):
        source_row = first_row + offset
        try:
            rows.append(parse_import_row(payload, source_row=source_row))
        except ValidationError as exc:
            errors.append(RowValidationError(source_row=source_row, problems=_describe(exc)))

    if errors:
        log.warning("Rejected %s of %s import rows", len(errors), len(rows) + len(errors))
    return rows, errors


def template_row() -> dict[str, object]:
    """Sample row showing the expected supplier columns."""

    return dict(_TEMPLATE_ROW)
