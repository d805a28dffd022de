"""Read raw supplier rows from JSON files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from pathlib import Path


def read_json_rows(path: Path) -> list[dict[str, object]]:
    """Load rows from a JSON array file or a JSON Lines file.

    Blank lines in JSON Lines input are skipped. Every row must be a JSON object.
    """

    text = path.read_text(encoding="utf-8")
    if text.lstrip().startswith("["):
        loaded: object = json.loads(text)
        items = cast(list[object], loaded)
    else:
        items = [json.loads(line) for line in text.splitlines() if line.strip()]

    rows: list[dict[str, object]] = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            msg = f"{path}: row {position} is not a JSON object"
            raise ValueError(msg)  # noqa: TRY004
        rows.append(cast(dict[str, object], item))
    return rows
