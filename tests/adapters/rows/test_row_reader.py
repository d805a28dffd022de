from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from stockrecon.adapters.rows import read_json_rows

if TYPE_CHECKING:
    from pathlib import Path


def test_reads_json_array(tmp_path: Path) -> None:
    path = tmp_path / "rows.json"
    path.write_text(json.dumps([{"commercial_name": "Doliprane"}, {"commercial_name": "Spasfon"}]))

    assert read_json_rows(path) == [{"commercial_name": "Doliprane"}, {"commercial_name": "Spasfon"}]


def test_reads_json_lines_skipping_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "rows.jsonl"
    path.write_text(
        '{"commercial_name": "Doliprane"}\n\n{"commercial_name": "Dôliprâne"}\n',
        encoding="utf-8",
    )

    rows = read_json_rows(path)

    assert [row["commercial_name"] for row in rows] == ["Doliprane", "Dôliprâne"]


def test_rejects_non_object_rows(tmp_path: Path) -> None:
    path = tmp_path / "rows.json"
    path.write_text("[1, 2]")

    with pytest.raises(ValueError, match="not a JSON object"):
        read_json_rows(path)
