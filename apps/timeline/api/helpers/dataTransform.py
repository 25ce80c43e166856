from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_KEY_CHARS_RE = re.compile(r"[^a-z0-9_]")

# Letters NFD does not decompose into base + combining mark
_LOCALE_LETTERS = str.maketrans({
    "đ": "d",
    "ð": "d",
    "ł": "l",
    "ø": "o",
})


def normalize_header_key(header: object) -> str:
    """
    Turn a spreadsheet header into a mapping key.

    "Đã Hoàn Thành" -> "da_hoan_thanh". Returns "" when nothing
    identifier-safe is left.
    """
    if header is None:
        return ""

    key = str(header).lower().strip()
    key = _WHITESPACE_RE.sub("_", key)
    key = "".join(
        ch for ch in unicodedata.normalize("NFD", key)
        if not unicodedata.combining(ch)
    )
    key = key.translate(_LOCALE_LETTERS)
    return _INVALID_KEY_CHARS_RE.sub("", key)


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_meaningful_row(row: Sequence[object]) -> bool:
    return any(_cell_text(cell).strip() for cell in row)


def transform_rows(grid: Sequence[Sequence[object]]) -> list[dict[str, str]]:
    """
    Rows after the header become dicts keyed by normalized header.

    - Blank headers drop their column
    - Rows with no non-blank cell are skipped
    - Short rows are padded with ""
    - Source row order is preserved
    """
    if not grid:
        return []

    columns = [
        (index, key)
        for index, key in enumerate(normalize_header_key(h) for h in grid[0])
        if key
    ]

    records: list[dict[str, str]] = []
    for row in grid[1:]:
        if not row or not is_meaningful_row(row):
            continue

        record: dict[str, str] = {}
        for index, key in columns:
            record[key] = _cell_text(row[index]) if index < len(row) else ""
        records.append(record)

    return records
