"""Parser for the regulations CSV export.

The export is comma-separated with double-quote quoting (doubled quotes escape a
literal quote), CRLF or LF line endings, a few title rows, and one record per
row in a fixed positional layout. Malformed rows are dropped, never raised.
"""
from __future__ import annotations

from typing import List, Optional

import structlog

from config.loader import get_id_prefix, get_preamble_rows
from models.regulation import Regulation

logger = structlog.get_logger(__name__)

MIN_ROW_FIELDS = 3


def _flush_row(row: List[str], rows: List[List[str]]) -> None:
    # Fully blank rows are dropped
    if any(field != "" for field in row):
        rows.append(row)


def parse_rows(text: str) -> List[List[str]]:
    """Split CSV text into rows of trimmed fields in a single pass."""
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if char == '"':
            if in_quotes and i + 1 < length and text[i + 1] == '"':
                field.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            row.append("".join(field).strip())
            field = []
        elif char == "\n" and not in_quotes:
            row.append("".join(field).strip())
            _flush_row(row, rows)
            row = []
            field = []
        elif char == "\r" and not in_quotes:
            pass
        else:
            field.append(char)
        i += 1

    if field or row:
        row.append("".join(field).strip())
        _flush_row(row, rows)

    return rows


def is_record_row(row: List[str], id_prefix: str = "reg/") -> bool:
    """True if the row is long enough and carries a record id at position 1."""
    if len(row) < MIN_ROW_FIELDS:
        return False
    return bool(row[1]) and row[1].startswith(id_prefix)


def parse_regulations(
    text: str,
    preamble_rows: Optional[int] = None,
    id_prefix: Optional[str] = None,
) -> List[Regulation]:
    """Parse the regulations export into an ordered list of records.

    Args:
        text: Raw CSV text.
        preamble_rows: Leading rows to skip (defaults to config, 4).
        id_prefix: Required record id prefix (defaults to config, "reg/").

    Returns:
        Records in file order. Empty or preamble-only input yields [].
    """
    skip = get_preamble_rows() if preamble_rows is None else preamble_rows
    prefix = get_id_prefix() if id_prefix is None else id_prefix

    rows = parse_rows(text)
    data_rows = rows[skip:]

    regulations = [
        Regulation.from_row(row) for row in data_rows if is_record_row(row, prefix)
    ]

    logger.info(
        "parse_completed",
        total_rows=len(rows),
        data_rows=len(data_rows),
        records=len(regulations),
        dropped=len(data_rows) - len(regulations),
    )
    return regulations
