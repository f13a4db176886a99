"""
Delimited text parser for the dataset payloads.

Splits on commas that sit outside a pair of double quotes. This is a
heuristic, not an RFC 4180 parser: escaped quotes ("") inside a quoted
field are not supported.
"""

from __future__ import annotations

import re
from typing import Final

# Comma followed by an even number of quotes up to end of line
FIELD_SPLIT: Final[re.Pattern[str]] = re.compile(r',(?=(?:[^"]*"[^"]*")*[^"]*$)')


def split_fields(line: str) -> list[str]:
    """Split one line into cleaned field values.

    Each value is trimmed, loses one surrounding double quote on either
    side, and is trimmed again.
    """
    return [_clean(value) for value in FIELD_SPLIT.split(line)]


def _clean(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def parse_delimited(text: str) -> list[dict[str, str]]:
    """Parse a header-row delimited payload into header-keyed rows.

    Blank lines are ignored (including a trailing newline at EOF). Rows
    shorter than the header are padded with empty strings; extra fields are
    dropped. Rows whose fields are all empty are discarded. File order is
    preserved, since ranking ties fall back to it.

    Args:
        text: Raw payload, newline delimited.

    Returns:
        One dict per data row, keyed by header name.
    """
    # Only "\n" ends a row; other line-break characters can appear inside fields
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return []

    headers = split_fields(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        values = split_fields(line)
        row = {
            header: values[index] if index < len(values) else ""
            for index, header in enumerate(headers)
        }
        if any(row.values()):
            rows.append(row)
    return rows
