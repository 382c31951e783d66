"""
Coercion engine: raw CSV tokens / JSON values -> typed fields. ZERO I/O
beyond iterating an already-open stream.

CSV cells arrive as strings; JSON values arrive as strings or numbers.
Both representations are accepted for years and values. Failures raise
``InvalidValueError`` (a RowError) so importers can skip the field.
"""

from __future__ import annotations

import csv
import math
from typing import Any, Iterator, TextIO

from bethyw_kernel.exceptions import InvalidValueError

_BOM = "\ufeff"


# -----------------------------------------------------------------------------
# Coercion (pure)
# -----------------------------------------------------------------------------


def coerce_text(value: Any) -> str:
    """Strings pass through stripped; numbers become their string form."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise InvalidValueError(value, "text")


def coerce_year(value: Any) -> int:
    """Year from an int, an integral float, or a numeric string."""
    if isinstance(value, bool):
        raise InvalidValueError(value, "an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidValueError(value, "an integer")
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            raise InvalidValueError(value, "an integer") from None
    raise InvalidValueError(value, "an integer")


def coerce_value(value: Any) -> float:
    """Reading from a JSON number or a numeric string, as a finite float.

    NaN and infinities are rejected in either form; the JSON report cannot
    carry them.
    """
    if isinstance(value, bool):
        raise InvalidValueError(value, "a number")
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            raise InvalidValueError(value, "a number")
        try:
            result = float(s)
        except ValueError:
            raise InvalidValueError(value, "a number") from None
    else:
        raise InvalidValueError(value, "a number")
    if not math.isfinite(result):
        raise InvalidValueError(value, "a number")
    return result


def parse_year_headers(tokens: list[str]) -> list[int]:
    """Year columns of a wide CSV header.

    All-or-nothing: any non-numeric header yields an empty list.
    """
    try:
        return [coerce_year(token) for token in tokens]
    except InvalidValueError:
        return []


# -----------------------------------------------------------------------------
# CSV reading
# -----------------------------------------------------------------------------


def read_header(reader: Iterator[list[str]]) -> list[str]:
    """First row of ``reader``, stripped, with any BOM removed."""
    header = next(reader, [])
    tokens = [token.strip() for token in header]
    if tokens:
        tokens[0] = tokens[0].lstrip(_BOM)
    return tokens


def iter_csv_rows(stream: TextIO) -> tuple[list[str], Iterator[tuple[int, list[str]]]]:
    """Split ``stream`` into its header and an iterator of (line, tokens).

    Blank lines are skipped. Tokens are stripped of surrounding whitespace.
    """
    reader = csv.reader(stream)
    header = read_header(reader)

    def rows() -> Iterator[tuple[int, list[str]]]:
        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            yield reader.line_num, [cell.strip() for cell in row]

    return header, rows()
