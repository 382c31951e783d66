"""Coercion engine: typed years, values and text from raw source fields."""

from bethyw_ingestion.mapping.engine import (
    coerce_text,
    coerce_value,
    coerce_year,
    iter_csv_rows,
    parse_year_headers,
)

__all__ = [
    "coerce_text",
    "coerce_value",
    "coerce_year",
    "iter_csv_rows",
    "parse_year_headers",
]
