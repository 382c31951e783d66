"""Command-line argument parsing: datasets, filters and the year range."""

from __future__ import annotations

import re
from typing import Iterable

from bethyw_config.schema import DatasetCatalog, DatasetDef
from bethyw_kernel.domain.filters import ALL_YEARS, YearFilterTuple

ALL = "all"
INVALID_YEARS = "Invalid input for years argument"

_YEAR_RE = re.compile(r"\d{4}")


def split_values(values: Iterable[str] | None) -> list[str]:
    """Flatten repeated, comma-separated option values; drop blanks."""
    if not values:
        return []
    return [
        token.strip()
        for value in values
        for token in value.split(",")
        if token.strip()
    ]


def _wants_all(tokens: list[str]) -> bool:
    return not tokens or any(token.lower() == ALL for token in tokens)


def parse_datasets_arg(
    values: Iterable[str] | None, catalog: DatasetCatalog
) -> tuple[DatasetDef, ...]:
    """Datasets to import, in catalogue order when ``all`` is requested.

    Raises:
        DatasetNotFoundError: a code the catalogue does not declare.
    """
    tokens = split_values(values)
    if _wants_all(tokens):
        return catalog.all()
    selected: list[DatasetDef] = []
    for token in tokens:
        dataset = catalog.get(token)
        if dataset not in selected:
            selected.append(dataset)
    return tuple(selected)


def parse_areas_arg(values: Iterable[str] | None) -> frozenset[str]:
    """Area filter; empty means every area."""
    tokens = split_values(values)
    if _wants_all(tokens):
        return frozenset()
    return frozenset(tokens)


def parse_measures_arg(values: Iterable[str] | None) -> frozenset[str]:
    """Measure filter, lowercased; empty means every measure."""
    tokens = split_values(values)
    if _wants_all(tokens):
        return frozenset()
    return frozenset(token.lower() for token in tokens)


def parse_years_arg(value: str | None) -> YearFilterTuple:
    """Year range from ``0``, ``0-0``, ``YYYY`` or ``YYYY-ZZZZ``.

    Raises:
        ValueError: any other form, or a range that ends before it starts.
    """
    if value is None:
        return ALL_YEARS
    text = value.strip()
    if text in ("0", "0-0"):
        return ALL_YEARS

    parts = text.split("-")
    if len(parts) not in (1, 2) or not all(_YEAR_RE.fullmatch(p) for p in parts):
        raise ValueError(INVALID_YEARS)
    start = int(parts[0])
    end = int(parts[-1])
    if start > end:
        raise ValueError(INVALID_YEARS)
    return (start, end)
