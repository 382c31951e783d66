"""
Import filters -- pure predicates consumed by the importers.

Every filter is optional. ``None`` (absent) and an empty set / ``(0, 0)``
(present but empty) both mean "no restriction"; the two representations
are kept distinct in the types so callers can pass either.

    area filter     set of case-insensitive substrings
    measure filter  set of measure codes (compared lowercase)
    year filter     inclusive (start, end); (0, 0) means all years
"""

from __future__ import annotations

from typing import AbstractSet

StringFilterSet = AbstractSet[str]
YearFilterTuple = tuple[int, int]

ALL_YEARS: YearFilterTuple = (0, 0)


def contains_ignore_case(base: str, search: str) -> bool:
    """True if ``search`` is a case-insensitive substring of ``base``."""
    return search.lower() in base.lower()


def is_unrestricted(string_filter: StringFilterSet | None) -> bool:
    return string_filter is None or len(string_filter) == 0


def area_filter_matches(
    area_filter: StringFilterSet | None,
    *candidates: str,
) -> bool:
    """True if any filter entry is a substring of any candidate.

    Candidates are the fields the source format carries: the code, and the
    English/Welsh names where available.
    """
    if is_unrestricted(area_filter):
        return True
    return any(
        contains_ignore_case(candidate, term)
        for term in area_filter
        for candidate in candidates
        if candidate
    )


def measure_filter_matches(
    measure_filter: StringFilterSet | None,
    measure_code: str,
) -> bool:
    if is_unrestricted(measure_filter):
        return True
    code = measure_code.lower()
    return any(term.lower() == code for term in measure_filter)


def year_filter_matches(year_filter: YearFilterTuple | None, year: int) -> bool:
    """Inclusive range check; ``None`` or ``(0, 0)`` admits every year."""
    if year_filter is None:
        return True
    start, end = year_filter
    if start == 0 and end == 0:
        return True
    return start <= year <= end
