"""Domain model: Measure, Area, AreaStore, filters, sources, importer registry."""

from bethyw_kernel.domain.area import LANG_ENGLISH, LANG_WELSH, Area
from bethyw_kernel.domain.areas import AreaStore, check_source
from bethyw_kernel.domain.filters import (
    ALL_YEARS,
    StringFilterSet,
    YearFilterTuple,
    area_filter_matches,
    contains_ignore_case,
    measure_filter_matches,
    year_filter_matches,
)
from bethyw_kernel.domain.importer import Importer, ImportSummary
from bethyw_kernel.domain.importer_registry import ImporterRegistry
from bethyw_kernel.domain.measure import Measure
from bethyw_kernel.domain.sources import ColumnMapping, SourceColumn, SourceType

__all__ = [
    "ALL_YEARS",
    "Area",
    "AreaStore",
    "ColumnMapping",
    "ImportSummary",
    "Importer",
    "ImporterRegistry",
    "LANG_ENGLISH",
    "LANG_WELSH",
    "Measure",
    "SourceColumn",
    "SourceType",
    "StringFilterSet",
    "YearFilterTuple",
    "area_filter_matches",
    "check_source",
    "contains_ignore_case",
    "measure_filter_matches",
    "year_filter_matches",
]
