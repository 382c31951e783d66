"""
Source types and column mappings.

A ``ColumnMapping`` associates logical fields (``SourceColumn``) with the
physical column header or JSON key of one dataset. It is static
configuration: importers read it, never mutate it.

Two measure-naming conventions are supported:

    multi-measure   MEASURE_CODE / MEASURE_NAME name per-record fields
    single-measure  SINGLE_MEASURE_CODE / SINGLE_MEASURE_NAME are constants;
                    the whole file is one measure
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from bethyw_kernel.exceptions import MissingColumnError


class SourceType(str, Enum):
    """Shape of a source file."""

    AUTHORITY_CODE_CSV = "authority_code_csv"  # code,name_en,name_cy registry
    AUTHORITY_BY_YEAR_CSV = "authority_by_year_csv"  # code + 11 year columns
    WELSH_STATS_JSON = "welsh_stats_json"  # StatsWales flat record export


class SourceColumn(str, Enum):
    """Logical fields a column mapping can resolve."""

    AUTH_CODE = "auth_code"
    AUTH_NAME_ENG = "auth_name_eng"
    AUTH_NAME_CYM = "auth_name_cym"
    MEASURE_CODE = "measure_code"
    MEASURE_NAME = "measure_name"
    SINGLE_MEASURE_CODE = "single_measure_code"
    SINGLE_MEASURE_NAME = "single_measure_name"
    YEAR = "year"
    VALUE = "value"


@dataclass(frozen=True)
class ColumnMapping:
    """Logical column -> header / JSON key (or single-measure constant)."""

    columns: Mapping[SourceColumn, str] = field(default_factory=dict)
    name: str = ""  # Dataset name, for diagnostics only

    def __post_init__(self) -> None:
        normalized = {SourceColumn(k): v for k, v in self.columns.items()}
        object.__setattr__(self, "columns", MappingProxyType(normalized))

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.columns.items())), self.name))

    @classmethod
    def of(cls, name: str = "", **columns: str) -> "ColumnMapping":
        """Build from keyword arguments named after ``SourceColumn`` values."""
        return cls(columns={SourceColumn(k): v for k, v in columns.items()}, name=name)

    def has(self, column: SourceColumn) -> bool:
        return column in self.columns

    def resolve(self, column: SourceColumn) -> str:
        """Return the configured header/key for ``column``.

        Raises:
            MissingColumnError: the mapping does not declare ``column``.
        """
        try:
            return self.columns[column]
        except KeyError:
            raise MissingColumnError(column.value, self.name or None) from None

    @property
    def is_single_measure(self) -> bool:
        return not self.has(SourceColumn.MEASURE_CODE)

    def measure_code_for(self, record: Mapping[str, Any]) -> Any:
        """Measure code of a record, or the single-measure constant."""
        if self.is_single_measure:
            return self.resolve(SourceColumn.SINGLE_MEASURE_CODE)
        return record[self.resolve(SourceColumn.MEASURE_CODE)]

    def measure_name_for(self, record: Mapping[str, Any]) -> Any:
        """Measure name of a record, or the single-measure constant."""
        if self.is_single_measure:
            return self.resolve(SourceColumn.SINGLE_MEASURE_NAME)
        return record[self.resolve(SourceColumn.MEASURE_NAME)]
