"""
Importer protocol and import summary DTO.

Contract:
    Importer.load() reads one text stream from its current position to the
    end, merges what it parses into the store through ``AreaStore.set_area``
    and returns an ``ImportSummary``. Row-level errors are logged and
    skipped; dataset-level errors propagate.

Architecture: bethyw_kernel/domain. Concrete importers live in
bethyw_ingestion and register themselves with ``ImporterRegistry``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from bethyw_kernel.domain.filters import StringFilterSet, YearFilterTuple
from bethyw_kernel.domain.sources import ColumnMapping, SourceType

if TYPE_CHECKING:
    from bethyw_kernel.domain.areas import AreaStore


@dataclass(frozen=True)
class ImportSummary:
    """Counts for one populate() call."""

    source_type: SourceType
    records_read: int = 0
    records_skipped: int = 0
    records_filtered: int = 0
    records_merged: int = 0


@runtime_checkable
class Importer(Protocol):
    """Parses one source format into an AreaStore."""

    source_type: SourceType

    def load(
        self,
        store: "AreaStore",
        stream: TextIO,
        mapping: ColumnMapping,
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportSummary:
        ...
