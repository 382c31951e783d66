"""
Authority registry CSV importer.

Layout: a three-column header (authority code, English name, Welsh name)
followed by one row per local authority. Header names are matched exactly
and in order against the column mapping. Each row yields an Area with two
names and no measures.

The area filter is tested against the code and both names. The measure and
year filters do not apply to this format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from bethyw_ingestion.importers.base import ImportCounter, log_row_skipped
from bethyw_ingestion.mapping import iter_csv_rows
from bethyw_kernel.domain.area import LANG_ENGLISH, LANG_WELSH, Area
from bethyw_kernel.domain.filters import (
    StringFilterSet,
    YearFilterTuple,
    area_filter_matches,
)
from bethyw_kernel.domain.importer import ImportSummary
from bethyw_kernel.domain.importer_registry import ImporterRegistry
from bethyw_kernel.domain.sources import ColumnMapping, SourceColumn, SourceType
from bethyw_kernel.exceptions import (
    ColumnCountError,
    ColumnNameError,
    MalformedRowError,
    RowError,
)
from bethyw_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from bethyw_kernel.domain.areas import AreaStore

logger = get_logger("ingestion.registry_csv")

_COLUMN_COUNT = 3


class AuthorityCodeCsvImporter:
    """Reads the local authority code / name registry."""

    source_type = SourceType.AUTHORITY_CODE_CSV

    def load(
        self,
        store: "AreaStore",
        stream: TextIO,
        mapping: ColumnMapping,
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportSummary:
        expected = [
            mapping.resolve(SourceColumn.AUTH_CODE),
            mapping.resolve(SourceColumn.AUTH_NAME_ENG),
            mapping.resolve(SourceColumn.AUTH_NAME_CYM),
        ]
        header, rows = iter_csv_rows(stream)
        if len(header) != _COLUMN_COUNT:
            raise ColumnCountError(_COLUMN_COUNT, len(header))
        if header != expected:
            raise ColumnNameError(expected, header)

        counter = ImportCounter(self.source_type)
        for line, tokens in rows:
            counter.read += 1
            if len(tokens) != _COLUMN_COUNT:
                counter.skipped += 1
                log_row_skipped(
                    logger, MalformedRowError(_COLUMN_COUNT, len(tokens)), line=line
                )
                continue

            code, name_eng, name_cym = tokens
            if not area_filter_matches(area_filter, code, name_eng, name_cym):
                counter.filtered += 1
                continue

            area = Area(code)
            for lang, name in ((LANG_ENGLISH, name_eng), (LANG_WELSH, name_cym)):
                try:
                    area.set_name(lang, name)
                except RowError as exc:
                    # The area is still merged, without this name
                    log_row_skipped(logger, exc, line=line, area=code)

            store.set_area(code, area)
            counter.merged += 1

        return counter.summary()


ImporterRegistry.register(AuthorityCodeCsvImporter())
