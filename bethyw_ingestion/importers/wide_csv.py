"""
Authority-by-year ("wide") CSV importer.

Layout: a header of the authority-code column followed by eleven year
columns, then one row per local authority holding one value per year. The
whole file is a single measure whose code and label come from the column
mapping's single-measure constants.

Failure modes:
    - First header cell is not the mapped code column: MissingColumnError.
    - Header is not twelve columns wide: ColumnCountError.
    - Year headers that are not all numeric: no readings are stored (logged
      at DEBUG); areas are still merged.
    - Empty, missing or non-numeric value cells: that cell is skipped with a
      warning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from bethyw_ingestion.importers.base import ImportCounter, log_row_skipped
from bethyw_ingestion.mapping import coerce_value, iter_csv_rows, parse_year_headers
from bethyw_kernel.domain.area import Area
from bethyw_kernel.domain.filters import (
    StringFilterSet,
    YearFilterTuple,
    area_filter_matches,
    measure_filter_matches,
    year_filter_matches,
)
from bethyw_kernel.domain.importer import ImportSummary
from bethyw_kernel.domain.importer_registry import ImporterRegistry
from bethyw_kernel.domain.measure import Measure
from bethyw_kernel.domain.sources import ColumnMapping, SourceColumn, SourceType
from bethyw_kernel.exceptions import (
    ColumnCountError,
    InvalidValueError,
    MalformedRowError,
    MissingColumnError,
)
from bethyw_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from bethyw_kernel.domain.areas import AreaStore

logger = get_logger("ingestion.wide_csv")

_COLUMN_COUNT = 12


class AuthorityByYearCsvImporter:
    """Reads one measure laid out as one column per year."""

    source_type = SourceType.AUTHORITY_BY_YEAR_CSV

    def load(
        self,
        store: "AreaStore",
        stream: TextIO,
        mapping: ColumnMapping,
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportSummary:
        code_column = mapping.resolve(SourceColumn.AUTH_CODE)
        measure_code = mapping.resolve(SourceColumn.SINGLE_MEASURE_CODE).lower()
        measure_label = mapping.resolve(SourceColumn.SINGLE_MEASURE_NAME)

        header, rows = iter_csv_rows(stream)
        if not header or header[0] != code_column:
            raise MissingColumnError(code_column, mapping.name or None)
        if len(header) != _COLUMN_COUNT:
            raise ColumnCountError(_COLUMN_COUNT, len(header))

        years = parse_year_headers(header[1:])
        if not years:
            logger.debug("year_headers_unparsed", extra={"header": header[1:]})
        include_measure = measure_filter_matches(measure_filter, measure_code)

        counter = ImportCounter(self.source_type)
        for line, tokens in rows:
            counter.read += 1
            code = tokens[0]
            if not code:
                counter.skipped += 1
                log_row_skipped(
                    logger, InvalidValueError(code, "an authority code"), line=line
                )
                continue
            if not area_filter_matches(area_filter, code):
                counter.filtered += 1
                continue

            area = Area(code)
            if include_measure:
                measure = Measure(measure_code, measure_label)
                for offset, year in enumerate(years, start=1):
                    if not year_filter_matches(year_filter, year):
                        continue
                    if offset >= len(tokens):
                        log_row_skipped(
                            logger,
                            MalformedRowError(_COLUMN_COUNT, len(tokens)),
                            line=line,
                            area=code,
                            year=year,
                        )
                        continue
                    try:
                        value = coerce_value(tokens[offset])
                    except InvalidValueError as exc:
                        log_row_skipped(logger, exc, line=line, area=code, year=year)
                        continue
                    measure.set_value(year, value)
                area.set_measure(measure_code, measure)

            store.set_area(code, area)
            counter.merged += 1

        return counter.summary()


ImporterRegistry.register(AuthorityByYearCsvImporter())
