"""
Welsh Statistics JSON importer.

Accepts either a top-level array of flat records or the StatsWales export
envelope, an object whose ``value`` key holds that array. Each record
carries one reading: authority code and English name, measure code and
name (or the mapping's single-measure constants), year and value.

Filters are applied per record in this order: year (on the reading),
measure (before attaching to the area), area (code or English name, before
merging into the store).

Failure modes:
    - Document is not valid JSON: MalformedSourceError.
    - Document has no record array: RecordArrayNotFoundError.
    - Record lacks a mapped field, or has an unusable year or value: the
      record is skipped with a warning.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, TextIO

from bethyw_ingestion.importers.base import ImportCounter, log_row_skipped
from bethyw_ingestion.mapping import coerce_text, coerce_value, coerce_year
from bethyw_kernel.domain.area import LANG_ENGLISH, Area
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
    InvalidValueError,
    MalformedSourceError,
    MissingFieldError,
    RecordArrayNotFoundError,
    RowError,
)
from bethyw_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from bethyw_kernel.domain.areas import AreaStore

logger = get_logger("ingestion.json")

_ENVELOPE_KEY = "value"


@dataclass(frozen=True)
class _Reading:
    """One record, coerced."""

    code: str
    name_eng: str
    measure_code: str
    measure_label: str
    year: int
    value: float


def _record_array(document: Any) -> list[Any]:
    if isinstance(document, list):
        return document
    if isinstance(document, dict) and isinstance(document.get(_ENVELOPE_KEY), list):
        return document[_ENVELOPE_KEY]
    raise RecordArrayNotFoundError(type(document).__name__)


def _field(record: Mapping[str, Any], key: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise MissingFieldError(key) from None


def _parse_record(record: Any, mapping: ColumnMapping) -> _Reading:
    """Coerce one record; raises RowError if it cannot be used."""
    if not isinstance(record, dict):
        raise InvalidValueError(record, "a JSON object")
    try:
        measure_code = mapping.measure_code_for(record)
        measure_label = mapping.measure_name_for(record)
    except KeyError as exc:
        raise MissingFieldError(str(exc.args[0])) from None

    code = coerce_text(_field(record, mapping.resolve(SourceColumn.AUTH_CODE)))
    if not code:
        raise InvalidValueError(code, "an authority code")
    return _Reading(
        code=code,
        name_eng=coerce_text(
            _field(record, mapping.resolve(SourceColumn.AUTH_NAME_ENG))
        ),
        measure_code=coerce_text(measure_code).lower(),
        measure_label=coerce_text(measure_label),
        year=coerce_year(_field(record, mapping.resolve(SourceColumn.YEAR))),
        value=coerce_value(_field(record, mapping.resolve(SourceColumn.VALUE))),
    )


class WelshStatsJsonImporter:
    """Reads StatsWales-style JSON: one reading per record."""

    source_type = SourceType.WELSH_STATS_JSON

    def load(
        self,
        store: "AreaStore",
        stream: TextIO,
        mapping: ColumnMapping,
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportSummary:
        # Surface configuration errors before touching the data.
        for column in (
            SourceColumn.AUTH_CODE,
            SourceColumn.AUTH_NAME_ENG,
            SourceColumn.YEAR,
            SourceColumn.VALUE,
        ):
            mapping.resolve(column)
        if mapping.is_single_measure:
            mapping.resolve(SourceColumn.SINGLE_MEASURE_CODE)
            mapping.resolve(SourceColumn.SINGLE_MEASURE_NAME)
        else:
            mapping.resolve(SourceColumn.MEASURE_NAME)

        try:
            document = json.loads(stream.read())
        except json.JSONDecodeError as exc:
            raise MalformedSourceError(str(exc)) from exc
        records = _record_array(document)

        counter = ImportCounter(self.source_type)
        for index, record in enumerate(records):
            counter.read += 1
            try:
                reading = _parse_record(record, mapping)
            except RowError as exc:
                counter.skipped += 1
                log_row_skipped(logger, exc, record=index)
                continue

            area = Area(reading.code)
            if reading.name_eng:
                area.set_name(LANG_ENGLISH, reading.name_eng)

            measure = Measure(reading.measure_code, reading.measure_label)
            if year_filter_matches(year_filter, reading.year):
                measure.set_value(reading.year, reading.value)
            if measure_filter_matches(measure_filter, reading.measure_code):
                area.set_measure(reading.measure_code, measure)

            if not area_filter_matches(area_filter, reading.code, reading.name_eng):
                counter.filtered += 1
                continue
            store.set_area(reading.code, area)
            counter.merged += 1

        return counter.summary()


ImporterRegistry.register(WelshStatsJsonImporter())
