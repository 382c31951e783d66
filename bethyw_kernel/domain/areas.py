"""
AreaStore -- the top-level container of Area records.

Responsibility:
    Owns every Area, keyed by local authority code. Inserting a code that
    already exists merges the incoming Area into the stored one
    (``Area.overwrite``) instead of replacing it. ``populate`` checks the
    stream and dispatches to the importer registered for the source type.

Invariants:
    - One Area per code; iteration is in code order.
    - Stored Areas are owned copies; callers never share them.
    - A failed populate() leaves previously merged rows in place.

Failure modes:
    - ``UnreadableSourceError`` / ``EmptySourceError`` before any parsing.
    - ``UnsupportedSourceTypeError`` if no importer handles the type.
    - Importer errors (schema, configuration, malformed source) propagate.
"""

from __future__ import annotations

import io
import json
from typing import Iterator, TextIO

from bethyw_kernel.domain.area import Area
from bethyw_kernel.domain.filters import StringFilterSet, YearFilterTuple
from bethyw_kernel.domain.importer import ImportSummary
from bethyw_kernel.domain.importer_registry import ImporterRegistry
from bethyw_kernel.domain.sources import ColumnMapping, SourceType
from bethyw_kernel.exceptions import (
    AreaNotFoundError,
    EmptySourceError,
    UnreadableSourceError,
)
from bethyw_kernel.logging_config import LogContext, get_logger

logger = get_logger("kernel.areas")


def _source_name(stream: object) -> str:
    name = getattr(stream, "name", "")
    return name if isinstance(name, str) else ""


def check_source(stream: TextIO) -> TextIO:
    """Verify ``stream`` is a readable, non-empty text stream.

    Returns the stream to parse, positioned where it was on entry. A
    non-seekable stream is buffered into memory so it can be rewound.

    Raises:
        UnreadableSourceError: closed, write-only or binary stream.
        EmptySourceError: nothing but whitespace to read.
    """
    source = _source_name(stream)
    try:
        readable = not stream.closed and stream.readable()
    except (AttributeError, OSError, ValueError):
        readable = False
    if not readable:
        raise UnreadableSourceError(source)

    if not stream.seekable():
        stream = io.StringIO(stream.read())

    position = stream.tell()
    first_line = stream.readline()
    if isinstance(first_line, bytes):
        stream.seek(position)
        raise UnreadableSourceError(source)
    if not first_line.strip() and not stream.read().strip():
        stream.seek(position)
        raise EmptySourceError(source)
    stream.seek(position)
    return stream


class AreaStore:
    """All imported areas, ordered by local authority code."""

    def __init__(self) -> None:
        self._areas: dict[str, Area] = {}

    # -------------------------------------------------------------------------
    # Merge-aware insertion and lookup
    # -------------------------------------------------------------------------

    def set_area(self, code: str, area: Area) -> None:
        """Insert ``area`` under ``code``, merging if the code exists."""
        if area.local_authority_code != code:
            raise ValueError(
                f"Area code {area.local_authority_code!r} does not match key {code!r}"
            )
        existing = self._areas.get(code)
        if existing is not None:
            existing.overwrite(area)
        else:
            self._areas[code] = area.copy()

    def get_area(self, code: str) -> Area:
        try:
            return self._areas[code]
        except KeyError:
            raise AreaNotFoundError(code) from None

    def has_area(self, code: str) -> bool:
        return code in self._areas

    def size(self) -> int:
        return len(self._areas)

    def __len__(self) -> int:
        return len(self._areas)

    def __contains__(self, code: object) -> bool:
        return code in self._areas

    def __iter__(self) -> Iterator[Area]:
        for code in sorted(self._areas):
            yield self._areas[code]

    def codes(self) -> list[str]:
        return sorted(self._areas)

    # -------------------------------------------------------------------------
    # Import dispatch
    # -------------------------------------------------------------------------

    def populate(
        self,
        stream: TextIO,
        source_type: SourceType | str,
        mapping: ColumnMapping,
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportSummary:
        """Parse ``stream`` as ``source_type`` and merge it into the store.

        The stream is consumed but not closed. Filters are optional; ``None``
        and empty both mean no restriction.
        """
        stream = check_source(stream)
        importer = ImporterRegistry.get(source_type)
        source_type = SourceType(source_type)

        with LogContext.bind(
            dataset=mapping.name or None,
            source_type=source_type.value,
            source=_source_name(stream) or None,
        ):
            logger.info(
                "import_started",
                extra={
                    "areas_before": len(self._areas),
                    "area_filter": area_filter,
                    "measure_filter": measure_filter,
                    "year_filter": year_filter,
                },
            )
            summary = importer.load(
                self,
                stream,
                mapping,
                area_filter=area_filter,
                measure_filter=measure_filter,
                year_filter=year_filter,
            )
            logger.info(
                "import_completed",
                extra={
                    "records_read": summary.records_read,
                    "records_skipped": summary.records_skipped,
                    "records_filtered": summary.records_filtered,
                    "records_merged": summary.records_merged,
                    "areas_after": len(self._areas),
                },
            )
        return summary

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {area.local_authority_code: area.to_dict() for area in self}

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the whole store; an empty store is ``{}``."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def format_table(self) -> str:
        """One block per area in code order, separated by blank lines."""
        return "".join(f"{area.format_table()}\n\n" for area in self)
