"""
Import service: catalogue entry -> open file -> AreaStore.populate.

Orchestrates the areas registry and the selected datasets for one run.
Uses structured logging (LogContext, get_logger("ingestion.*")).

Invariants:
    - The areas registry is imported with the area filter only.
    - A failing dataset is reported and the remaining datasets still run.
    - Files are opened as UTF-8 with any byte-order mark stripped, and
      closed before the next dataset is opened.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from bethyw_kernel.domain.areas import AreaStore
from bethyw_kernel.domain.filters import StringFilterSet, YearFilterTuple
from bethyw_kernel.domain.importer import ImportSummary
from bethyw_kernel.exceptions import BethYwError
from bethyw_kernel.logging_config import LogContext, get_logger

if TYPE_CHECKING:
    from bethyw_config.schema import DatasetCatalog, DatasetDef

logger = get_logger("ingestion.import_service")

_ENCODING = "utf-8-sig"
_IO_ERROR = "IO_ERROR"


@dataclass(frozen=True)
class DatasetImport:
    """A dataset that was imported."""

    dataset: str
    file: str
    summary: ImportSummary


@dataclass(frozen=True)
class DatasetFailure:
    """A dataset that could not be imported, and why."""

    dataset: str
    file: str
    error_code: str
    message: str


@dataclass(frozen=True)
class ImportReport:
    """Outcome of one load_areas() / load_datasets() call."""

    succeeded: tuple[DatasetImport, ...] = ()
    failures: tuple[DatasetFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def merge(self, other: "ImportReport") -> "ImportReport":
        return ImportReport(
            succeeded=self.succeeded + other.succeeded,
            failures=self.failures + other.failures,
        )


class ImportService:
    """Loads catalogue datasets from a directory into an AreaStore."""

    def __init__(self, catalog: "DatasetCatalog", encoding: str = _ENCODING):
        self._catalog = catalog
        self._encoding = encoding

    def load_areas(
        self,
        store: AreaStore,
        directory: Path | str,
        area_filter: StringFilterSet | None = None,
    ) -> ImportReport:
        """Import the authority registry so areas carry both names."""
        return self._run(store, Path(directory), (self._catalog.areas,), area_filter)

    def load_datasets(
        self,
        store: AreaStore,
        directory: Path | str,
        datasets: Iterable["DatasetDef"],
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportReport:
        """Import each dataset in turn with every filter applied."""
        return self._run(
            store,
            Path(directory),
            tuple(datasets),
            area_filter,
            measure_filter,
            year_filter,
        )

    def _run(
        self,
        store: AreaStore,
        directory: Path,
        datasets: tuple["DatasetDef", ...],
        area_filter: StringFilterSet | None = None,
        measure_filter: StringFilterSet | None = None,
        year_filter: YearFilterTuple | None = None,
    ) -> ImportReport:
        succeeded: list[DatasetImport] = []
        failures: list[DatasetFailure] = []
        for dataset in datasets:
            path = directory / dataset.file
            with LogContext.bind(dataset=dataset.code, source=str(path)):
                try:
                    with path.open("r", encoding=self._encoding, newline="") as stream:
                        summary = store.populate(
                            stream,
                            dataset.source_type,
                            dataset.column_mapping(),
                            area_filter=area_filter,
                            measure_filter=measure_filter,
                            year_filter=year_filter,
                        )
                except (BethYwError, OSError, UnicodeDecodeError) as exc:
                    failure = DatasetFailure(
                        dataset=dataset.code,
                        file=str(path),
                        error_code=getattr(exc, "code", _IO_ERROR),
                        message=str(exc),
                    )
                    logger.error(
                        "dataset_failed",
                        extra={
                            "file": failure.file,
                            "error_code": failure.error_code,
                            "reason": failure.message,
                        },
                    )
                    failures.append(failure)
                    continue
            succeeded.append(DatasetImport(dataset.code, str(path), summary))

        return ImportReport(succeeded=tuple(succeeded), failures=tuple(failures))
