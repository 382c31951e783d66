"""Dataset import services (catalogue-driven loading)."""

from bethyw_ingestion.services.import_service import (
    DatasetFailure,
    DatasetImport,
    ImportReport,
    ImportService,
)

__all__ = [
    "DatasetFailure",
    "DatasetImport",
    "ImportReport",
    "ImportService",
]
