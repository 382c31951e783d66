"""
Shared pieces of the concrete importers.

Architecture: bethyw_ingestion/importers. Importers depend on the kernel
(domain model, registry, exceptions); the kernel never imports them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bethyw_kernel.domain.importer import ImportSummary
from bethyw_kernel.domain.sources import SourceType
from bethyw_kernel.exceptions import RowError


@dataclass
class ImportCounter:
    """Mutable tally turned into an ``ImportSummary`` at the end of a load."""

    source_type: SourceType
    read: int = 0
    skipped: int = 0
    filtered: int = 0
    merged: int = 0

    def summary(self) -> ImportSummary:
        return ImportSummary(
            source_type=self.source_type,
            records_read=self.read,
            records_skipped=self.skipped,
            records_filtered=self.filtered,
            records_merged=self.merged,
        )


def log_row_skipped(logger: logging.Logger, error: RowError, **location: object) -> None:
    """Warn about a row (or a single field of it) that could not be used."""
    logger.warning(
        "row_skipped",
        extra={"error_code": error.code, "reason": str(error), **location},
    )
