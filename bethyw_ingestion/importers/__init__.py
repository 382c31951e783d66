"""Concrete importers. Importing this package registers each one."""

from bethyw_ingestion.importers.base import ImportCounter, log_row_skipped
from bethyw_ingestion.importers.json_importer import WelshStatsJsonImporter
from bethyw_ingestion.importers.registry_csv import AuthorityCodeCsvImporter
from bethyw_ingestion.importers.wide_csv import AuthorityByYearCsvImporter

__all__ = [
    "AuthorityByYearCsvImporter",
    "AuthorityCodeCsvImporter",
    "ImportCounter",
    "WelshStatsJsonImporter",
    "log_row_skipped",
]
