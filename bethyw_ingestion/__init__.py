"""
bethyw_ingestion -- Source-format importers and the dataset import service.

Parses the three supported source formats (authority registry CSV,
authority-by-year CSV, StatsWales JSON) into the kernel's AreaStore.

Architecture:
    bethyw_ingestion/ is a top-level package. Importing it registers every
    importer with bethyw_kernel's ImporterRegistry. Nothing in the kernel
    imports from ingestion.
"""

import bethyw_ingestion.importers  # noqa: F401  (registers importers)
