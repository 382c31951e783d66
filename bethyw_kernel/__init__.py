"""
bethyw_kernel -- In-memory model of Welsh local authority statistics.

Measure -> Area -> AreaStore, the import filters, column mappings, the
importer registry and the typed exception hierarchy.

Architecture:
    Nothing in bethyw_kernel imports from bethyw_ingestion or
    bethyw_config. Importers register with ImporterRegistry when
    bethyw_ingestion is imported.
"""
