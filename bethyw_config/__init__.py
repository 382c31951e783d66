"""
bethyw_config -- single public entrypoint for the dataset catalogue.

Responsibility:
    Provides the ONLY way to obtain the dataset catalogue at runtime
    through ``get_catalog()``. The catalogue names every importable file,
    its source format and its column mapping.

Architecture position:
    Configuration. This package sits above ``bethyw_kernel`` and beside
    ``bethyw_ingestion``. The kernel MUST NEVER import from
    ``bethyw_config``; ``DatasetDef.column_mapping()`` bridges a catalogue
    entry into the kernel's ``ColumnMapping``.

Failure modes:
    - ``FileNotFoundError`` -- the catalogue file does not exist.
    - ``yaml.YAMLError`` -- the catalogue is not valid YAML.
    - ``KeyError`` / ``ValueError`` -- schema violations (see loader).
"""

from __future__ import annotations

from pathlib import Path

from bethyw_config.loader import load_yaml_file, parse_catalog
from bethyw_config.schema import DatasetCatalog, DatasetDef
from bethyw_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default catalogue shipped with the package
_DEFAULT_CATALOG = Path(__file__).parent / "sets" / "datasets.yaml"


def get_catalog(config_path: Path | str | None = None) -> DatasetCatalog:
    """Load and parse the dataset catalogue.

    Args:
        config_path: Override path to a catalogue YAML file. Defaults to
            bethyw_config/sets/datasets.yaml.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CATALOG
    catalog = parse_catalog(load_yaml_file(path))
    _logger.debug(
        "catalog_loaded",
        extra={
            "path": str(path),
            "datasets": catalog.codes(),
            "checksum": catalog.checksum,
        },
    )
    return catalog


__all__ = [
    "DatasetCatalog",
    "DatasetDef",
    "get_catalog",
]
