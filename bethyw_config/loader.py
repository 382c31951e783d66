"""
Catalogue Loader (``bethyw_config.loader``).

Responsibility
--------------
Loads the dataset catalogue YAML file and parses it into typed
``bethyw_config.schema`` dataclass instances. The single public entry
point for runtime use is ``bethyw_config.get_catalog()``.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* Dataset codes are unique, ignoring case.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  catalogue contents.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown source type or column key  -> ``ValueError``.
* Duplicate dataset code  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from bethyw_config.schema import DatasetCatalog, DatasetDef
from bethyw_kernel.domain.sources import SourceColumn, SourceType


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_source_type(value: Any) -> SourceType:
    try:
        return SourceType(str(value))
    except ValueError:
        raise ValueError(
            f"Unknown source_type {value!r}; expected one of "
            f"{[t.value for t in SourceType]}"
        ) from None


def parse_columns(data: dict[str, Any]) -> dict[SourceColumn, str]:
    """Parse the ``columns`` block: logical column key -> header or constant."""
    columns: dict[SourceColumn, str] = {}
    for key, value in data.items():
        try:
            column = SourceColumn(str(key))
        except ValueError:
            raise ValueError(f"Unknown column key {key!r}") from None
        columns[column] = str(value)
    return columns


def parse_dataset_def(data: dict[str, Any]) -> DatasetDef:
    """
    Parse a ``DatasetDef`` from a dict.

    Raises:
        KeyError: if ``code``, ``name``, ``file`` or ``source_type`` is
            missing.
        ValueError: if the source type or a column key is unknown.
    """
    return DatasetDef(
        code=str(data["code"]),
        name=str(data["name"]),
        file=str(data["file"]),
        source_type=parse_source_type(data["source_type"]),
        columns=parse_columns(data.get("columns") or {}),
    )


def parse_catalog(data: dict[str, Any]) -> DatasetCatalog:
    """
    Parse the whole catalogue document.

    Raises:
        KeyError: if ``areas`` is missing.
        ValueError: on a duplicate dataset code.
    """
    areas = parse_dataset_def(data["areas"])
    datasets = tuple(parse_dataset_def(d) for d in data.get("datasets") or ())

    seen: set[str] = set()
    for dataset in datasets:
        key = dataset.code.lower()
        if key in seen:
            raise ValueError(f"Duplicate dataset code {dataset.code!r}")
        seen.add(key)

    return DatasetCatalog(
        areas=areas,
        datasets=datasets,
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of the catalogue document."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
