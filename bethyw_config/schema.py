"""
Dataset catalogue schema.

Defines the human-authored catalogue of importable files. YAML is parsed
into these types by the loader; the import service and the CLI consume
them. The kernel never sees these types: ``DatasetDef.column_mapping()``
translates an entry into the kernel's ``ColumnMapping``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from bethyw_kernel.domain.sources import ColumnMapping, SourceColumn, SourceType
from bethyw_kernel.exceptions import DatasetNotFoundError

# ---------------------------------------------------------------------------
# Dataset definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatasetDef:
    """One importable file: where it lives, its format and its columns."""

    code: str
    name: str
    file: str
    source_type: SourceType
    columns: Mapping[SourceColumn, str] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(
            (self.code, self.name, self.file, self.source_type,
             tuple(sorted(self.columns.items())))
        )

    def column_mapping(self) -> ColumnMapping:
        return ColumnMapping(columns=dict(self.columns), name=self.code)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatasetCatalog:
    """The areas registry plus the statistics datasets, in declared order."""

    areas: DatasetDef
    datasets: tuple[DatasetDef, ...] = ()
    checksum: str = ""

    def get(self, code: str) -> DatasetDef:
        """Dataset by code, ignoring case.

        Raises:
            DatasetNotFoundError: no dataset declares ``code``.
        """
        wanted = code.strip().lower()
        for dataset in self.datasets:
            if dataset.code.lower() == wanted:
                return dataset
        raise DatasetNotFoundError(code)

    def all(self) -> tuple[DatasetDef, ...]:
        return self.datasets

    def codes(self) -> list[str]:
        return [dataset.code for dataset in self.datasets]
