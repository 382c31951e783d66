"""ImporterRegistry -- SourceType to Importer dispatch registry.

The bundled importers live in ``bethyw_ingestion.importers`` and register
themselves on import. The registry imports that package the first time a
source type is looked up without a registered importer, so a caller that
only uses the kernel still gets every built-in format.
"""

from typing import ClassVar

from bethyw_kernel.domain.importer import Importer
from bethyw_kernel.domain.sources import SourceType
from bethyw_kernel.exceptions import UnsupportedSourceTypeError


class ImporterRegistry:
    """Registry of importers, one per source type."""

    _importers: ClassVar[dict[SourceType, Importer]] = {}

    @classmethod
    def register(cls, importer: Importer) -> None:
        source_type = SourceType(importer.source_type)
        existing = cls._importers.get(source_type)
        if existing is not None and type(existing) is not type(importer):
            raise ValueError(
                f"Importer already registered for {source_type.value}: "
                f"{existing.__class__.__name__}"
            )
        cls._importers[source_type] = importer

    @classmethod
    def load_builtin_importers(cls) -> None:
        """Import the bundled importers; each registers itself."""
        import bethyw_ingestion.importers  # noqa: F401

    @classmethod
    def get(cls, source_type: SourceType | str) -> Importer:
        """Return the importer for ``source_type``.

        Raises:
            UnsupportedSourceTypeError: unknown type, or nothing registered.
        """
        try:
            key = SourceType(source_type)
        except ValueError:
            raise UnsupportedSourceTypeError(str(source_type)) from None
        importer = cls._importers.get(key)
        if importer is None:
            cls.load_builtin_importers()
            importer = cls._importers.get(key)
        if importer is None:
            raise UnsupportedSourceTypeError(key.value)
        return importer

    @classmethod
    def has_importer(cls, source_type: SourceType | str) -> bool:
        try:
            key = SourceType(source_type)
        except ValueError:
            return False
        if key not in cls._importers:
            cls.load_builtin_importers()
        return key in cls._importers

    @classmethod
    def list_source_types(cls) -> list[SourceType]:
        cls.load_builtin_importers()
        return sorted(cls._importers, key=lambda t: t.value)

    @classmethod
    def unregister(cls, source_type: SourceType) -> None:
        """Remove an importer. FOR TESTING ONLY."""
        cls._importers.pop(source_type, None)
