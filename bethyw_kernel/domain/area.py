"""
Area -- one local authority: multilingual names plus its measures.

Names are keyed by a three-letter language code (ISO 639-3, e.g. ``eng``,
``cym``), stored lowercase. Measures are keyed by lowercase measure code.
Setting an existing measure merges into it (see ``Measure.overwrite``).
"""

from __future__ import annotations

import re

from bethyw_kernel.domain.measure import Measure
from bethyw_kernel.exceptions import (
    InvalidLanguageCodeError,
    MeasureNotFoundError,
    NameNotFoundError,
)

_LANG_RE = re.compile(r"[a-z]{3}")

LANG_ENGLISH = "eng"
LANG_WELSH = "cym"


class Area:
    """A local authority identified by its code."""

    def __init__(self, local_authority_code: str):
        self._local_authority_code = local_authority_code
        self._names: dict[str, str] = {}
        self._measures: dict[str, Measure] = {}

    @property
    def local_authority_code(self) -> str:
        return self._local_authority_code

    @property
    def names(self) -> dict[str, str]:
        return dict(sorted(self._names.items()))

    @property
    def measures(self) -> dict[str, Measure]:
        """Measures ordered by code. The Measure objects are the area's own."""
        return dict(sorted(self._measures.items()))

    # -------------------------------------------------------------------------
    # Names
    # -------------------------------------------------------------------------

    def set_name(self, lang: str, name: str) -> None:
        """Set the name in ``lang``.

        Raises:
            InvalidLanguageCodeError: ``lang`` is not three letters.
        """
        code = lang.lower()
        if not _LANG_RE.fullmatch(code):
            raise InvalidLanguageCodeError(lang)
        self._names[code] = name

    def get_name(self, lang: str) -> str:
        try:
            return self._names[lang.lower()]
        except KeyError:
            raise NameNotFoundError(lang) from None

    # -------------------------------------------------------------------------
    # Measures
    # -------------------------------------------------------------------------

    def set_measure(self, code: str, measure: Measure) -> None:
        """Add ``measure`` under ``code``, merging into an existing one."""
        key = code.lower()
        existing = self._measures.get(key)
        if existing is not None:
            existing.overwrite(measure)
        else:
            self._measures[key] = measure.copy()

    def get_measure(self, code: str) -> Measure:
        try:
            return self._measures[code.lower()]
        except KeyError:
            raise MeasureNotFoundError(code) from None

    def has_measure(self, code: str) -> bool:
        return code.lower() in self._measures

    def size(self) -> int:
        """Number of measures."""
        return len(self._measures)

    # -------------------------------------------------------------------------
    # Merge, copy, equality
    # -------------------------------------------------------------------------

    def overwrite(self, other: "Area") -> "Area":
        """Apply ``other``'s names and measures on top of this area.

        Fields ``other`` specifies win; everything else is left untouched.
        """
        for lang, name in other._names.items():
            self.set_name(lang, name)
        for code, measure in other._measures.items():
            self.set_measure(code, measure)
        return self

    def copy(self) -> "Area":
        clone = Area(self._local_authority_code)
        clone._names = dict(self._names)
        clone._measures = {code: m.copy() for code, m in self._measures.items()}
        return clone

    def equals(self, other: object) -> bool:
        """Same code, names and measures."""
        if not isinstance(other, Area):
            return False
        return (
            self._local_authority_code == other._local_authority_code
            and self._names == other._names
            and self._measures == other._measures
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Area):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Area(local_authority_code={self._local_authority_code!r}, "
            f"names={self.names!r}, measures={list(self.measures)!r})"
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def display_name(self) -> str:
        """``eng / cym``, the single name present, or ``Unnamed``."""
        eng = self._names.get(LANG_ENGLISH)
        cym = self._names.get(LANG_WELSH)
        if eng and cym:
            return f"{eng} / {cym}"
        if eng or cym:
            return eng or cym
        if self._names:
            return " / ".join(name for _, name in sorted(self._names.items()))
        return "Unnamed"

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"names": self.names}
        if self._measures:
            data["measures"] = {
                code: measure.to_dict() for code, measure in self.measures.items()
            }
        return data

    def format_table(self) -> str:
        lines = [f"{self.display_name()} ({self._local_authority_code})"]
        if not self._measures:
            lines.append("<no measures>")
        else:
            lines.extend(measure.format_table() for measure in self.measures.values())
        return "\n".join(lines)
