"""
Measure -- one metric's readings for one area, keyed by year.

Invariants:
    - ``code`` is lowercase and fixed at construction.
    - A year appears at most once; readings iterate in year order.
    - Zero readings is a valid state.

Derived statistics (average, difference, percentage difference) are
computed on demand and are 0 when fewer than two readings exist.
"""

from __future__ import annotations

from bethyw_kernel.exceptions import ReadingNotFoundError

_VALUE_FORMAT = "{:.6f}"


class Measure:
    """A named metric tracked across years."""

    def __init__(self, code: str, label: str = ""):
        self._code = code.lower()
        self.label = label
        self._readings: dict[int, float] = {}

    @property
    def code(self) -> str:
        return self._code

    @property
    def readings(self) -> dict[int, float]:
        """Copy of the readings, ordered by year."""
        return dict(sorted(self._readings.items()))

    def set_value(self, year: int, value: float) -> None:
        """Set the reading for ``year``, replacing any existing one."""
        self._readings[int(year)] = float(value)

    def get_value(self, year: int) -> float:
        try:
            return self._readings[year]
        except KeyError:
            raise ReadingNotFoundError(year) from None

    def size(self) -> int:
        return len(self._readings)

    # -------------------------------------------------------------------------
    # Derived statistics
    # -------------------------------------------------------------------------

    def _first_and_last(self) -> tuple[float, float] | None:
        if len(self._readings) < 2:
            return None
        years = sorted(self._readings)
        return self._readings[years[0]], self._readings[years[-1]]

    def get_average(self) -> float:
        if len(self._readings) < 2:
            return 0.0
        return sum(self._readings.values()) / len(self._readings)

    def get_difference(self) -> float:
        """Latest year's value minus earliest year's value."""
        ends = self._first_and_last()
        if ends is None:
            return 0.0
        first, last = ends
        return last - first

    def get_difference_as_percentage(self) -> float:
        """Difference as a percentage of the latest value (0 if that is 0)."""
        ends = self._first_and_last()
        if ends is None:
            return 0.0
        first, last = ends
        if last == 0:
            return 0.0
        return (last - first) / last * 100

    # -------------------------------------------------------------------------
    # Merge, copy, equality
    # -------------------------------------------------------------------------

    def overwrite(self, other: "Measure") -> "Measure":
        """Merge ``other`` into this measure; ``other`` wins on overlap.

        The label is replaced. Each incoming (year, value) replaces the
        reading for that year; years only present here are kept.
        """
        if other.code != self._code:
            raise ValueError(
                f"Cannot merge measure {other.code!r} into {self._code!r}"
            )
        self.label = other.label
        for year, value in other._readings.items():
            self.set_value(year, value)
        return self

    def copy(self) -> "Measure":
        clone = Measure(self._code, self.label)
        clone._readings = dict(self._readings)
        return clone

    def equals(self, other: object) -> bool:
        """Same code, label and readings."""
        if not isinstance(other, Measure):
            return False
        return (
            self._code == other._code
            and self.label == other.label
            and self._readings == other._readings
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Measure(code={self._code!r}, label={self.label!r}, readings={self.readings!r})"

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, object]:
        return {
            "label": self.label,
            "readings": {str(year): value for year, value in self.readings.items()},
        }

    def format_table(self) -> str:
        """Label line, then right-aligned year and value rows.

        A measure without readings prints ``<no data>`` under its label.
        """
        title = f"{self.label} ({self._code})"
        if not self._readings:
            return f"{title}\n<no data>"

        cells = [(str(year), _VALUE_FORMAT.format(value)) for year, value in self.readings.items()]
        cells.append(("Average", _VALUE_FORMAT.format(self.get_average())))
        cells.append(("Diff.", _VALUE_FORMAT.format(self.get_difference())))
        cells.append(("% Diff.", _VALUE_FORMAT.format(self.get_difference_as_percentage())))

        widths = [max(len(header), len(value)) for header, value in cells]
        header_row = " ".join(h.rjust(w) for (h, _), w in zip(cells, widths))
        value_row = " ".join(v.rjust(w) for (_, v), w in zip(cells, widths))
        return f"{title}\n{header_row}\n{value_row}"
