"""
Unit tests for Measure.

Verifies:
- Code normalization and reading storage
- Derived statistics (average, difference, percentage difference)
- Merge semantics (overwrite) and equality
- Table and dict rendering
"""

import pytest

from bethyw_kernel.domain.measure import Measure
from bethyw_kernel.exceptions import ReadingNotFoundError


class TestMeasureReadings:
    """Tests for storing and looking up readings."""

    def test_code_is_lowercased(self):
        assert Measure("POP", "Population").code == "pop"

    def test_code_is_read_only(self):
        m = Measure("pop")
        with pytest.raises(AttributeError):
            m.code = "dens"

    def test_label_can_be_replaced(self):
        m = Measure("pop", "Population")
        m.label = "Total population"
        assert m.label == "Total population"

    def test_set_value_is_idempotent(self):
        """Setting the same (year, value) twice yields one reading."""
        m = Measure("pop")
        m.set_value(2010, 5.0)
        m.set_value(2010, 5.0)
        assert m.size() == 1
        assert m.get_value(2010) == 5.0

    def test_set_value_replaces_existing_year(self):
        m = Measure("pop")
        m.set_value(2010, 5.0)
        m.set_value(2010, 7.5)
        assert m.get_value(2010) == 7.5

    def test_values_are_stored_as_float(self):
        m = Measure("pop")
        m.set_value(2010, 3)
        assert isinstance(m.get_value(2010), float)

    def test_readings_are_ordered_by_year(self):
        m = Measure("pop")
        for year in (2020, 1999, 2005):
            m.set_value(year, 1.0)
        assert list(m.readings) == [1999, 2005, 2020]

    def test_readings_is_a_copy(self):
        m = Measure("pop")
        m.set_value(2010, 1.0)
        m.readings[2011] = 2.0
        assert m.size() == 1

    def test_missing_year_raises(self):
        m = Measure("pop")
        with pytest.raises(ReadingNotFoundError) as exc_info:
            m.get_value(1999)
        assert exc_info.value.year == 1999
        assert exc_info.value.code == "READING_NOT_FOUND"

    def test_empty_measure_is_valid(self):
        m = Measure("pop", "Population")
        assert m.size() == 0
        assert m.readings == {}


class TestMeasureStatistics:
    def test_two_readings(self):
        m = Measure("pop")
        m.set_value(1999, 10)
        m.set_value(2020, 30)
        assert m.get_average() == pytest.approx(20.0)
        assert m.get_difference() == pytest.approx(20.0)
        assert round(m.get_difference_as_percentage(), 2) == 66.67

    def test_difference_uses_earliest_and_latest_years(self):
        m = Measure("pop")
        m.set_value(2020, 50)
        m.set_value(2000, 10)
        m.set_value(2010, 1000)
        assert m.get_difference() == pytest.approx(40.0)
        assert m.get_difference_as_percentage() == pytest.approx(80.0)

    def test_negative_difference(self):
        m = Measure("pop")
        m.set_value(2000, 40)
        m.set_value(2001, 20)
        assert m.get_difference() == pytest.approx(-20.0)
        assert m.get_difference_as_percentage() == pytest.approx(-100.0)

    @pytest.mark.parametrize("readings", [{}, {2010: 42.0}])
    def test_fewer_than_two_readings_are_zero(self, readings):
        m = Measure("pop")
        for year, value in readings.items():
            m.set_value(year, value)
        assert m.get_average() == 0
        assert m.get_difference() == 0
        assert m.get_difference_as_percentage() == 0

    def test_percentage_is_zero_when_latest_value_is_zero(self):
        m = Measure("pop")
        m.set_value(2000, 10)
        m.set_value(2001, 0)
        assert m.get_difference() == pytest.approx(-10.0)
        assert m.get_difference_as_percentage() == 0


class TestMeasureOverwrite:
    """Tests for merging one measure into another."""

    def test_incoming_readings_win_on_overlap(self):
        a = Measure("pop", "Old label")
        a.set_value(2010, 1.0)
        a.set_value(2011, 2.0)
        b = Measure("pop", "New label")
        b.set_value(2011, 20.0)
        b.set_value(2012, 30.0)

        a.overwrite(b)

        assert a.label == "New label"
        assert a.readings == {2010: 1.0, 2011: 20.0, 2012: 30.0}

    def test_overwrite_leaves_source_untouched(self):
        a = Measure("pop")
        b = Measure("pop")
        b.set_value(2011, 20.0)
        a.overwrite(b)
        a.set_value(2011, 99.0)
        assert b.get_value(2011) == 20.0

    def test_overwrite_rejects_different_code(self):
        with pytest.raises(ValueError):
            Measure("pop").overwrite(Measure("dens"))

    def test_copy_is_independent(self):
        a = Measure("pop", "Population")
        a.set_value(2010, 1.0)
        clone = a.copy()
        clone.set_value(2011, 2.0)
        assert a.size() == 1
        assert clone.size() == 2


class TestMeasureEquality:
    def test_equal_measures(self):
        a = Measure("pop", "Population")
        b = Measure("POP", "Population")
        a.set_value(2010, 1.0)
        b.set_value(2010, 1)
        assert a.equals(b)
        assert a == b

    def test_label_matters(self):
        assert Measure("pop", "A") != Measure("pop", "B")

    def test_readings_matter(self):
        a = Measure("pop")
        b = Measure("pop")
        a.set_value(2010, 1.0)
        assert not a.equals(b)

    def test_not_equal_to_other_types(self):
        assert not Measure("pop").equals("pop")
        assert Measure("pop") != "pop"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Measure("pop"))


class TestMeasureRendering:
    def test_to_dict(self):
        m = Measure("pop", "Population")
        m.set_value(2011, 2.5)
        m.set_value(2010, 1.0)
        assert m.to_dict() == {
            "label": "Population",
            "readings": {"2010": 1.0, "2011": 2.5},
        }

    def test_format_table(self):
        m = Measure("pop", "Population")
        m.set_value(1999, 10)
        m.set_value(2020, 30)
        lines = m.format_table().split("\n")
        assert lines[0] == "Population (pop)"
        assert lines[1].split() == ["1999", "2020", "Average", "Diff.", "%", "Diff."]
        assert lines[2].split() == [
            "10.000000",
            "30.000000",
            "20.000000",
            "20.000000",
            "66.666667",
        ]

    def test_format_table_columns_are_right_aligned(self):
        m = Measure("pop", "Population")
        m.set_value(1999, 10)
        m.set_value(2020, 30)
        _, header, values = m.format_table().split("\n")
        assert len(header) == len(values)
        assert header.startswith("     1999")
        assert values.startswith("10.000000")

    def test_format_table_without_readings(self):
        assert Measure("pop", "Population").format_table() == "Population (pop)\n<no data>"
