"""
Hypothesis-based property tests for merge and filter invariants.

Properties checked:
- Measure.set_value is idempotent
- Measure.overwrite is right-biased and keeps untouched years
- Area.overwrite is right-biased on names and commutes on disjoint fields
- AreaStore keeps one Area per code however often it is inserted
- Year filter admits exactly the inclusive range; (0, 0) admits everything
- Area filter is a case-insensitive substring test
- JSON readings given as strings or numbers normalize to the same float
"""

import io
import json

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from bethyw_kernel.domain.area import Area
from bethyw_kernel.domain.areas import AreaStore
from bethyw_kernel.domain.filters import area_filter_matches, year_filter_matches
from bethyw_kernel.domain.measure import Measure
from bethyw_kernel.domain.sources import ColumnMapping, SourceType

years = st.integers(min_value=1900, max_value=2100)
values = st.floats(allow_nan=False, allow_infinity=False, width=64)
readings = st.dictionaries(years, values, max_size=15)
lang_codes = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=3, max_size=3)
names = st.dictionaries(lang_codes, st.text(min_size=1, max_size=20), max_size=4)


@composite
def measures(draw, code="pop"):
    m = Measure(code, draw(st.text(max_size=20)))
    for year, value in draw(readings).items():
        m.set_value(year, value)
    return m


@composite
def areas(draw, code="W06000011"):
    area = Area(code)
    for lang, name in draw(names).items():
        area.set_name(lang, name)
    for measure_code in draw(st.sets(st.sampled_from(["pop", "dens", "area"]), max_size=3)):
        area.set_measure(measure_code, draw(measures(code=measure_code)))
    return area


class TestMeasureProperties:
    @given(year=years, value=values, existing=readings)
    @settings(max_examples=200)
    def test_set_value_idempotent(self, year, value, existing):
        m = Measure("pop")
        for y, v in existing.items():
            m.set_value(y, v)
        m.set_value(year, value)
        once = m.readings
        m.set_value(year, value)
        assert m.readings == once

    @given(a=measures(), b=measures())
    @settings(max_examples=200)
    def test_overwrite_right_biased(self, a, b):
        before = a.readings
        a.overwrite(b)
        after = a.readings
        assert a.label == b.label
        for year, value in b.readings.items():
            assert after[year] == value
        for year, value in before.items():
            if year not in b.readings:
                assert after[year] == value
        assert set(after) == set(before) | set(b.readings)

    @given(m=measures())
    @settings(max_examples=100)
    def test_statistics_zero_below_two_readings(self, m):
        if m.size() < 2:
            assert m.get_average() == 0
            assert m.get_difference() == 0
            assert m.get_difference_as_percentage() == 0


class TestAreaProperties:
    @given(a=areas(), b=areas())
    @settings(max_examples=200)
    def test_overwrite_right_biased_on_names(self, a, b):
        before = a.names
        a.overwrite(b)
        for lang, name in b.names.items():
            assert a.get_name(lang) == name
        for lang, name in before.items():
            if lang not in b.names:
                assert a.get_name(lang) == name

    @given(name_map=names, measure=measures())
    @settings(max_examples=100)
    def test_disjoint_fields_commute(self, name_map, measure):
        named = Area("W06000011")
        for lang, name in name_map.items():
            named.set_name(lang, name)
        measured = Area("W06000011")
        measured.set_measure(measure.code, measure)

        assert named.copy().overwrite(measured) == measured.copy().overwrite(named)

    @given(batch=st.lists(areas(), min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_store_keeps_one_area_per_code(self, batch):
        store = AreaStore()
        expected = Area("W06000011")
        for area in batch:
            store.set_area("W06000011", area)
            expected.overwrite(area)
        assert store.size() == 1
        assert store.get_area("W06000011") == expected


class TestFilterProperties:
    @given(start=years, end=years, year=years)
    def test_year_filter_is_inclusive_range(self, start, end, year):
        assert year_filter_matches((start, end), year) == (start <= year <= end)

    @given(year=st.integers())
    def test_zero_range_admits_everything(self, year):
        assert year_filter_matches((0, 0), year)

    @given(text=st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1), data=st.data())
    def test_area_filter_substring_any_case(self, text, data):
        i = data.draw(st.integers(min_value=0, max_value=len(text) - 1))
        j = data.draw(st.integers(min_value=i + 1, max_value=len(text)))
        term = text[i:j]
        assert area_filter_matches({term.swapcase()}, text)


class TestJsonValueNormalization:
    @given(value=st.floats(allow_nan=False, allow_infinity=False, width=64))
    @settings(max_examples=100)
    def test_string_and_number_values_agree(self, value):
        mapping = ColumnMapping.of(
            auth_code="code",
            auth_name_eng="name",
            single_measure_code="m",
            single_measure_name="M",
            year="year",
            value="value",
        )
        stored = []
        for raw in (value, repr(value)):
            store = AreaStore()
            record = {"code": "W1", "name": "X", "year": 2000, "value": raw}
            store.populate(io.StringIO(json.dumps([record])), SourceType.WELSH_STATS_JSON, mapping)
            stored.append(store.get_area("W1").get_measure("m").get_value(2000))
        assert stored[0] == stored[1] == value
