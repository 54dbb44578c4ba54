from datetime import date, datetime

import pytest

from meteo_core.analysis.series_store import FilterParams, SeriesStore, between
from meteo_core.models import TimePoint


def _pts(*years, value=1.0):
    return [TimePoint(datetime(y, 1, 1), value) for y in years]


def _store():
    s = SeriesStore()
    s.import_series("Lausanne", _pts(1900, 1950, 2000))
    s.import_series("Lugano", _pts(1960, 1970))
    return s


def test_import_sorts_points_and_keeps_insertion_order():
    s = SeriesStore()
    s.import_series("B", _pts(2000, 1900, 1950))
    s.import_series("A", _pts(1990))

    assert s.names() == ["B", "A"]
    assert [p.timestamp.year for p in s.get("B")] == [1900, 1950, 2000]
    assert "A" in s and "C" not in s
    assert len(s) == 2


def test_reimport_replaces_series_entirely():
    s = _store()
    s.import_series("Lausanne", _pts(2010, value=5.0))

    pts = s.get("Lausanne")
    assert len(pts) == 1
    assert pts[0] == TimePoint(datetime(2010, 1, 1), 5.0)
    assert s.names() == ["Lausanne", "Lugano"]


def test_get_unknown_name_is_empty():
    assert SeriesStore().get("nope") == ()


def test_time_bounds_over_all_series():
    assert _store().time_bounds() == (datetime(1900, 1, 1), datetime(2000, 1, 1))


def test_time_bounds_empty_store_is_none():
    assert SeriesStore().time_bounds() is None
    s = SeriesStore()
    s.import_series("X", [])
    assert s.time_bounds() is None


def test_filter_keeps_only_points_in_range():
    params = FilterParams(datetime(1950, 1, 1), datetime(1950, 12, 31), ("Lausanne",))
    curves = _store().filter(params)

    assert len(curves) == 1
    assert curves[0].name == "Lausanne"
    assert [p.timestamp.year for p in curves[0].points] == [1950]


def test_filter_reversed_bounds_behave_like_ordered():
    s = _store()
    fwd = s.filter(FilterParams(datetime(1900, 1, 1), datetime(2000, 1, 1), ("Lausanne",)))
    rev = s.filter(FilterParams(datetime(2000, 1, 1), datetime(1900, 1, 1), ("Lausanne",)))

    assert fwd == rev
    assert len(fwd[0].points) == 3  # both ends inclusive


def test_filter_store_order_and_ignores_unknown_names():
    params = FilterParams(datetime(1800, 1, 1), datetime(2100, 1, 1), ("Lugano", "Nope", "Lausanne"))
    curves = _store().filter(params)
    assert [c.name for c in curves] == ["Lausanne", "Lugano"]


def test_filter_unselected_series_are_left_out():
    params = FilterParams(datetime(1800, 1, 1), datetime(2100, 1, 1), ())
    assert _store().filter(params) == []


def test_from_dates_swaps_and_spans_whole_days():
    p = FilterParams.from_dates(date(1950, 12, 31), date(1950, 1, 1), ["Lausanne"], "x^2")

    assert p.start == datetime(1950, 1, 1, 0, 0)
    assert p.end.date() == date(1950, 12, 31)
    assert p.end.hour == 23 and p.end.minute == 59
    assert p.names == ("Lausanne",)
    assert p.function == "x^2"


def test_from_dates_includes_points_late_on_last_day():
    s = SeriesStore()
    s.import_series("X", [TimePoint(datetime(1950, 12, 31, 18, 0), 2.0)])
    curves = s.filter(FilterParams.from_dates(date(1950, 1, 1), date(1950, 12, 31), ["X"]))
    assert len(curves[0].points) == 1


def test_between_is_inclusive():
    pts = _pts(1900, 1950, 2000)
    assert between(pts, datetime(1900, 1, 1), datetime(1950, 1, 1)) == pts[:2]


def test_load_demo_replaces_imported_series():
    s = _store()
    s.import_series("station7", _pts(1999))
    s.load_demo(until_year=1880)

    assert s.names() == ["Lausanne", "Lugano", "Zürich", "Davos"]
    assert len(s.get("Lausanne")) == 6
    assert "station7" not in s


def test_with_demo_has_data():
    s = SeriesStore.with_demo(until_year=1900)
    lo, hi = s.time_bounds()
    assert lo == datetime(1875, 1, 1)
    assert hi == datetime(1900, 1, 1)


def test_timepoint_is_immutable():
    p = TimePoint(datetime(2000, 1, 1), None)
    with pytest.raises(AttributeError):
        p.value = 3.0
