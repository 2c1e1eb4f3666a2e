from __future__ import annotations

import random
from datetime import datetime, timedelta

import pytest

from bikeflow.traffic.engine import TrafficEngine
from bikeflow.traffic.types import Station, Trip


def _dt(hh: int, mm: int, day: int = 1) -> datetime:
    return datetime(2024, 3, day, hh, mm)


def _abc_engine() -> TrafficEngine:
    stations = [
        Station(short_name="A", lon=-71.10, lat=42.36),
        Station(short_name="B", lon=-71.09, lat=42.35),
        Station(short_name="C", lon=-71.08, lat=42.37),
    ]
    trips = [
        Trip("A", "B", _dt(8, 5), _dt(8, 5)),
        Trip("B", "C", _dt(8, 50), _dt(8, 50)),
        Trip("C", "A", _dt(23, 58), _dt(23, 58)),
    ]
    return TrafficEngine(stations, trips)


def _counts(view):
    return {s.short_name: (s.departures, s.arrivals) for s in view.stations}


def test_unfiltered_scenario():
    view = _abc_engine().apply_filter(-1)
    assert _counts(view) == {"A": (1, 1), "B": (1, 1), "C": (1, 1)}


def test_filtered_scenario_at_0805():
    view = _abc_engine().apply_filter(485)
    assert _counts(view) == {"A": (1, 0), "B": (1, 1), "C": (0, 1)}
    assert view.time_filter == 485


def test_window_around_midnight_picks_up_late_trip():
    view = _abc_engine().apply_filter(0)
    assert _counts(view) == {"A": (0, 1), "B": (0, 0), "C": (1, 0)}


def test_engine_starts_unfiltered():
    engine = _abc_engine()
    assert engine.time_filter == -1
    assert all(s.total_traffic == 2 for s in engine.stations)


def test_switching_filters_fully_recomputes():
    engine = _abc_engine()
    engine.apply_filter(485)
    engine.apply_filter(1000)
    assert all(s.total_traffic == 0 for s in engine.stations)

    again = engine.apply_filter(485)
    assert _counts(again) == {"A": (1, 0), "B": (1, 1), "C": (0, 1)}


def test_apply_filter_rejects_bad_values():
    engine = _abc_engine()
    with pytest.raises(ValueError):
        engine.apply_filter(1440)
    with pytest.raises(ValueError):
        engine.apply_filter(-5)
    # previous view untouched
    assert engine.time_filter == -1


def test_view_scales_follow_filter():
    engine = _abc_engine()

    unfiltered = engine.apply_filter(-1)
    assert unfiltered.radius.range == (0.0, 25.0)
    assert unfiltered.radius.domain == (0.0, 2.0)

    filtered = engine.apply_filter(485)
    assert filtered.radius.range == (3.0, 50.0)
    by = {s.short_name: s for s in filtered.stations}
    assert filtered.station_radius(by["B"]) == pytest.approx(50.0)
    assert filtered.station_flow(by["A"]) == 1
    assert filtered.station_flow(by["B"]) == 0.5
    assert filtered.station_flow(by["C"]) == 0


def test_view_records():
    engine = _abc_engine()
    engine.apply_filter(1000)
    records = engine.apply_filter(1000).to_records()

    assert [r["short_name"] for r in records] == ["A", "B", "C"]
    assert all(r["flow"] is None for r in records)
    assert all(r["radius"] == 3.0 for r in records)


def test_conservation_on_random_batch():
    rng = random.Random(7)
    names = [f"S{i}" for i in range(12)]
    stations = [Station(short_name=n, lon=0.0, lat=0.0) for n in names]

    trips = []
    base = datetime(2024, 3, 1)
    for _ in range(2000):
        start = base + timedelta(minutes=rng.randrange(0, 31 * 1440))
        end = start + timedelta(minutes=rng.randrange(1, 180))
        trips.append(Trip(rng.choice(names), rng.choice(names), start, end))

    engine = TrafficEngine(stations, trips)

    for center in (-1, 0, 30, 485, 1439):
        deps, arrs = engine.window(center)
        view = engine.apply_filter(center)

        assert all(s.total_traffic == s.departures + s.arrivals for s in view.stations)
        assert sum(s.total_traffic for s in view.stations) == len(deps) + len(arrs)

    full = engine.apply_filter(-1)
    assert sum(s.departures for s in full.stations) == len(trips)
    assert sum(s.arrivals for s in full.stations) == len(trips)


def test_hourly_totals():
    engine = _abc_engine()
    assert engine.hourly_departures()[8] == 2
    assert engine.hourly_departures()[23] == 1
    assert sum(engine.hourly_arrivals()) == 3


def test_engine_holds_trip_batch_as_tuple():
    engine = _abc_engine()
    assert isinstance(engine.trips, tuple)
    assert len(engine.trips) == len(engine.index) == 3
