from __future__ import annotations

from datetime import datetime

from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.types import Station, Trip

T0 = datetime(2024, 3, 1, 8, 0)


def _stations(*names: str) -> list[Station]:
    return [Station(short_name=n, lon=-71.0, lat=42.3) for n in names]


def _trip(a: str, b: str) -> Trip:
    return Trip(start_station_id=a, end_station_id=b, started_at=T0, ended_at=T0)


def test_counts_departures_and_arrivals_per_station():
    stations = _stations("A", "B", "C")
    trips = [_trip("A", "B"), _trip("A", "C"), _trip("B", "A")]

    out = compute_station_traffic(stations, trips, trips)
    by = {s.short_name: s for s in out}

    assert (by["A"].departures, by["A"].arrivals, by["A"].total_traffic) == (2, 1, 3)
    assert (by["B"].departures, by["B"].arrivals, by["B"].total_traffic) == (1, 1, 2)
    assert (by["C"].departures, by["C"].arrivals, by["C"].total_traffic) == (0, 1, 1)


def test_returns_same_station_objects():
    stations = _stations("A")
    out = compute_station_traffic(stations, [], [])
    assert out is stations
    assert out[0] is stations[0]


def test_departure_and_arrival_sets_are_independent():
    stations = _stations("A", "B")
    out = compute_station_traffic(stations, [_trip("A", "B")], [])
    by = {s.short_name: s for s in out}

    assert by["A"].departures == 1
    assert by["B"].arrivals == 0


def test_unknown_stations_are_dropped_silently():
    stations = _stations("A")
    out = compute_station_traffic(stations, [_trip("A", "ZZZ"), _trip("ZZZ", "A")], [_trip("ZZZ", "A")])

    assert out[0].departures == 1
    assert out[0].arrivals == 1


def test_empty_trip_set_zeroes_everything():
    stations = _stations("A", "B")
    compute_station_traffic(stations, [_trip("A", "B")] * 4, [_trip("A", "B")] * 4)
    compute_station_traffic(stations, [], [])

    assert all(s.departures == s.arrivals == s.total_traffic == 0 for s in stations)


def test_recomputation_does_not_accumulate():
    stations = _stations("A", "B", "C")
    trips = [_trip("A", "B"), _trip("B", "C"), _trip("C", "A")]

    first = [(s.departures, s.arrivals, s.total_traffic) for s in compute_station_traffic(stations, trips, trips)]
    second = [(s.departures, s.arrivals, s.total_traffic) for s in compute_station_traffic(stations, trips, trips)]

    assert first == second == [(1, 1, 2)] * 3


def test_conservation_over_known_stations():
    stations = _stations("A", "B", "C", "D")
    deps = [_trip("A", "B"), _trip("A", "C"), _trip("D", "A")]
    arrs = [_trip("C", "B"), _trip("B", "B")]

    compute_station_traffic(stations, deps, arrs)

    assert all(s.total_traffic == s.departures + s.arrivals for s in stations)
    assert sum(s.total_traffic for s in stations) == len(deps) + len(arrs)
