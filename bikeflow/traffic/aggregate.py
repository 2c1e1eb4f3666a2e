# bikeflow/traffic/aggregate.py
from __future__ import annotations

from typing import Dict, Iterable, List

from bikeflow.traffic.types import Station, Trip


def _count_by(trips: Iterable[Trip], attr: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in trips:
        sid = getattr(t, attr)
        counts[sid] = counts.get(sid, 0) + 1
    return counts


def compute_station_traffic(
    stations: List[Station],
    departure_trips: Iterable[Trip],
    arrival_trips: Iterable[Trip],
) -> List[Station]:
    """
    Refresh departures / arrivals / total_traffic on every station.

    departure_trips are counted by start_station_id, arrival_trips by
    end_station_id. Trips pointing at stations not in `stations` are ignored.
    Both count maps are complete before any station is written.
    """
    departures = _count_by(departure_trips, "start_station_id")
    arrivals = _count_by(arrival_trips, "end_station_id")

    for s in stations:
        s.departures = departures.get(s.short_name, 0)
        s.arrivals = arrivals.get(s.short_name, 0)
        s.total_traffic = s.departures + s.arrivals

    return stations
