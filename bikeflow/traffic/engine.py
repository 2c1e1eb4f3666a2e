# bikeflow/traffic/engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from colorama import Fore, Style

from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.index import TripIndex
from bikeflow.traffic.minutes import NO_FILTER, check_time_filter
from bikeflow.traffic.scales import (
    STATION_FLOW,
    QuantizeScale,
    SqrtScale,
    departure_ratio,
    radius_scale,
)
from bikeflow.traffic.types import Station, Trip


@dataclass
class TrafficView:
    """
    What the renderer needs for one filter value.

    stations are the engine's own records; treat them as read-only.
    """
    time_filter: int
    stations: List[Station]
    radius: SqrtScale
    flow: QuantizeScale

    def station_radius(self, station: Station) -> float:
        return self.radius(station.total_traffic)

    def station_flow(self, station: Station) -> Optional[float]:
        return self.flow(departure_ratio(station))

    def to_records(self) -> List[Dict]:
        return [
            {
                "short_name": s.short_name,
                "name": s.name,
                "lat": s.lat,
                "lon": s.lon,
                "departures": s.departures,
                "arrivals": s.arrivals,
                "total_traffic": s.total_traffic,
                "radius": self.station_radius(s),
                "flow": self.station_flow(s),
            }
            for s in self.stations
        ]


class TrafficEngine:
    """
    Owns the station list, the trip batch and the minute index built from it.

    apply_filter() is the one entry point per slider change: two window
    queries, one aggregation, fresh scales.
    """

    def __init__(
        self,
        stations: Sequence[Station],
        trips: Sequence[Trip],
        *,
        progress: bool = False,
    ):
        self.stations: List[Station] = list(stations)
        self.trips: Tuple[Trip, ...] = tuple(trips)

        if progress:
            print(f"{Fore.CYAN}Building minute index for {len(self.trips):,} trips…{Style.RESET_ALL}")
        self.index = TripIndex.build(self.trips, progress=progress)

        self.time_filter = NO_FILTER
        self.apply_filter(NO_FILTER)

    def window(self, time_filter: int):
        """
        (departure trips, arrival trips) inside the window around time_filter.
        """
        return self.index.departures(time_filter), self.index.arrivals(time_filter)

    def apply_filter(self, time_filter: int = NO_FILTER) -> TrafficView:
        time_filter = check_time_filter(time_filter)

        departures, arrivals = self.window(time_filter)
        compute_station_traffic(self.stations, departures, arrivals)
        self.time_filter = time_filter

        return TrafficView(
            time_filter=time_filter,
            stations=self.stations,
            radius=radius_scale(self.stations, time_filter),
            flow=STATION_FLOW,
        )

    def hourly_departures(self) -> List[int]:
        return self.index.per_hour("departures")

    def hourly_arrivals(self) -> List[int]:
        return self.index.per_hour("arrivals")
