# bikeflow/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime


@dataclass(eq=False)
class Station:
    """
    A dock location keyed by short_name.

    arrivals / departures / total_traffic are a view over the active time
    window and get overwritten on every filter change.
    """
    short_name: str
    lon: float
    lat: float
    name: str = ""
    arrivals: int = 0
    departures: int = 0
    total_traffic: int = 0
