# bikeflow/traffic/scales.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bikeflow.traffic.minutes import NO_FILTER
from bikeflow.traffic.types import Station

# pixel radius range for the station circles
UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
FILTERED_RADIUS_RANGE = (3.0, 50.0)

FLOW_LEVELS = (0, 0.5, 1)


@dataclass(frozen=True)
class SqrtScale:
    """
    Continuous domain -> range mapping, linear in sqrt(x).

    Circle area ends up proportional to the input value.
    A degenerate domain (lo == hi) maps everything to range[0].
    """
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range

        s0 = _signed_sqrt(d0)
        s1 = _signed_sqrt(d1)
        if s1 == s0:
            return float(r0)

        t = (_signed_sqrt(value) - s0) / (s1 - s0)
        return r0 + t * (r1 - r0)


def _signed_sqrt(x: float) -> float:
    x = float(x)
    return -math.sqrt(-x) if x < 0 else math.sqrt(x)


@dataclass(frozen=True)
class QuantizeScale:
    """
    Continuous domain -> discrete levels using equal-width bands.

    Values past either end of the domain land in the end bands.
    None / NaN have no band and return None.
    """
    domain: Tuple[float, float]
    levels: Sequence[float]

    def __call__(self, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        value = float(value)
        if math.isnan(value):
            return None

        d0, d1 = self.domain
        n = len(self.levels)
        i = int(math.floor(n * (value - d0) / (d1 - d0)))
        i = max(0, min(n - 1, i))
        return self.levels[i]

    def thresholds(self) -> List[float]:
        d0, d1 = self.domain
        n = len(self.levels)
        return [d0 + (d1 - d0) * (i + 1) / n for i in range(n - 1)]


STATION_FLOW = QuantizeScale(domain=(0.0, 1.0), levels=FLOW_LEVELS)


def radius_range(time_filter: int) -> Tuple[float, float]:
    if time_filter == NO_FILTER:
        return UNFILTERED_RADIUS_RANGE
    return FILTERED_RADIUS_RANGE


def radius_scale(stations: Sequence[Station], time_filter: int = NO_FILTER) -> SqrtScale:
    """
    total_traffic -> circle radius, domain [0, busiest station].

    Narrow windows carry far fewer trips, so a filtered view gets the
    larger [3, 50] range.
    """
    top = max((s.total_traffic for s in stations), default=0)
    return SqrtScale(domain=(0.0, float(top)), range=radius_range(time_filter))


def departure_ratio(station: Station) -> Optional[float]:
    # undefined for a station with no traffic in the window
    if station.total_traffic <= 0:
        return None
    return station.departures / station.total_traffic
