# bikeflow/traffic/index.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from tqdm import tqdm

from bikeflow.traffic.minutes import (
    MINUTES_PER_DAY,
    NO_FILTER,
    WINDOW_MINUTES,
    check_time_filter,
    minute_of_day,
)
from bikeflow.traffic.types import Trip

Slots = Tuple[Tuple[Trip, ...], ...]


def window_slots(center: int) -> List[int]:
    """
    Minute slots covered by the ±WINDOW_MINUTES window around `center`,
    walking the 1440-slot ring.

      center=485  -> [425..545]
      center=0    -> [1380..1439] + [0..60]
      center=-1   -> every slot
    """
    center = check_time_filter(center)
    if center == NO_FILTER:
        return list(range(MINUTES_PER_DAY))

    lo = (center - WINDOW_MINUTES + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (center + WINDOW_MINUTES) % MINUTES_PER_DAY

    if lo <= hi:
        return list(range(lo, hi + 1))

    # window crosses midnight
    return list(range(lo, MINUTES_PER_DAY)) + list(range(0, hi + 1))


def query_window(slots: Sequence[Sequence[Trip]], center: int) -> Tuple[Trip, ...]:
    """
    Flatten the trips of every slot in the window around `center`.
    """
    out: List[Trip] = []
    for minute in window_slots(center):
        out.extend(slots[minute])
    return tuple(out)


@dataclass
class TripIndex:
    """
    departures_by_minute[m]: trips whose started_at falls on minute m
    arrivals_by_minute[m]:   trips whose ended_at falls on minute m

    Read-only once built. Each axis remembers its last window query.
    """
    departures_by_minute: Slots
    arrivals_by_minute: Slots
    _last: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    @classmethod
    def build(cls, trips: Iterable[Trip], *, progress: bool = False) -> "TripIndex":
        departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]

        it = trips
        if progress:
            it = tqdm(trips, desc="Indexing trips", unit="trip")

        for trip in it:
            departures[minute_of_day(trip.started_at)].append(trip)
            arrivals[minute_of_day(trip.ended_at)].append(trip)

        return cls(
            departures_by_minute=tuple(tuple(s) for s in departures),
            arrivals_by_minute=tuple(tuple(s) for s in arrivals),
        )

    def __len__(self) -> int:
        return sum(len(s) for s in self.departures_by_minute)

    def departures(self, center: int) -> Tuple[Trip, ...]:
        return self._query("departures", self.departures_by_minute, center)

    def arrivals(self, center: int) -> Tuple[Trip, ...]:
        return self._query("arrivals", self.arrivals_by_minute, center)

    def _query(self, axis: str, slots: Slots, center: int) -> Tuple[Trip, ...]:
        hit = self._last.get(axis)
        if hit is not None and type(center) is int and hit[0] == center:
            return hit[1]

        trips = query_window(slots, center)
        self._last[axis] = (center, trips)
        return trips

    def per_hour(self, axis: str = "departures") -> List[int]:
        """
        Trip totals for each hour of day (24 values) on one axis.
        """
        if axis == "departures":
            slots = self.departures_by_minute
        elif axis == "arrivals":
            slots = self.arrivals_by_minute
        else:
            raise ValueError(f"axis must be 'departures' or 'arrivals', got {axis!r}")

        hours = [0] * 24
        for minute, bucket in enumerate(slots):
            hours[minute // 60] += len(bucket)
        return hours
