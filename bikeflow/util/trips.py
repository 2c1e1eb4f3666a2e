# bikeflow/util/trips.py
from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bikeflow.traffic.types import Trip

START_STATION_COL = "start_station_id"
END_STATION_COL = "end_station_id"
STARTED_AT_COL = "started_at"
ENDED_AT_COL = "ended_at"


def load_trip_frame(trips_csv: str | Path) -> pd.DataFrame:
    """
    Loads a monthly trips CSV (Bluebikes layout) with columns like:

      ride_id, rideable_type, started_at, ended_at,
      start_station_name, start_station_id, end_station_name, end_station_id, ...

    Returns cleaned DataFrame with:
      - start_station_id (str)
      - end_station_id (str)
      - started_at (datetime)
      - ended_at (datetime)

    Rows with unparsable timestamps or blank station ids are dropped here,
    so everything downstream can assume valid trips.
    """
    trips_csv = Path(trips_csv)

    # ids stay as text: Bluebikes short names look like "A32010"
    df = pd.read_csv(trips_csv, dtype=str, encoding="utf-8-sig")

    # header cells sometimes carry stray spaces / capitals
    colmap = {str(c).strip().lower(): c for c in df.columns}
    missing = [
        c
        for c in (START_STATION_COL, END_STATION_COL, STARTED_AT_COL, ENDED_AT_COL)
        if c not in colmap
    ]
    if missing:
        raise ValueError(f"Trips CSV missing columns: {', '.join(missing)}")

    out = pd.DataFrame()
    out[START_STATION_COL] = df[colmap[START_STATION_COL]].astype("string").str.strip()
    out[END_STATION_COL] = df[colmap[END_STATION_COL]].astype("string").str.strip()
    out[STARTED_AT_COL] = pd.to_datetime(df[colmap[STARTED_AT_COL]], errors="coerce", format="mixed")
    out[ENDED_AT_COL] = pd.to_datetime(df[colmap[ENDED_AT_COL]], errors="coerce", format="mixed")

    out = out.replace({START_STATION_COL: {"": pd.NA}, END_STATION_COL: {"": pd.NA}})
    before = len(out)
    out = out.dropna()
    dropped = before - len(out)

    if dropped:
        print(f"{Fore.YELLOW}Dropped {dropped:,} malformed trip rows{Style.RESET_ALL}")

    return out.reset_index(drop=True)


def load_trips(trips_csv: str | Path, *, progress: bool = True) -> List[Trip]:
    print(f"{Fore.CYAN}Reading trips from {trips_csv}…{Style.RESET_ALL}")
    df = load_trip_frame(trips_csv)

    rows = zip(
        df[START_STATION_COL],
        df[END_STATION_COL],
        df[STARTED_AT_COL],
        df[ENDED_AT_COL],
    )
    if progress:
        rows = tqdm(rows, total=len(df), desc="Reading trips", unit="trip")

    trips = [
        Trip(
            start_station_id=str(s0),
            end_station_id=str(s1),
            started_at=t0,
            ended_at=t1,
        )
        for s0, s1, t0, t1 in rows
    ]

    print(f"{Fore.GREEN}Loaded {len(trips):,} trips.{Style.RESET_ALL}")
    return trips
