import json

from colorama import Fore, Style

from bikeflow.traffic.types import Station


def load_stations(path):
    """
    Load bikeshare stations from a GBFS station_information.json.

    Keyed by short_name (the id trip CSVs use). Entries without a
    short_name or coordinates are skipped, and so is any later entry
    repeating a short_name already loaded.
    """
    with open(path) as f:
        raw = json.load(f)

    try:
        entries = raw["data"]["stations"]
    except (KeyError, TypeError):
        raise ValueError(f"{path}: expected a GBFS document with data.stations")

    stations = []
    seen = set()
    skipped = 0
    for s in entries:
        short_name = str(s.get("short_name") or "").strip()
        try:
            lon = float(s["lon"])
            lat = float(s["lat"])
        except (KeyError, TypeError, ValueError):
            skipped += 1
            continue
        if not short_name or short_name in seen:
            skipped += 1
            continue
        seen.add(short_name)

        stations.append(
            Station(
                short_name=short_name,
                lon=lon,
                lat=lat,
                name=str(s.get("name") or short_name),
            )
        )

    if skipped:
        print(f"{Fore.YELLOW}Skipped {skipped} stations without short_name/coords or with a repeated short_name{Style.RESET_ALL}")

    return stations
