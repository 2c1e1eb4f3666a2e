# bikeflow/main.py

from colorama import Fore, Style

from bikeflow.traffic.engine import TrafficEngine
from bikeflow.traffic.minutes import format_time
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips
from bikeflow.viz.app.single import serve_traffic_map


STATIONS = "bluebikes-stations.json"
TRIPS = "bluebikes-traffic-2024-03.csv"


def main():
    stations = load_stations(STATIONS)
    trips = load_trips(TRIPS)

    engine = TrafficEngine(stations, trips, progress=True)

    # ---- busiest stations, whole day ----
    view = engine.apply_filter(-1)
    busiest = sorted(view.stations, key=lambda s: s.total_traffic, reverse=True)[:10]

    print(f"\n{Fore.MAGENTA}Busiest stations ({len(trips):,} trips):{Style.RESET_ALL}\n")
    for i, s in enumerate(busiest, 1):
        print(
            f"{i:02d}. "
            f"{s.short_name:>8} | "
            f"{s.total_traffic:6d} trips "
            f"({s.departures} out / {s.arrivals} in) "
            f"{s.name}"
        )

    # ---- peak hour ----
    hourly = engine.hourly_departures()
    peak = max(range(24), key=lambda h: hourly[h])
    print(f"\nPeak departure hour: {format_time(peak * 60)} ({hourly[peak]:,} departures)")

    # ---- UI ----
    serve_traffic_map(
        engine,
        port=8080,
        title="Bluebikes Traffic, March 2024",
    )


if __name__ == "__main__":
    main()
