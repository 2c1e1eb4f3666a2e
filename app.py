import os

from bikeflow.traffic.engine import TrafficEngine
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips
from bikeflow.viz.app.single import create_app

TRIPS = os.environ.get("TRIPS_CSV", "bluebikes-traffic-2024-03.csv")
STATIONS = os.environ.get("STATIONS_JSON", "bluebikes-stations.json")
TITLE = os.environ.get("MAP_TITLE", "Bluebikes Traffic")


def build_engine():
  stations = load_stations(STATIONS)
  trips = load_trips(TRIPS)
  return TrafficEngine(stations, trips, progress=True)


def main():
  engine = build_engine()

  port = int(os.environ.get("PORT", "8080"))
  host = os.environ.get("HOST", "0.0.0.0")

  app = create_app(engine, title=TITLE)
  app.run(host=host, port=port)


if __name__ == "__main__":
  main()
