# bikeflow/viz/app/single.py
from __future__ import annotations

import threading

from flask import Flask, jsonify, request

from bikeflow.traffic.minutes import clamp_time_filter, format_time, NO_FILTER
from bikeflow.viz.maps.render import render_map_document


def create_app(engine, *, title: str | None = None, bike_lanes: bool = True) -> Flask:
    """
    Flask app over one TrafficEngine.

      GET /              map page, ?t=<minute> (-1 or missing = any time)
      GET /api/stations  same view as JSON
    """
    app = Flask(__name__)

    # station records are shared; one recomputation at a time
    lock = threading.Lock()
    hourly = engine.hourly_departures()

    def _resolve_time():
        return clamp_time_filter(request.args.get("t"))

    @app.route("/")
    def _index():
        t_cur = _resolve_time()
        with lock:
            view = engine.apply_filter(t_cur)
            return render_map_document(
                view,
                hourly_counts=hourly,
                title=title,
                bike_lanes=bike_lanes,
            )

    @app.route("/api/stations")
    def _stations():
        t_cur = _resolve_time()
        with lock:
            view = engine.apply_filter(t_cur)
            return jsonify(
                {
                    "time_filter": view.time_filter,
                    "label": "any time" if t_cur == NO_FILTER else format_time(t_cur),
                    "radius_range": list(view.radius.range),
                    "max_traffic": view.radius.domain[1],
                    "stations": view.to_records(),
                }
            )

    return app


def serve_traffic_map(
    engine,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
):
    app = create_app(engine, title=title)
    app.run(host=host, port=int(port), debug=bool(debug))
