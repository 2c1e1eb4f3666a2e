import html

import folium

# flow level -> fill colour (departure share of a station's traffic)
DEPARTURES_COLOR = "#4682b4"
BALANCED_COLOR = "#a2876a"
ARRIVALS_COLOR = "#ff8c00"
NO_TRAFFIC_COLOR = "#999999"

FLOW_COLORS = {
    1: DEPARTURES_COLOR,
    0.5: BALANCED_COLOR,
    0: ARRIVALS_COLOR,
}


def flow_color(level):
    if level is None:
        return NO_TRAFFIC_COLOR
    return FLOW_COLORS[level]


def add_station_markers(m, view):
    """
    One circle per station: radius from the view's sqrt scale, colour from
    its flow level. view: TrafficView
    """
    for s in view.stations:
        radius = view.station_radius(s)
        if radius <= 0:
            continue

        tooltip = "<br>".join(
            [
                f"<b>{html.escape(s.name)}</b>",
                f"<strong>{s.total_traffic}</strong> trips",
                f"{s.departures} departures",
                f"{s.arrivals} arrivals",
            ]
        )

        folium.CircleMarker(
            location=[float(s.lat), float(s.lon)],
            radius=radius,
            color="white",
            weight=1,
            fill=True,
            fill_color=flow_color(view.station_flow(s)),
            fill_opacity=0.6,
            opacity=0.8,
            tooltip=tooltip,
        ).add_to(m)
