# bikeflow/viz/maps/render.py
import json

import folium

from bikeflow.viz.overlays.bike_lanes import add_bike_lanes
from bikeflow.viz.overlays.stations import add_station_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.time_slider import build_time_slider

CENTER_LAT = 42.36027
CENTER_LON = -71.09415


def _js_string(text):
    # JSON string literal that cannot close the surrounding <script>
    return json.dumps(str(text)).replace("</", "<\\/")


def build_traffic_map(
    view,
    *,
    hourly_counts=None,
    title: str | None = None,
    bike_lanes: bool = True,
):
    """
    Assembles the folium Map for one TrafficView (stations, lanes, widgets).
    """
    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=12,
        min_zoom=5,
        max_zoom=18,
        tiles="cartodbpositron",
    )

    if bike_lanes:
        add_bike_lanes(m)

    add_station_markers(m, view)

    m.get_root().html.add_child(
        build_time_slider(view.time_filter, hourly_counts or [0] * 24)
    )

    has_idle = any(s.total_traffic == 0 for s in view.stations)
    m.get_root().html.add_child(build_legend_widget(include_no_traffic=has_idle))

    # title + wrap so widgets sit on-map
    m.get_root().html.add_child(
        folium.Element(
            f"""
<style>
#map-wrap {{
  position: relative;
  width: 100%;
}}
#map-wrap .leaflet-container {{
  width: 100% !important;
  height: 85vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existingTitle = document.getElementById("map-title");
  if (existingTitle) existingTitle.remove();

  {"const t=document.createElement('div');t.id='map-title';t.textContent=%s;wrap.appendChild(t);" % _js_string(title) if title else ""}

  const panel = document.getElementById("time-filter");
  if (panel) wrap.appendChild(panel);
}});
</script>
"""
        )
    )

    return m


def render_map_document(view, **kwargs) -> str:
    return build_traffic_map(view, **kwargs).get_root().render()
