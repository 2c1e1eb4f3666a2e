# bikeflow/viz/widgets/legend.py
import folium

from bikeflow.traffic.scales import STATION_FLOW
from bikeflow.viz.overlays.stations import (
    ARRIVALS_COLOR,
    BALANCED_COLOR,
    DEPARTURES_COLOR,
    NO_TRAFFIC_COLOR,
)


def build_legend_widget(*, include_no_traffic: bool = False):
    """
    Returns a Folium Element that injects a floating flow legend.
    """
    no_traffic_block = ""
    if include_no_traffic:
        no_traffic_block = (
            f'<div><span style="color:{NO_TRAFFIC_COLOR}">●</span> no trips</div>'
        )

    # band edges of the flow scale, as departure shares
    lo, hi = (round(t * 100) for t in STATION_FLOW.thresholds())

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 140px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1200;
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
    wrap.style.position = "relative";
    wrap.style.width = "100%";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existing = document.getElementById("map-legend");
  if (existing) existing.remove();

  const legend = document.createElement("div");
  legend.id = "map-legend";
  legend.innerHTML = `
    <div><span style="color:{DEPARTURES_COLOR}">●</span> more departures (&ge;{hi}% out)</div>
    <div><span style="color:{BALANCED_COLOR}">●</span> balanced ({lo}&ndash;{hi}%)</div>
    <div><span style="color:{ARRIVALS_COLOR}">●</span> more arrivals (&lt;{lo}% out)</div>
    {no_traffic_block}
  `;
  wrap.appendChild(legend);
}});
</script>
"""
    )
