import json

import folium

BOSTON_BIKE_LANES_URL = (
    "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
    "boston::existing-bike-network-2022.geojson"
)
CAMBRIDGE_BIKE_LANES_URL = (
    "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
    "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
)

BIKE_LANE_LAYERS = [
    {"url": BOSTON_BIKE_LANES_URL, "style": {"color": "#32D400", "weight": 3, "opacity": 0.6}},
    {"url": CAMBRIDGE_BIKE_LANES_URL, "style": {"color": "#1f78b4", "weight": 3, "opacity": 0.6}},
]


def add_bike_lanes(m, layers=BIKE_LANE_LAYERS):
    """
    Bike network lines, fetched by the browser after the map exists.

    folium.GeoJson would download the files while rendering; these layers
    are large and rendering has to stay offline.
    """
    if not layers:
        return

    m.get_root().html.add_child(
        folium.Element(
            f"""
<script>
document.addEventListener("DOMContentLoaded", () => {{
  const map = {m.get_name()};
  const layers = {json.dumps(list(layers))};

  layers.forEach((layer) => {{
    fetch(layer.url)
      .then((r) => r.json())
      .then((data) => {{
        L.geoJSON(data, {{ style: () => layer.style, interactive: false }}).addTo(map).bringToBack();
      }})
      .catch((e) => console.error("bike lanes failed:", layer.url, e));
  }});
}});
</script>
"""
        )
    )
