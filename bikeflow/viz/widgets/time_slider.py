# bikeflow/viz/widgets/time_slider.py
import folium

from bikeflow.traffic.minutes import (
    MINUTES_PER_DAY,
    NO_FILTER,
    WINDOW_MINUTES,
    format_time,
)

BAR_MAX_HEIGHT = 48


def _hour_in_window(hour, time_filter):
    if time_filter == NO_FILTER:
        return True
    # distance on the 24h ring between the hour's midpoint and the filter
    mid = hour * 60 + 30
    d = abs(mid - time_filter) % MINUTES_PER_DAY
    return min(d, MINUTES_PER_DAY - d) <= WINDOW_MINUTES + 30


def build_time_slider(time_filter, hourly_counts, *, key="t"):
    """
    Time filter control:
      - range input -1..1439 (-1 = any time)
      - formatted time label
      - bars = departures per hour of day, hours touched by the window
        highlighted; clicking a bar centres the filter on that hour
    """
    max_count = max(hourly_counts, default=0)

    bars = []
    for hour, count in enumerate(hourly_counts):
        if max_count > 0:
            height = int((count / max_count) * BAR_MAX_HEIGHT)
        else:
            height = 0

        active = _hour_in_window(hour, time_filter)
        bars.append(
            f"""
            <div class="slider-bar-item"
                 onclick="setTime({hour * 60})"
                 title="{hour:02d}:00 · {count:,} departures">
              <div class="slider-bar"
                   style="height:{height}px; opacity:{'1.0' if active else '0.35'};">
              </div>
            </div>
            """
        )

    if time_filter == NO_FILTER:
        selected_label = ""
        any_time_display = "inline"
    else:
        selected_label = format_time(time_filter)
        any_time_display = "none"

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  left: 50%;
  transform: translateX(-50%);
  bottom: 14px;
  width: min(720px, 90%);
  padding: 10px 16px;
  z-index: 1200;
  background: rgba(255,255,255,0.92);
  border-radius: 12px;
  font-size: 13px;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}

#time-filter label {{
  display: flex;
  gap: 12px;
  align-items: baseline;
}}

#time-slider {{
  flex: 1;
}}

#selected-time {{
  font-weight: 600;
  min-width: 72px;
}}

#any-time {{
  color: #888;
  font-style: italic;
}}

#slider-bars {{
  display: flex;
  align-items: flex-end;
  gap: 2px;
  height: {BAR_MAX_HEIGHT}px;
  margin-top: 6px;
}}

.slider-bar-item {{
  flex: 1;
  display: flex;
  align-items: flex-end;
  height: 100%;
  cursor: pointer;
}}

.slider-bar {{
  width: 100%;
  background: #4682b4;
  border-radius: 2px;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{time_filter}">
    <time id="selected-time">{selected_label}</time>
    <em id="any-time" style="display:{any_time_display}">(any time)</em>
  </label>
  <div id="slider-bars">
    {''.join(bars)}
  </div>
</div>

<script>
function formatMinutes(minutes) {{
  const date = new Date(0, 0, 0, 0, minutes);
  return date.toLocaleString("en-US", {{ timeStyle: "short" }});
}}

function setTime(t) {{
  const url = new URL(window.location.href);
  url.searchParams.set("{key}", String(t));
  window.location.href = url.toString();
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  if (!slider) return;

  slider.addEventListener("input", () => {{
    const t = Number(slider.value);
    if (t === {NO_FILTER}) {{
      selected.textContent = "";
      anyTime.style.display = "inline";
    }} else {{
      selected.textContent = formatMinutes(t);
      anyTime.style.display = "none";
    }}
  }});

  slider.addEventListener("change", () => setTime(Number(slider.value)));

  const wrap = document.getElementById("map-wrap");
  const panel = document.getElementById("time-filter");
  if (wrap && panel) wrap.appendChild(panel);
}});
</script>
"""
    )
