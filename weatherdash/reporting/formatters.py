"""Output formatters for dashboard views."""

import json
from dataclasses import asdict
from datetime import date

from weatherdash.models.forecast import DashboardView
from weatherdash.projection.styles import format_value


def format_view_text(v: DashboardView) -> str:
    """Plain text dashboard for the terminal."""
    lines = [f"=== {v.location_name or v.place} | {v.state} ==="]
    if v.error:
        lines.append(f"! {v.error}")
    if v.local_time:
        lines.append(v.local_time)
    if v.current is not None:
        c = v.current
        suffix = " (day average)" if c.is_day_average else ""
        lines.append(f"{c.temp_f}°F {c.condition_text}{suffix}")
        lines.append(f"Humidity: {c.humidity}% | Wind Speed: {c.wind_kph}km/h")
    for headline in v.alerts:
        lines.append(f"Alert: {headline}")
    if v.day_tabs:
        tabs = []
        for t in v.day_tabs:
            label = f"[{t.label}]" if t.selected else t.label
            tabs.append(f"{label} {t.avg_humidity:g}%")
        lines.append(" | ".join(tabs))
    if v.series:
        lines.append(f"{v.metric} on {v.selected_date.isoformat()}:")
        for p in v.series:
            hour = p.label[-5:]
            lines.append(f"  {hour}  {format_value(p.value, v.metric)}")
    elif v.current is not None:
        lines.append(f"No hourly data for {v.selected_date.isoformat()}")
    return "\n".join(lines)


def view_to_dict(v: DashboardView) -> dict:
    return json.loads(json.dumps(asdict(v), default=_json_default))


def format_view_json(v: DashboardView) -> str:
    """JSON view for programmatic consumption."""
    return json.dumps(asdict(v), indent=2, ensure_ascii=False, default=_json_default)


def _json_default(obj: object) -> str:
    if isinstance(obj, date):
        return obj.isoformat()
    raise TypeError(f"Not JSON serializable: {type(obj).__name__}")
