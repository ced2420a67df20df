"""Per-metric display styles for the chart renderer."""

from collections.abc import Iterable
from dataclasses import dataclass

from weatherdash.models.common import Metric
from weatherdash.models.forecast import SeriesPoint


@dataclass(frozen=True)
class MetricStyle:
    label: str
    unit: str
    border_color: str
    background_color: str


METRIC_STYLES: dict[Metric, MetricStyle] = {
    Metric.TEMPERATURE: MetricStyle(
        label="Temp",
        unit="°F",
        border_color="rgb(75, 192, 192)",
        background_color="rgba(5, 86, 86, 0.2)",
    ),
    Metric.UV: MetricStyle(
        label="Uv",
        unit="",
        border_color="rgb(227, 191, 12)",
        background_color="rgb(241, 223, 137)",
    ),
    Metric.HUMIDITY: MetricStyle(
        label="Humidity",
        unit="%",
        border_color="rgb(64, 136, 4)",
        background_color="rgba(185, 235, 143, 0.2)",
    ),
}


def style_for(metric: Metric | str) -> MetricStyle:
    return METRIC_STYLES[Metric(metric)]


def format_value(value: float, metric: Metric | str) -> str:
    """Tooltip text for one value, e.g. '71.2 °F', '5.0', '80 %'."""
    unit = style_for(metric).unit
    return f"{value:g} {unit}".rstrip()


def chart_payload(series: Iterable[SeriesPoint], metric: Metric | str) -> dict:
    """Chart.js line-chart data for one projected series."""
    style = style_for(metric)
    points = list(series)
    return {
        "labels": [p.label for p in points],
        "datasets": [
            {
                "label": style.label,
                "data": [p.value for p in points],
                "fill": True,
                "borderColor": style.border_color,
                "backgroundColor": style.background_color,
                "borderWidth": 1,
                "pointRadius": 0,
                "tension": 0.7,
            }
        ],
        "unit": style.unit,
    }
