"""Series projector: hourly chart series and display panels from a Forecast.

Everything here is a pure function of an already-fetched Forecast. Nothing
in this module performs I/O.
"""

from collections.abc import Iterator
from datetime import date, datetime

from weatherdash.models.common import Metric
from weatherdash.models.forecast import (
    CurrentView,
    DayTab,
    Forecast,
    HourlySample,
    SeriesPoint,
)

_METRIC_FIELDS: dict[Metric, str] = {
    Metric.TEMPERATURE: "temp_f",
    Metric.UV: "uv",
    Metric.HUMIDITY: "humidity",
}


def metric_value(sample: HourlySample, metric: Metric | str) -> float:
    return getattr(sample, _METRIC_FIELDS[Metric(metric)])


class ProjectedSeries:
    """Lazy, restartable (label, value) series for one day and metric.

    Each iteration walks the matched day's hourly samples again, so the
    series can be consumed any number of times.
    """

    def __init__(self, forecast: Forecast | None, target: date, metric: Metric | str):
        self.forecast = forecast
        self.date = target
        self.metric = Metric(metric)

    def __iter__(self) -> Iterator[SeriesPoint]:
        if self.forecast is None:
            return
        day = self.forecast.find_day(self.date)
        if day is None:
            return
        for sample in day.hours:
            yield SeriesPoint(label=sample.time, value=metric_value(sample, self.metric))

    def __len__(self) -> int:
        if self.forecast is None:
            return 0
        day = self.forecast.find_day(self.date)
        return 0 if day is None else len(day.hours)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectedSeries):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"ProjectedSeries(date={self.date}, metric={self.metric}, points={len(self)})"


def project(forecast: Forecast | None, target: date, metric: Metric | str) -> ProjectedSeries:
    """Project one day's hourly values for a metric.

    A date missing from the forecast gives an empty series, not an error.
    """
    return ProjectedSeries(forecast, target, metric)


def current_conditions_view(forecast: Forecast, selected: date | None = None) -> CurrentView:
    """Current-conditions panel, overridden by the selected day's averages.

    When the selected date matches a forecast day, temperature and
    condition come from that day's aggregates. Humidity and wind stay the
    observed current values. The forecast itself is left untouched.
    """
    cur = forecast.current
    day = forecast.find_day(selected) if selected is not None else None
    if day is None:
        return CurrentView(
            temp_f=cur.temp_f,
            condition_text=cur.condition.text,
            condition_icon=cur.condition.icon,
            humidity=cur.humidity,
            wind_kph=cur.wind_kph,
        )
    return CurrentView(
        temp_f=day.day.avgtemp_f,
        condition_text=day.day.condition.text,
        condition_icon=day.day.condition.icon,
        humidity=cur.humidity,
        wind_kph=cur.wind_kph,
        is_day_average=True,
    )


def day_label(day: date, today: date) -> str:
    """'Today' for the current date, otherwise '<Mon> <D>' (e.g. 'Jan 5')."""
    if day == today:
        return "Today"
    return f"{day.strftime('%b')} {day.day}"


def day_selector(
    forecast: Forecast, selected: date, today: date, limit: int = 7
) -> list[DayTab]:
    return [
        DayTab(
            date=d.date,
            label=day_label(d.date, today),
            icon=d.day.condition.icon,
            avg_humidity=d.day.avghumidity,
            selected=d.date == selected,
        )
        for d in forecast.days[:limit]
    ]


def format_local_time(localtime: str) -> str:
    """Format a provider localtime ('2024-01-01 9:05') for the header.

    Returns e.g. '09:05 AM, Mon, Jan 1, 2024'; unparseable input is
    returned unchanged.
    """
    try:
        dt = datetime.strptime(localtime, "%Y-%m-%d %H:%M")
    except (ValueError, TypeError):
        return localtime
    return f"{dt.strftime('%I:%M %p, %a, %b')} {dt.day}, {dt.year}"
