"""WeatherAPI forecast data models."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Condition:
    text: str
    icon: str
    code: int = 0


@dataclass(frozen=True)
class Location:
    name: str
    region: str
    country: str
    localtime: str  # "YYYY-MM-DD H:MM" in the place's own timezone
    tz_id: str = ""


@dataclass(frozen=True)
class CurrentConditions:
    temp_f: float
    temp_c: float
    humidity: int
    wind_kph: float
    condition: Condition
    last_updated: str


@dataclass(frozen=True)
class HourlySample:
    time: str  # "YYYY-MM-DD HH:MM"
    temp_f: float
    uv: float
    humidity: int


@dataclass(frozen=True)
class DayAggregate:
    avgtemp_f: float
    avghumidity: float
    condition: Condition


@dataclass(frozen=True)
class ForecastDay:
    date: date
    day: DayAggregate
    hours: tuple[HourlySample, ...]


@dataclass(frozen=True)
class Alert:
    headline: str
    severity: str = ""
    event: str = ""


@dataclass(frozen=True)
class Forecast:
    location: Location
    current: CurrentConditions
    days: tuple[ForecastDay, ...]
    alerts: tuple[Alert, ...] = ()
    fetched_at: str = ""

    def find_day(self, target: date) -> ForecastDay | None:
        for day in self.days:
            if day.date == target:
                return day
        return None


@dataclass(frozen=True)
class FetchFailure:
    place: str
    message: str


@dataclass(frozen=True)
class TransportFailure(FetchFailure):
    """The request could not complete (network, timeout, provider error)."""


@dataclass(frozen=True)
class PlaceNotFound(FetchFailure):
    """The provider answered but could not resolve the place."""


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    value: float


@dataclass(frozen=True)
class CurrentView:
    temp_f: float
    condition_text: str
    condition_icon: str
    humidity: int
    wind_kph: float
    is_day_average: bool = False


@dataclass(frozen=True)
class DayTab:
    date: date
    label: str
    icon: str
    avg_humidity: float
    selected: bool = False


@dataclass
class DashboardView:
    state: str
    place: str
    metric: str
    selected_date: date
    error: str | None = None
    location_name: str = ""
    local_time: str = ""
    current: CurrentView | None = None
    day_tabs: list[DayTab] = field(default_factory=list)
    series: list[SeriesPoint] = field(default_factory=list)
    chart: dict = field(default_factory=dict)
    alerts: list[str] = field(default_factory=list)
