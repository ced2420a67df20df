"""Dashboard state owner: applies fetch outcomes and builds the view."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date
from enum import StrEnum

from weatherdash.app.debounce import DebounceCoordinator
from weatherdash.config.schema import DashboardConfig
from weatherdash.ingest.forecast_fetcher import ForecastFetcher, resolve_place
from weatherdash.ingest.weatherapi_client import WeatherApiClient
from weatherdash.models.common import Metric, local_today
from weatherdash.models.forecast import (
    DashboardView,
    FetchFailure,
    Forecast,
    PlaceNotFound,
)
from weatherdash.projection.series import (
    current_conditions_view,
    day_selector,
    format_local_time,
    project,
)
from weatherdash.projection.styles import chart_payload

logger = logging.getLogger(__name__)

# A failed query falls back to the default place at most this many times.
MAX_FALLBACK_ATTEMPTS = 1


class DashboardState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FALLBACK = "fallback"
    ERROR = "error"


TRANSITIONS: dict[DashboardState, frozenset[DashboardState]] = {
    DashboardState.IDLE: frozenset({DashboardState.LOADING}),
    DashboardState.LOADING: frozenset({
        DashboardState.LOADING,
        DashboardState.READY,
        DashboardState.FALLBACK,
        DashboardState.ERROR,
    }),
    DashboardState.READY: frozenset({DashboardState.LOADING}),
    DashboardState.FALLBACK: frozenset({
        DashboardState.LOADING,
        DashboardState.READY,
        DashboardState.ERROR,
    }),
    DashboardState.ERROR: frozenset({DashboardState.LOADING}),
}


class InvalidTransition(Exception):
    pass


class DateNotInForecast(KeyError):
    pass


class DashboardController:
    def __init__(
        self,
        config: DashboardConfig,
        fetcher: ForecastFetcher,
        today: Callable[[], date] = local_today,
    ):
        self.config = config
        self.fetcher = fetcher
        self._today = today
        self.state = DashboardState.IDLE
        self.forecast: Forecast | None = None
        self.place = config.ui.default_place
        self.error: str | None = None
        self.metric = config.ui.default_metric
        self.selected_date = today()
        # Set once the user picks a day; cleared when a new forecast lands.
        self._date_chosen = False
        self._seq = 0
        self.debouncer = DebounceCoordinator(
            self.load,
            quiet_period_ms=config.ui.debounce_ms,
            normalize=self._resolve,
        )

    @property
    def default_place(self) -> str:
        return self.config.ui.default_place

    def _resolve(self, query: str) -> str:
        return resolve_place(query, self.default_place)

    def _transition(self, new_state: DashboardState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state} -> {new_state}")
        logger.debug("State %s -> %s", self.state, new_state)
        self.state = new_state

    # ── Inputs ──────────────────────────────────────────────────

    def change_place(self, query: str) -> None:
        """Text input changed; fetch after the quiet period."""
        self.debouncer.submit(query)

    def submit_place(self, query: str) -> asyncio.Task | None:
        """Enter pressed; fetch now. Returns the fetch task, if one started."""
        self.debouncer.submit(query)
        return self.debouncer.flush()

    def select_date(self, target: date) -> None:
        if self.forecast is None or self.forecast.find_day(target) is None:
            raise DateNotInForecast(target.isoformat())
        self.selected_date = target
        self._date_chosen = True

    def select_metric(self, metric: Metric | str) -> None:
        self.metric = Metric(metric)

    # ── Fetch outcome handling ──────────────────────────────────

    async def load(self, query: str) -> None:
        """Fetch a place, falling back to the default place once on failure.

        Only the most recently started load may change the displayed state;
        a slower, older completion is dropped.
        """
        self._seq += 1
        seq = self._seq
        place = self._resolve(query)
        self._transition(DashboardState.LOADING)

        attempts = 0
        while True:
            result = await self.fetcher.fetch(place, self.config.ui.forecast_days)
            if seq != self._seq:
                logger.debug("Dropping stale result for %r (load #%d)", place, seq)
                return

            if isinstance(result, Forecast):
                self.forecast = result
                self.place = place
                self._date_chosen = False
                self.error = None
                self._transition(DashboardState.READY)
                logger.info(
                    "Loaded forecast for %s (%d days)",
                    result.location.name, len(result.days),
                )
                return

            attempts += 1
            self.debouncer.reset_last()
            if attempts > MAX_FALLBACK_ATTEMPTS or place == self.default_place:
                self.error = _failure_message(result)
                self._transition(DashboardState.ERROR)
                logger.error("Giving up on %r: %s", place, result.message)
                return

            self.error = f"Could not find {place}. Showing {self.default_place}."
            self._transition(DashboardState.FALLBACK)
            logger.info("Falling back from %r to %r", place, self.default_place)
            place = self.default_place

    # ── View ────────────────────────────────────────────────────

    def view(self) -> DashboardView:
        view = DashboardView(
            state=self.state.value,
            place=self.place,
            metric=self.metric.value,
            selected_date=self.selected_date,
            error=self.error,
        )
        if self.forecast is None:
            return view

        series = project(self.forecast, self.selected_date, self.metric)
        view.location_name = self.forecast.location.name
        view.local_time = format_local_time(self.forecast.location.localtime)
        view.current = current_conditions_view(
            self.forecast, self.selected_date if self._date_chosen else None
        )
        view.day_tabs = day_selector(
            self.forecast,
            self.selected_date,
            self._today(),
            limit=self.config.ui.day_selector_limit,
        )
        view.series = list(series)
        view.chart = chart_payload(view.series, self.metric)
        view.alerts = [a.headline for a in self.forecast.alerts]
        return view


def _failure_message(failure: FetchFailure) -> str:
    if isinstance(failure, PlaceNotFound):
        return f"Could not find {failure.place}."
    return f"Weather service unavailable: {failure.message}"


def build_controller(config: DashboardConfig) -> DashboardController:
    """Wire a controller to the configured WeatherAPI provider."""
    provider = config.provider
    client = WeatherApiClient(
        api_key=provider.api_key,
        base_url=provider.base_url,
        timeout=provider.timeout_seconds,
        air_quality=provider.air_quality,
        alerts=provider.alerts,
    )
    fetcher = ForecastFetcher(client, default_place=config.ui.default_place)
    return DashboardController(config, fetcher)
