"""Forecast fetcher: one provider query per call, typed failures."""

import logging
from datetime import date

import httpx

from weatherdash.ingest.weatherapi_client import ProviderError, WeatherApiClient
from weatherdash.models.common import utc_now_iso
from weatherdash.models.forecast import (
    Alert,
    Condition,
    CurrentConditions,
    DayAggregate,
    FetchFailure,
    Forecast,
    ForecastDay,
    HourlySample,
    Location,
    PlaceNotFound,
    TransportFailure,
)

logger = logging.getLogger(__name__)


def resolve_place(query: str | None, default_place: str) -> str:
    """Trim a place query, substituting the default place when empty."""
    place = (query or "").strip()
    return place or default_place


class ForecastFetcher:
    def __init__(self, client: WeatherApiClient, default_place: str):
        self.client = client
        self.default_place = default_place

    async def fetch(self, place: str, days: int = 10) -> Forecast | FetchFailure:
        """Fetch the forecast for a place.

        Never raises for provider or network trouble; the outcome is
        returned for the caller to apply.
        """
        place = resolve_place(place, self.default_place)
        try:
            raw = await self.client.get_forecast(place, days)
        except ProviderError as e:
            if e.is_unknown_place:
                logger.warning("Place not found: %r (%s)", place, e.message)
                return PlaceNotFound(place=place, message=e.message)
            logger.warning("Provider error for %r: %s", place, e.message)
            return TransportFailure(place=place, message=e.message)
        except httpx.TimeoutException:
            logger.warning("Forecast request for %r timed out", place)
            return TransportFailure(place=place, message="Request timed out")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Forecast request for %r failed: %s", place, e)
            return TransportFailure(place=place, message=str(e))

        if not isinstance(raw, dict) or not raw.get("location"):
            logger.warning("No location in provider response for %r", place)
            return PlaceNotFound(place=place, message="City not found")

        try:
            return parse_forecast(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed forecast payload for %r: %s", place, e)
            return TransportFailure(place=place, message=f"Malformed response: {e}")


def parse_forecast(raw: dict) -> Forecast:
    """Build a Forecast from a WeatherAPI forecast.json payload."""
    loc = raw["location"]
    cur = raw["current"]

    location = Location(
        name=loc.get("name", ""),
        region=loc.get("region", ""),
        country=loc.get("country", ""),
        localtime=loc.get("localtime", ""),
        tz_id=loc.get("tz_id", ""),
    )
    current = CurrentConditions(
        temp_f=float(cur["temp_f"]),
        temp_c=float(cur.get("temp_c", 0.0)),
        humidity=int(cur["humidity"]),
        wind_kph=float(cur["wind_kph"]),
        condition=_parse_condition(cur.get("condition") or {}),
        last_updated=cur.get("last_updated", ""),
    )

    days = tuple(_parse_day(d) for d in raw["forecast"]["forecastday"])
    alerts = tuple(
        Alert(
            headline=a.get("headline", ""),
            severity=a.get("severity", ""),
            event=a.get("event", ""),
        )
        for a in (raw.get("alerts") or {}).get("alert") or []
    )

    return Forecast(
        location=location,
        current=current,
        days=days,
        alerts=alerts,
        fetched_at=utc_now_iso(),
    )


def _parse_condition(c: dict) -> Condition:
    return Condition(
        text=c.get("text", ""),
        icon=c.get("icon", ""),
        code=int(c.get("code", 0)),
    )


def _parse_day(d: dict) -> ForecastDay:
    agg = d["day"]
    return ForecastDay(
        date=date.fromisoformat(d["date"]),
        day=DayAggregate(
            avgtemp_f=float(agg["avgtemp_f"]),
            avghumidity=float(agg["avghumidity"]),
            condition=_parse_condition(agg.get("condition") or {}),
        ),
        hours=tuple(
            HourlySample(
                time=h["time"],
                temp_f=float(h["temp_f"]),
                uv=float(h["uv"]),
                humidity=int(h["humidity"]),
            )
            for h in d.get("hour") or []
        ),
    )
