"""WeatherAPI.com forecast client."""

import logging

import httpx

from weatherdash.config.schema import WEATHERAPI_BASE_URL

logger = logging.getLogger(__name__)

# WeatherAPI error code for "No matching location found."
NO_MATCHING_LOCATION = 1006


class ProviderError(Exception):
    """The provider answered with an error payload."""

    def __init__(self, status_code: int, code: int | None, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message

    @property
    def is_unknown_place(self) -> bool:
        return self.code == NO_MATCHING_LOCATION


class WeatherApiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHERAPI_BASE_URL,
        timeout: float = 5.0,
        air_quality: bool = False,
        alerts: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.air_quality = air_quality
        self.alerts = alerts
        self._transport = transport

    async def get_forecast(self, place: str, days: int = 10) -> dict:
        """Fetch a multi-day forecast for a free-text place query.

        Issues exactly one request. Raises httpx.RequestError (including
        timeouts) when no response arrives, ProviderError when the provider
        returns an error body, and httpx.HTTPStatusError for any other
        non-2xx status.
        """
        url = f"{self.base_url}/forecast.json"
        params = {
            "key": self.api_key,
            "q": place,
            "days": days,
            "aqi": "yes" if self.air_quality else "no",
            "alerts": "yes" if self.alerts else "no",
        }
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            resp = await client.get(url, params=params)

        if resp.status_code >= 400:
            error = _error_body(resp)
            if error is not None:
                logger.debug(
                    "WeatherAPI error %s for q=%r: %s",
                    error.code, place, error.message,
                )
                raise error
        resp.raise_for_status()
        return resp.json()


def _error_body(resp: httpx.Response) -> ProviderError | None:
    try:
        payload = resp.json()
    except ValueError:
        return None
    if not isinstance(payload, dict) or not isinstance(payload.get("error"), dict):
        return None
    err = payload["error"]
    return ProviderError(
        status_code=resp.status_code,
        code=err.get("code"),
        message=err.get("message", ""),
    )
