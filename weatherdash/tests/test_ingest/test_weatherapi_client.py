"""Tests for the WeatherAPI client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from weatherdash.ingest.weatherapi_client import ProviderError, WeatherApiClient

FORECAST_URL = "https://test-weather.example.com/v1/forecast.json"


@pytest.fixture
def client() -> WeatherApiClient:
    return WeatherApiClient(
        api_key="test-key",
        base_url="https://test-weather.example.com/v1/",
        timeout=0.5,
    )


class TestGetForecast:
    @respx.mock
    def test_success(self, client: WeatherApiClient, payload: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=payload))

        result = asyncio.run(client.get_forecast("Hà Nội"))
        assert result["location"]["name"] == "Hà Nội"
        assert len(result["forecast"]["forecastday"]) == 10

    @respx.mock
    def test_query_parameters(self, client: WeatherApiClient, payload: dict):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=payload)
        )

        asyncio.run(client.get_forecast("Hà Nội", days=3))
        params = route.calls[0].request.url.params
        assert params["key"] == "test-key"
        assert params["q"] == "Hà Nội"
        assert params["days"] == "3"
        assert params["aqi"] == "no"
        assert params["alerts"] == "yes"

    @respx.mock
    def test_single_request_no_retry(self, client: WeatherApiClient):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(client.get_forecast("Paris"))
        assert route.call_count == 1

    @respx.mock
    def test_unknown_place_error_body(self, client: WeatherApiClient, error_1006: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(400, json=error_1006))

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(client.get_forecast("Atlantis"))
        assert exc_info.value.is_unknown_place
        assert exc_info.value.status_code == 400

    @respx.mock
    def test_other_error_body(self, client: WeatherApiClient, fixtures_dir):
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(
                403, content=(fixtures_dir / "weatherapi_error_2008.json").read_bytes()
            )
        )

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(client.get_forecast("Paris"))
        assert not exc_info.value.is_unknown_place
        assert exc_info.value.code == 2008

    @respx.mock
    def test_timeout_propagates(self, client: WeatherApiClient):
        respx.get(FORECAST_URL).mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(httpx.TimeoutException):
            asyncio.run(client.get_forecast("Paris"))
