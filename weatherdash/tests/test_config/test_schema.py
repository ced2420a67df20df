"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from weatherdash.config.schema import (
    WEATHERAPI_BASE_URL,
    DashboardConfig,
    ProviderConfig,
    ServerConfig,
    UiConfig,
)
from weatherdash.models.common import Metric


class TestDashboardConfig:
    def test_defaults(self):
        config = DashboardConfig()
        assert config.provider.base_url == WEATHERAPI_BASE_URL
        assert config.ui.default_place == "Hà Nội"
        assert config.ui.forecast_days == 10
        assert config.ui.debounce_ms == 1000
        assert config.ui.default_metric == Metric.TEMPERATURE

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            DashboardConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            UiConfig(debounce_ms=1000, bogus=True)


class TestProviderConfig:
    def test_query_flags(self):
        config = ProviderConfig()
        assert config.air_quality is False
        assert config.alerts is True

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProviderConfig(timeout_seconds=0.0)


class TestUiConfig:
    def test_debounce_variant(self):
        assert UiConfig(debounce_ms=3000).debounce_ms == 3000

    def test_negative_debounce_rejected(self):
        with pytest.raises(ValidationError):
            UiConfig(debounce_ms=-1)

    def test_empty_default_place_rejected(self):
        with pytest.raises(ValidationError):
            UiConfig(default_place="")

    def test_day_count_bounds(self):
        with pytest.raises(ValidationError):
            UiConfig(forecast_days=0)
        with pytest.raises(ValidationError):
            UiConfig(forecast_days=15)

    def test_metric_from_string(self):
        assert UiConfig(default_metric="humidity").default_metric == Metric.HUMIDITY

    def test_unknown_metric_rejected(self):
        with pytest.raises(ValidationError):
            UiConfig(default_metric="pressure")


class TestServerConfig:
    def test_port_bounds(self):
        assert ServerConfig().port == 8777
        with pytest.raises(ValidationError):
            ServerConfig(port=0)
