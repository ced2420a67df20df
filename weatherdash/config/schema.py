"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherdash.models.common import Metric

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = WEATHERAPI_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=5.0, gt=0.0)
    air_quality: bool = False
    alerts: bool = True


class UiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_place: str = Field(default="Hà Nội", min_length=1)
    forecast_days: int = Field(default=10, ge=1, le=14)
    day_selector_limit: int = Field(default=7, ge=1, le=14)
    debounce_ms: int = Field(default=1000, ge=0)
    default_metric: Metric = Metric.TEMPERATURE


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    ui: UiConfig = UiConfig()
    server: ServerConfig = ServerConfig()
