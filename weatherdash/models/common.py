"""Common types and helpers shared across models."""

from datetime import UTC, date, datetime
from enum import StrEnum


class Metric(StrEnum):
    TEMPERATURE = "temp"
    UV = "uv"
    HUMIDITY = "humidity"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_today() -> date:
    return date.today()
