"""Default config locations and environment overrides."""

API_KEY_ENV = "WEATHERAPI_KEY"
DEFAULT_CONFIG_PATH = "configs/default.yaml"
