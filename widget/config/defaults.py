"""Default values and environment overrides for the widget config."""

API_KEY_ENV = "WEATHERAPI_KEY"
DEFAULT_CONFIG = "ops/configs/default.yaml"
DEFAULT_CITY = "London"
