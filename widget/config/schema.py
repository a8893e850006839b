"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from widget.config.defaults import DEFAULT_CITY


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.weatherapi.com/v1"
    api_key: str = ""
    forecast_days: int = Field(default=5, ge=1, le=14)
    air_quality: bool = False
    alerts: bool = True
    timeout: float = Field(default=10.0, gt=0.0)


class SuggestionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    debounce_seconds: float = Field(default=1.0, ge=0.0)
    max_results: int = Field(default=5, ge=1)


class UiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_city: str = Field(default=DEFAULT_CITY, min_length=1)
    forecast_cards: int = Field(default=4, ge=1)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class WidgetConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    suggestions: SuggestionConfig = SuggestionConfig()
    ui: UiConfig = UiConfig()
    server: ServerConfig = ServerConfig()
