"""Weather provider data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentConditions:
    temp_c: float
    humidity: float
    wind_kph: float
    condition_text: str
    last_updated: str


@dataclass(frozen=True)
class ForecastDay:
    date: str  # YYYY-MM-DD
    avgtemp_c: float
    avghumidity: float
    uv: float
    condition_text: str


@dataclass(frozen=True)
class WeatherPayload:
    localtime: str  # location-local "YYYY-MM-DD H:MM"
    current: CurrentConditions
    forecast_days: tuple[ForecastDay, ...]  # chronological, never empty


@dataclass(frozen=True)
class Suggestion:
    name: str
    region: str = ""
    country: str = ""

    @property
    def label(self) -> str:
        return ", ".join([self.name, self.region, self.country])
