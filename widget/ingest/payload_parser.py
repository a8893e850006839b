"""Turn raw WeatherAPI JSON into typed payload models."""

import logging
from typing import Any

from widget.ingest.weatherapi_client import ProviderTransportError
from widget.models.weather import (
    CurrentConditions,
    ForecastDay,
    Suggestion,
    WeatherPayload,
)

logger = logging.getLogger(__name__)


class PayloadError(ProviderTransportError):
    """Raised when a forecast response is missing required fields."""


def parse_weather_payload(raw: dict[str, Any]) -> WeatherPayload:
    """Extract location time, current conditions and forecast days.

    Raises PayloadError if any required field is absent or the forecast has
    no days.
    """
    try:
        current = raw["current"]
        payload = WeatherPayload(
            localtime=str(raw["location"]["localtime"]),
            current=CurrentConditions(
                temp_c=float(current["temp_c"]),
                humidity=float(current["humidity"]),
                wind_kph=float(current["wind_kph"]),
                condition_text=str(current["condition"]["text"]),
                last_updated=str(current["last_updated"]),
            ),
            forecast_days=tuple(
                _parse_forecast_day(d) for d in raw["forecast"]["forecastday"]
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"Malformed forecast payload: {e!r}") from e

    if not payload.forecast_days:
        raise PayloadError("Forecast payload has no forecast days")
    return payload


def _parse_forecast_day(raw_day: dict[str, Any]) -> ForecastDay:
    day = raw_day["day"]
    return ForecastDay(
        date=str(raw_day["date"]),
        avgtemp_c=float(day["avgtemp_c"]),
        avghumidity=float(day["avghumidity"]),
        uv=float(day["uv"]),
        condition_text=str(day["condition"]["text"]),
    )


def parse_suggestions(raw: list[Any]) -> list[Suggestion]:
    """Map search results to suggestions, keeping provider order.

    Entries without a name are skipped.
    """
    results: list[Suggestion] = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("name"):
            logger.debug("Skipping search result without a name: %r", item)
            continue
        results.append(
            Suggestion(
                name=str(item["name"]),
                region=str(item.get("region") or ""),
                country=str(item.get("country") or ""),
            )
        )
    return results
