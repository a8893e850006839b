"""Weather fetch controller: one forecast request per committed city."""

import logging

from widget.ingest.payload_parser import parse_weather_payload
from widget.ingest.weatherapi_client import (
    ProviderError,
    ProviderTransportError,
    WeatherApiClient,
)
from widget.models.common import MSG_CITY_NOT_FOUND, MSG_FETCH_FAILED, Spawn
from widget.models.state import ViewStateStore

logger = logging.getLogger(__name__)


class WeatherFetchController:
    """Fetches current conditions + forecast whenever the committed city changes.

    Requests are never cancelled. Each one is stamped with a generation
    number and only the newest request may write to the store, so a slow
    response for an earlier city cannot overwrite a later one.
    """

    def __init__(self, store: ViewStateStore, client: WeatherApiClient, spawn: Spawn):
        self.store = store
        self.client = client
        self._spawn = spawn
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def on_city_committed(self) -> None:
        self._spawn(self.refresh(self.store.committed_city))

    async def refresh(self, city: str) -> None:
        if not city.strip():
            return

        self._generation += 1
        generation = self._generation

        try:
            raw = await self.client.get_forecast(city)
            payload = parse_weather_payload(raw)
        except ProviderError as e:
            if self._is_stale(generation, city):
                return
            logger.error("Provider rejected location %r: %s", city, e)
            self.store.clear_weather()
            self.store.set_error(MSG_CITY_NOT_FOUND)
            return
        except ProviderTransportError:
            if self._is_stale(generation, city):
                return
            logger.exception("Failed to fetch weather for %r", city)
            self.store.clear_weather()
            self.store.set_error(MSG_FETCH_FAILED)
            return

        if self._is_stale(generation, city):
            return
        self.store.set_weather(payload)
        self.store.clear_error()
        logger.info(
            "Weather updated for %r (%d forecast days)", city, len(payload.forecast_days)
        )

    def _is_stale(self, generation: int, city: str) -> bool:
        if generation == self._generation:
            return False
        logger.debug(
            "Discarding response for %r (generation %d, latest %d)",
            city, generation, self._generation,
        )
        return True
