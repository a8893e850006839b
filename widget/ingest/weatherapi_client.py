"""WeatherAPI.com client for forecast and location search endpoints."""

import logging

import httpx

from widget.config.schema import ProviderConfig

logger = logging.getLogger(__name__)


class ProviderTransportError(Exception):
    """Raised when the provider cannot be reached or answers garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderError(Exception):
    """Raised when the provider answers with an ``error`` object.

    WeatherAPI reports unknown locations this way (code 1006, HTTP 400).
    """

    def __init__(self, message: str, status_code: int | None = None, code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class WeatherApiClient:
    """Async wrapper around the two WeatherAPI endpoints the widget uses.

    No retries and no timeout beyond the configured transport default; a
    failed call is reported once and the caller decides what to show.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.config = config or ProviderConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self._http = http or httpx.AsyncClient(timeout=self.config.timeout)
        self._owns_http = http is None

    async def get_forecast(self, location: str) -> dict:
        """Fetch current conditions plus the N-day forecast for a location."""
        params = {
            "key": self.config.api_key,
            "q": location,
            "days": self.config.forecast_days,
            "aqi": "yes" if self.config.air_quality else "no",
            "alerts": "yes" if self.config.alerts else "no",
        }
        data = await self._get_json("/forecast.json", params)
        if not isinstance(data, dict):
            raise ProviderTransportError("Forecast response is not a JSON object")
        return data

    async def search(self, query: str) -> list[dict]:
        """Look up places matching a partial name, in provider relevance order."""
        params = {"key": self.config.api_key, "q": query}
        data = await self._get_json("/search.json", params)
        if not isinstance(data, list):
            raise ProviderTransportError("Search response is not a JSON array")
        return data

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _get_json(self, endpoint: str, params: dict) -> dict | list:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = await self._http.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("WeatherAPI request failed: %s -> %s", endpoint, e)
            raise ProviderTransportError(f"Request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(
                "WeatherAPI %d: %s returned a non-JSON body", resp.status_code, endpoint
            )
            raise ProviderTransportError(
                f"HTTP {resp.status_code}: invalid JSON", resp.status_code
            ) from e

        # The provider puts logical errors in the body, usually with a 4xx status.
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            logger.error("WeatherAPI error for %s: %s", endpoint, message)
            raise ProviderError(message, resp.status_code, code)

        if resp.status_code >= 400:
            logger.error("WeatherAPI %d: %s -> %s", resp.status_code, endpoint, resp.text)
            raise ProviderTransportError(f"HTTP {resp.status_code}", resp.status_code)
        return data
