"""One widget instance: store, provider client and controllers on one event loop."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from widget.config.schema import WidgetConfig
from widget.controller import handlers
from widget.controller.debounce import SuggestionDebouncer
from widget.controller.fetch import WeatherFetchController
from widget.ingest.weatherapi_client import WeatherApiClient
from widget.models.common import Metric
from widget.models.state import ViewState, ViewStateStore

logger = logging.getLogger(__name__)


class WidgetSession:
    """Wires user events to the store, the debouncer and the fetch controller.

    All methods must be called from the event loop that runs the session.
    """

    def __init__(self, config: WidgetConfig, client: WeatherApiClient | None = None):
        self.config = config
        self.client = client or WeatherApiClient(config.provider)
        self.store = ViewStateStore(
            config.ui.default_city, max_suggestions=config.suggestions.max_results
        )
        self._tasks: set[asyncio.Task] = set()
        self.fetcher = WeatherFetchController(self.store, self.client, self.spawn)
        self.suggester = SuggestionDebouncer(
            self.store,
            self.client,
            self.spawn,
            delay=config.suggestions.debounce_seconds,
        )
        self._mounted = False

    def spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def mount(self) -> None:
        """Kick off the initial fetch for the seed city."""
        if self._mounted:
            return
        self._mounted = True
        logger.info("Widget mounted with city %r", self.store.committed_city)
        self.fetcher.on_city_committed()

    # --- User events ---

    def input_changed(self, text: str) -> None:
        handlers.on_input_change(self.store, self.suggester, text)

    def key_down(self, key: str) -> bool:
        return handlers.on_key_down(self.store, self.suggester, self.fetcher, key)

    def suggestion_clicked(self, index: int) -> None:
        """Select the suggestion at ``index``. Raises IndexError if absent."""
        if index < 0:
            raise IndexError(f"Suggestion index out of range: {index}")
        suggestion = self.store.suggestions[index]
        handlers.on_suggestion_click(self.store, self.suggester, self.fetcher, suggestion)

    def metric_selected(self, metric: Metric | str) -> None:
        handlers.on_metric_select(self.store, metric)

    # --- Lifecycle ---

    def snapshot(self) -> ViewState:
        return self.store.snapshot()

    async def settle(self) -> None:
        """Wait until every spawned network task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        self.suggester.cancel()
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.client.aclose()
