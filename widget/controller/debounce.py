"""Trailing-edge debounce on the event loop, and the suggestion lookup it drives."""

import asyncio
import logging
from collections.abc import Callable

from widget.ingest.payload_parser import parse_suggestions
from widget.ingest.weatherapi_client import (
    ProviderError,
    ProviderTransportError,
    WeatherApiClient,
)
from widget.models.common import Spawn
from widget.models.state import ViewStateStore

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.0


class Debouncer:
    """Run a callback once input has been quiet for ``delay`` seconds.

    Every trigger cancels the pending timer and arms a new one. No leading
    call and no max-wait cap. Must be used from the event loop thread.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()


class SuggestionDebouncer:
    """Autocomplete: query the search endpoint after the user stops typing."""

    def __init__(
        self,
        store: ViewStateStore,
        client: WeatherApiClient,
        spawn: Spawn,
        delay: float = DEFAULT_DELAY_SECONDS,
    ):
        self.store = store
        self.client = client
        self._spawn = spawn
        self._debouncer = Debouncer(delay, self._on_quiet)
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input_changed(self) -> None:
        self._debouncer.trigger()

    def cancel(self) -> None:
        """Disarm the timer and drop results of lookups already in flight."""
        self._debouncer.cancel()
        self._generation += 1

    def _on_quiet(self) -> None:
        query = self.store.input_text
        if not query.strip():
            self.store.clear_suggestions()
            return
        self._spawn(self.fetch_suggestions(query, self._generation))

    async def fetch_suggestions(self, query: str, generation: int | None = None) -> None:
        """Search for ``query`` and store the first few matches.

        Failures only empty the list; nothing is shown to the user. A result
        that arrives after ``cancel()`` is dropped.
        """
        if generation is None:
            generation = self._generation
        try:
            raw = await self.client.search(query)
        except (ProviderError, ProviderTransportError) as e:
            logger.warning("Suggestion lookup failed for %r: %s", query, e)
            if generation == self._generation:
                self.store.clear_suggestions()
            return
        if generation != self._generation:
            logger.debug("Discarding suggestions for %r after commit", query)
            return
        self.store.set_suggestions(parse_suggestions(raw))
