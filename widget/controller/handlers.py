"""User interaction handlers: typing, Enter, suggestion click, metric pick."""

import logging

from widget.controller.debounce import SuggestionDebouncer
from widget.controller.fetch import WeatherFetchController
from widget.models.common import MSG_CITY_REQUIRED, Metric
from widget.models.state import ViewStateStore
from widget.models.weather import Suggestion

logger = logging.getLogger(__name__)

COMMIT_KEY = "Enter"


def on_input_change(
    store: ViewStateStore, suggester: SuggestionDebouncer, text: str
) -> None:
    """Keystroke in the city box: update text, drop the error, restart the timer."""
    store.set_input_text(text)
    store.clear_error()
    suggester.on_input_changed()


def on_key_down(
    store: ViewStateStore,
    suggester: SuggestionDebouncer,
    fetcher: WeatherFetchController,
    key: str,
) -> bool:
    """Commit the typed city on Enter. Returns True if the city was committed."""
    if key != COMMIT_KEY:
        return False

    city = store.input_text.strip()
    if not city:
        store.set_error(MSG_CITY_REQUIRED)
        return False

    _commit(store, fetcher, city)
    suggester.cancel()
    store.clear_suggestions()
    return True


def on_suggestion_click(
    store: ViewStateStore,
    suggester: SuggestionDebouncer,
    fetcher: WeatherFetchController,
    suggestion: Suggestion,
) -> None:
    """Commit a suggestion directly, skipping the debounce path."""
    store.set_input_text(suggestion.name)
    _commit(store, fetcher, suggestion.name)
    suggester.cancel()
    store.clear_suggestions()
    store.clear_error()


def on_metric_select(store: ViewStateStore, metric: Metric | str) -> None:
    """Switch the charted metric. Purely presentational."""
    store.select_metric(Metric(metric))


def _commit(store: ViewStateStore, fetcher: WeatherFetchController, city: str) -> None:
    # A fetch only follows an actual change of the committed city.
    changed = city != store.committed_city
    store.commit_city(city)
    if changed:
        logger.info("Committed city %r", city)
        fetcher.on_city_committed()
