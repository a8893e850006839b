"""View state: the single owned container for everything the widget shows."""

from dataclasses import dataclass

from widget.models.common import Metric
from widget.models.weather import Suggestion, WeatherPayload

MAX_SUGGESTIONS = 5


@dataclass(frozen=True)
class ViewState:
    input_text: str
    committed_city: str
    weather: WeatherPayload | None
    suggestions: tuple[Suggestion, ...]
    error_message: str
    selected_metric: Metric
    version: int


class ViewStateStore:
    """Mutable view state behind a narrow set of mutators.

    Fields are only changed from event-loop callbacks, so each mutator runs
    to completion before any other handler observes the store. There is no
    cross-field transaction: a reader may see an old payload next to a new
    committed city until the pending fetch resolves.
    """

    def __init__(self, default_city: str, max_suggestions: int = MAX_SUGGESTIONS):
        if not default_city.strip():
            raise ValueError("default_city must be non-empty")
        self.max_suggestions = max_suggestions
        self._input_text = default_city
        self._committed_city = default_city
        self._weather: WeatherPayload | None = None
        self._suggestions: tuple[Suggestion, ...] = ()
        self._error_message = ""
        self._selected_metric = Metric.TEMPERATURE
        self._version = 0

    # --- Read access ---

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def committed_city(self) -> str:
        return self._committed_city

    @property
    def weather(self) -> WeatherPayload | None:
        return self._weather

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self._suggestions

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def selected_metric(self) -> Metric:
        return self._selected_metric

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> ViewState:
        return ViewState(
            input_text=self._input_text,
            committed_city=self._committed_city,
            weather=self._weather,
            suggestions=self._suggestions,
            error_message=self._error_message,
            selected_metric=self._selected_metric,
            version=self._version,
        )

    # --- Mutators ---

    def set_input_text(self, text: str) -> None:
        self._input_text = text
        self._touch()

    def commit_city(self, city: str) -> None:
        """Set the committed city. Rejects empty values."""
        if not city.strip():
            raise ValueError("committed city must be non-empty")
        self._committed_city = city
        self._touch()

    def set_weather(self, payload: WeatherPayload) -> None:
        self._weather = payload
        self._touch()

    def clear_weather(self) -> None:
        self._weather = None
        self._touch()

    def set_suggestions(self, suggestions: list[Suggestion]) -> None:
        self._suggestions = tuple(suggestions[: self.max_suggestions])
        self._touch()

    def clear_suggestions(self) -> None:
        self._suggestions = ()
        self._touch()

    def set_error(self, message: str) -> None:
        self._error_message = message
        self._touch()

    def clear_error(self) -> None:
        self._error_message = ""
        self._touch()

    def select_metric(self, metric: Metric) -> None:
        self._selected_metric = Metric(metric)
        self._touch()

    def _touch(self) -> None:
        self._version += 1
