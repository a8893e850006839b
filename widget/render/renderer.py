"""Render surface: view state snapshot -> HTML.

Stateless: the same snapshot always yields the same markup. Interaction
wiring (typing, Enter, clicks, metric buttons) lives in the page script,
which posts events back to the dashboard API.
"""

from pathlib import Path
from typing import Any

import jinja2

from widget.config.schema import UiConfig
from widget.models.common import Metric
from widget.models.state import ViewState
from widget.render import formatters as fmt

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)

CHART_WIDTH = 320
CHART_HEIGHT = 120
CHART_PADDING = 10


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)


def build_chart(series: list[float]) -> dict[str, Any] | None:
    """Scale a series into an SVG polyline. None when there is nothing to plot."""
    if not series:
        return None

    lo, hi = min(series), max(series)
    span = hi - lo
    plot_width = CHART_WIDTH - 2 * CHART_PADDING
    plot_height = CHART_HEIGHT - 2 * CHART_PADDING
    step = plot_width / (len(series) - 1) if len(series) > 1 else 0.0

    def y_for(value: float) -> float:
        if span == 0:
            return CHART_PADDING + plot_height / 2
        return CHART_PADDING + (hi - value) / span * plot_height

    points = [
        (round(CHART_PADDING + i * step, 1), round(y_for(v), 1))
        for i, v in enumerate(series)
    ]
    return {
        "width": CHART_WIDTH,
        "height": CHART_HEIGHT,
        "points": points,
        "polyline": " ".join(f"{x},{y}" for x, y in points),
    }


def _forecast_cards(state: ViewState, max_cards: int) -> list[dict[str, Any]]:
    if state.weather is None:
        return []
    cards = []
    for index, day in enumerate(state.weather.forecast_days[:max_cards]):
        cards.append({
            "css": "today" if index == 0 else "other",
            "label": fmt.forecast_date_label(day.date, index),
            "icon": fmt.weather_icon(day.condition_text),
            "humidity": fmt.humidity_percent(day.avghumidity),
        })
    return cards


def _current_panel(state: ViewState) -> dict[str, str] | None:
    payload = state.weather
    if payload is None:
        return None
    return {
        "icon": fmt.weather_icon(payload.current.condition_text),
        "temperature": fmt.current_temperature(payload),
        "condition": payload.current.condition_text,
        "humidity": fmt.humidity_percent(payload.current.humidity),
        "wind": fmt.wind_speed(payload),
    }


def widget_context(state: ViewState, ui: UiConfig | None = None) -> dict[str, Any]:
    """Everything the widget template needs, derived from one snapshot."""
    ui = ui or UiConfig()
    metric = state.selected_metric
    series = fmt.chart_series(state.weather, metric)
    return {
        "version": state.version,
        "input_text": state.input_text,
        "suggestions": [s.label for s in state.suggestions],
        "error_message": state.error_message,
        "clock": fmt.local_datetime_label(state.weather),
        "current": _current_panel(state),
        "metrics": [
            {"value": m.value, "title": fmt.metric_title(m), "selected": m == metric}
            for m in Metric
        ],
        "chart_title": fmt.metric_title(metric),
        "headline": fmt.headline_value(state.weather, metric),
        "chart": build_chart(series),
        "chart_labels": fmt.chart_labels(state.weather),
        "forecast": _forecast_cards(state, ui.forecast_cards),
    }


def render_widget(state: ViewState, ui: UiConfig | None = None) -> str:
    """Render the widget fragment (no <html>/<body>)."""
    return render_template("widget.html.j2", **widget_context(state, ui))


def render_page(state: ViewState, ui: UiConfig | None = None) -> str:
    """Full page: the widget fragment plus the event-forwarding script."""
    return render_template(
        "page.html.j2",
        widget_html=render_widget(state, ui),
        version=state.version,
    )
