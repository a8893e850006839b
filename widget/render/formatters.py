"""Pure display formatters: weather payload + selected metric -> strings and series.

Nothing here touches the network, the store or the clock, so every function
can be tested on its own.
"""

import math
from datetime import date, datetime

from widget.models.common import LABEL_LOADING, LABEL_TODAY, Metric
from widget.models.weather import WeatherPayload

ICON_CLOUD = "☁️"
ICON_SUN = "☀️"
ICON_RAIN = "🌧️"
ICON_SNOW = "❄️"

# First matching rule wins.
_ICON_RULES: list[tuple[tuple[str, ...], str]] = [
    (("cloud",), ICON_CLOUD),
    (("sun", "clear"), ICON_SUN),
    (("rain",), ICON_RAIN),
    (("snow",), ICON_SNOW),
]

_METRIC_TITLES = {
    Metric.TEMPERATURE: "Nhiệt độ",
    Metric.UV_INDEX: "Chỉ số UV",
    Metric.HUMIDITY: "Độ ẩm",
}

_WEEKDAYS_EN = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS_EN = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def round_half_up(value: float) -> int:
    """Round .5 toward +infinity, the way browser UIs round display values."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Render a provider number as-is, without a trailing '.0' on integers."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def chart_series(payload: WeatherPayload | None, metric: Metric) -> list[float]:
    """One value per forecast day, chronological, unrounded."""
    if payload is None:
        return []
    if metric == Metric.TEMPERATURE:
        return [d.avgtemp_c for d in payload.forecast_days]
    if metric == Metric.UV_INDEX:
        return [d.uv for d in payload.forecast_days]
    return [d.avghumidity for d in payload.forecast_days]


def chart_labels(payload: WeatherPayload | None) -> list[str]:
    if payload is None:
        return []
    return [f"Ngày {i + 1}" for i in range(len(payload.forecast_days))]


def metric_title(metric: Metric) -> str:
    return _METRIC_TITLES[Metric(metric)]


def headline_value(payload: WeatherPayload | None, metric: Metric) -> str:
    """Headline for the chart, taken from the first forecast day."""
    if payload is None:
        return ""
    day = payload.forecast_days[0]
    if metric == Metric.TEMPERATURE:
        return f"{round_half_up(day.avgtemp_c)}°C"
    if metric == Metric.UV_INDEX:
        return format_number(day.uv)
    return f"{format_number(day.avghumidity)}%"


def weather_icon(condition_text: str) -> str:
    text = condition_text.lower()
    for keywords, icon in _ICON_RULES:
        if any(k in text for k in keywords):
            return icon
    return ICON_CLOUD


def forecast_date_label(date_str: str, index: int) -> str:
    """'Hôm nay' for the first card, otherwise vi-VN short date ('20 thg 10')."""
    if index == 0:
        return LABEL_TODAY
    d = date.fromisoformat(date_str)
    return f"{d.day} thg {d.month}"


def local_datetime_label(payload: WeatherPayload | None) -> str:
    """Location-local clock, e.g. '3:05 PM, Mon, Oct 19, 2026'."""
    if payload is None or not payload.localtime:
        return LABEL_LOADING
    try:
        dt = datetime.strptime(payload.localtime, "%Y-%m-%d %H:%M")
    except ValueError:
        return payload.localtime
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return (
        f"{hour}:{dt.minute:02d} {meridiem}, {_WEEKDAYS_EN[dt.weekday()]}, "
        f"{_MONTHS_EN[dt.month - 1]} {dt.day}, {dt.year}"
    )


def current_temperature(payload: WeatherPayload) -> str:
    return f"{round_half_up(payload.current.temp_c)}°C"


def wind_speed(payload: WeatherPayload) -> str:
    return f"{round_half_up(payload.current.wind_kph)} km/h"


def humidity_percent(value: float) -> str:
    return f"{format_number(value)}%"
