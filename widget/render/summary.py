"""Plain-text rendering of a widget snapshot for the terminal."""

import json

from widget.models.state import ViewState
from widget.render import formatters as fmt


def format_summary_text(s: ViewState, forecast_cards: int = 4) -> str:
    """Text version of the widget: clock, current conditions, chart, strip."""
    lines = [f"=== {s.committed_city} | {fmt.local_datetime_label(s.weather)} ==="]
    if s.error_message:
        lines.append(f"! {s.error_message}")
    payload = s.weather
    if payload is None:
        return "\n".join(lines)

    lines.append(
        f"{fmt.weather_icon(payload.current.condition_text)} "
        f"{fmt.current_temperature(payload)} {payload.current.condition_text}"
    )
    lines.append(
        f"Độ ẩm: {fmt.humidity_percent(payload.current.humidity)} | "
        f"Tốc độ gió: {fmt.wind_speed(payload)}"
    )
    series = fmt.chart_series(payload, s.selected_metric)
    lines.append(
        f"{fmt.metric_title(s.selected_metric)}: "
        f"{fmt.headline_value(payload, s.selected_metric)} "
        f"[{', '.join(fmt.format_number(v) for v in series)}]"
    )
    for index, day in enumerate(payload.forecast_days[:forecast_cards]):
        lines.append(
            f"  {fmt.forecast_date_label(day.date, index):<10} "
            f"{fmt.weather_icon(day.condition_text)} "
            f"Độ ẩm {fmt.humidity_percent(day.avghumidity)}"
        )
    return "\n".join(lines)


def format_summary_json(s: ViewState) -> str:
    """JSON summary for programmatic consumption."""
    payload = s.weather
    data = {
        "city": s.committed_city,
        "error": s.error_message or None,
        "metric": s.selected_metric.value,
        "local_time": fmt.local_datetime_label(payload),
        "headline": fmt.headline_value(payload, s.selected_metric),
        "series": fmt.chart_series(payload, s.selected_metric),
        "labels": fmt.chart_labels(payload),
        "forecast": [
            {
                "date": d.date,
                "label": fmt.forecast_date_label(d.date, i),
                "icon": fmt.weather_icon(d.condition_text),
                "avghumidity": d.avghumidity,
            }
            for i, d in enumerate(payload.forecast_days)
        ] if payload else [],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
