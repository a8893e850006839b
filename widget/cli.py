"""CLI entry point for the weather widget."""

import argparse
import asyncio
import logging

from widget.config.defaults import DEFAULT_CONFIG
from widget.config.loader import get_config_value, load_config, save_config_value
from widget.config.schema import WidgetConfig
from widget.ingest.payload_parser import parse_suggestions
from widget.ingest.weatherapi_client import (
    ProviderError,
    ProviderTransportError,
    WeatherApiClient,
)
from widget.models.common import Metric
from widget.render.summary import format_summary_json, format_summary_text
from widget.session import WidgetSession


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="widget",
        description="Weather dashboard widget",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Serve the widget over HTTP")
    serve_p.add_argument("--host", help="Bind address")
    serve_p.add_argument("--port", type=int, help="Bind port")

    # show
    show_p = sub.add_parser("show", help="Fetch and print the widget for a city")
    show_p.add_argument("city", help="City name")
    show_p.add_argument(
        "--metric",
        choices=[m.value for m in Metric],
        default=Metric.TEMPERATURE.value,
        help="Charted metric",
    )
    show_p.add_argument("--json", action="store_true", help="JSON output")

    # suggest
    suggest_p = sub.add_parser("suggest", help="List place names matching a query")
    suggest_p.add_argument("query", help="Partial place name")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "show":
        return asyncio.run(_cmd_show(config, args))
    elif args.command == "suggest":
        return asyncio.run(_cmd_suggest(config, args))
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: WidgetConfig, args) -> int:
    import uvicorn

    from widget.dashboard import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


async def _cmd_show(config: WidgetConfig, args) -> int:
    city = args.city.strip()
    if not city:
        print("Error: city name is empty")
        return 1
    config = config.model_copy(
        update={"ui": config.ui.model_copy(update={"default_city": city})}
    )
    session = WidgetSession(config)
    try:
        session.metric_selected(args.metric)
        session.mount()
        await session.settle()
        state = session.snapshot()
    finally:
        await session.close()

    if args.json:
        print(format_summary_json(state))
    else:
        print(format_summary_text(state, config.ui.forecast_cards))
    return 0 if state.weather is not None else 1


async def _cmd_suggest(config: WidgetConfig, args) -> int:
    client = WeatherApiClient(config.provider)
    try:
        raw = await client.search(args.query)
    except (ProviderError, ProviderTransportError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        await client.aclose()

    for s in parse_suggestions(raw)[: config.suggestions.max_results]:
        print(s.label)
    return 0


def _cmd_config(config: WidgetConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            new_config = save_config_value(args.config, key, value)
            print(f"Set {key} = {get_config_value(new_config, key)}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
