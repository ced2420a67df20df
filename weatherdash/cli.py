"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging
from datetime import date

from pydantic import ValidationError

from weatherdash.app.controller import DateNotInForecast, build_controller
from weatherdash.config.defaults import DEFAULT_CONFIG_PATH
from weatherdash.config.loader import get_config_value, load_config, set_config_value
from weatherdash.config.schema import DashboardConfig
from weatherdash.models.common import Metric
from weatherdash.reporting.formatters import format_view_json, format_view_text

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="Single-page weather dashboard",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Fetch and print a forecast")
    fc_p.add_argument("place", nargs="?", default="", help="City or place query")
    fc_p.add_argument("--date", type=date.fromisoformat, help="Day (YYYY-MM-DD)")
    fc_p.add_argument(
        "--metric",
        choices=[m.value for m in Metric],
        help="Hourly series to show",
    )
    fc_p.add_argument("--days", type=int, help="Forecast days to request")
    fc_p.add_argument("--json", action="store_true", help="JSON output")

    # serve
    serve_p = sub.add_parser("serve", help="Run the dashboard web server")
    serve_p.add_argument("--host", help="Bind host")
    serve_p.add_argument("--port", type=int, help="Bind port")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Validate a config override")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Invalid config {args.config}:\n{e}")
        return 1

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_forecast(config: DashboardConfig, args) -> int:
    if args.days is not None:
        try:
            config = set_config_value(config, "ui.forecast_days", args.days)
        except ValidationError as e:
            print(f"Error: {e}")
            return 1
    controller = build_controller(config)
    asyncio.run(controller.load(args.place))

    if args.date is not None:
        try:
            controller.select_date(args.date)
        except DateNotInForecast:
            print(f"Error: no forecast for {args.date.isoformat()}")
            return 1
    if args.metric is not None:
        controller.select_metric(args.metric)

    view = controller.view()
    print(format_view_json(view) if args.json else format_view_text(view))
    return 0 if controller.forecast is not None else 1


def _cmd_serve(config: DashboardConfig, args) -> int:
    import uvicorn

    from weatherdash.dashboard import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    if not config.provider.api_key:
        logger.warning("No WeatherAPI key configured; set WEATHERAPI_KEY")
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_config(config: DashboardConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
