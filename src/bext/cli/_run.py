"""``bext run`` — serve a routes directory with uvicorn."""

import argparse
import dataclasses
import logging
import sys

from bext.app import App
from bext.config import AppConfig
from bext.errors import BextError


def build_config(args: argparse.Namespace) -> AppConfig:
    """AppConfig from defaults, overridden by whichever flags were given."""
    overrides: dict[str, object] = {"routes_dir": args.directory}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.prefix is not None:
        overrides["prefix"] = args.prefix
    if args.no_cache:
        overrides["cache"] = False
    if args.cache_ttl is not None:
        overrides["cache_ttl"] = args.cache_ttl
    if args.debug:
        overrides["debug"] = True
        overrides["log_level"] = "debug"
    return dataclasses.replace(AppConfig(), **overrides)


def run_server(args: argparse.Namespace) -> None:
    """Configure logging, build the app and serve until interrupted."""
    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = App(config=config)
    try:
        app.run()
    except BextError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
