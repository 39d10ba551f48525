"""Bext CLI — list discovered routes and serve a routes directory.

Entry point registered as ``bext`` in ``pyproject.toml``::

    [project.scripts]
    bext = "bext.cli:main"
"""

import argparse
import sys

from bext.config import DEFAULT_CACHE_TTL


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``bext`` command."""
    parser = argparse.ArgumentParser(
        prog="bext",
        description="Bext — file-system routing for Python HTTP APIs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- bext routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List discovered routes")
    routes_parser.add_argument("directory", help="Routes directory (e.g. app/api)")
    routes_parser.add_argument("--prefix", default="", help="Path prefix to mount routes under")

    # -- bext run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a routes directory")
    run_parser.add_argument("directory", help="Routes directory (e.g. app/api)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--prefix", default=None, help="Path prefix to mount routes under")
    run_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the route match cache",
    )
    run_parser.add_argument(
        "--cache-ttl",
        type=int,
        default=None,
        help=f"Match cache lifetime in milliseconds (default {DEFAULT_CACHE_TTL})",
    )
    run_parser.add_argument("--debug", action="store_true", help="Expose error details in responses")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from bext.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from bext.cli._run import run_server

        run_server(args)
