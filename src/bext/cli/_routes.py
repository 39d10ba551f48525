"""``bext routes`` — list discovered routes.

Walks a routes directory exactly as the server would and prints each
route with its methods, path, and source file.
"""

import argparse
import sys
from pathlib import Path

from bext.config import RouterConfig
from bext.errors import BextError
from bext.routing.router import create_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / FILE table for ``args.directory``."""
    directory = Path(args.directory).resolve()
    try:
        router = create_router(directory, RouterConfig(prefix=args.prefix))
    except BextError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        try:
            file_str = str(Path(route.file).relative_to(directory))
        except ValueError:
            file_str = route.file
        rows.append((methods_str, route.path, file_str))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "FILE"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, file_str in rows:
        print(fmt.format(methods_str, path, file_str))
