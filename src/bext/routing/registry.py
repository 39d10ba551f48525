"""Route registration — file name plus directory prefix to a Route.

::

    index.py          under ""          -> /
    hello.py          under ""          -> /hello
    index.py          under "users"     -> /users/
    [id].py           under "users"     -> /users/[id]
"""

import logging
import re

from bext.routing.matcher import RouteMatcher
from bext.routing.parser import compile_route_pattern, load_route_methods, parse_file_name
from bext.routing.route import Route
from bext.routing.validator import validate_route

logger = logging.getLogger("bext.router")

# Splits a path into alternating plain text and [bracket] segments
_BRACKET_SPLIT_RE = re.compile(r"(\[[^\]]*\])")

_MISSING_SLASH_RE = re.compile(r"([^/])(\[)")


def build_route_path(prefix: str, name: str, is_index: bool) -> str:
    """Join a directory prefix and a route name into a URL path."""
    if is_index:
        return f"/{prefix}/" if prefix else "/"

    if name.startswith("[") and name.endswith("]"):
        return f"/{prefix}{name}" if prefix else f"/{name}"

    return f"/{prefix}/{name}" if prefix else f"/{name}"


def normalize_route_path(route_path: str) -> str:
    """Tidy a built route path.

    Collapses repeated ``/`` outside bracket segments, ensures a leading
    ``/`` and puts a ``/`` in front of any ``[`` that lacks one.
    """
    pieces = _BRACKET_SPLIT_RE.split(route_path)
    # Even indices are plain text, odd indices are [bracket] segments
    route_path = "".join(
        piece if i % 2 else re.sub(r"/{2,}", "/", piece) for i, piece in enumerate(pieces)
    )

    if not route_path.startswith("/"):
        route_path = f"/{route_path}"

    return _MISSING_SLASH_RE.sub(r"\1/\2", route_path)


def register_route_file(
    matcher: RouteMatcher,
    filename: str,
    full_path: str,
    prefix: str,
    *,
    debug: bool = False,
) -> Route:
    """Build, validate and register the route defined by one file.

    The HTTP methods come from the functions the module exports, not
    from the file name.

    Raises:
        RouteLoadError: If the module fails to import or exports no method.
        RouteValidationError: If the resulting route is malformed.
        RouteError: If the matcher rejects the route.
    """
    parsed = parse_file_name(filename)
    route_path = normalize_route_path(build_route_path(prefix, parsed.name, parsed.is_index))

    try:
        methods = load_route_methods(full_path)
        validate_route(methods, route_path, full_path)

        # Trailing slash is optional at match time; compile without it
        pattern_path = route_path
        if pattern_path != "/" and pattern_path.endswith("/"):
            pattern_path = pattern_path[:-1]

        compiled = compile_route_pattern(pattern_path)
        route = Route(
            methods=frozenset(methods),
            path=route_path,
            file=full_path,
            pattern=compiled.pattern,
            keys=compiled.keys,
        )
        matcher.add(route)
    except Exception:
        logger.error("Failed to register route %s from %s", route_path, full_path)
        raise

    if debug:
        logger.debug("Registered %s %s -> %s", ", ".join(methods), route_path, full_path)
    return route
