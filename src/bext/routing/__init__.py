"""Routing — file-system route discovery and first-match dispatch.

Routes are discovered once at startup from a directory tree and kept in
an immutable, per-method table. Recent matches are cached.
"""

from bext.routing.cache import RouteCache
from bext.routing.matcher import Dispatcher, HandlerLoader, RouteMatcher
from bext.routing.parser import compile_route_pattern, is_route_file, parse_file_name
from bext.routing.registry import register_route_file
from bext.routing.route import HTTP_METHODS, Route, RouteMatch
from bext.routing.router import Router, create_router
from bext.routing.validator import validate_route, validate_route_safe
from bext.routing.walker import walk

__all__ = [
    "HTTP_METHODS",
    "Dispatcher",
    "HandlerLoader",
    "Route",
    "RouteCache",
    "RouteMatch",
    "RouteMatcher",
    "Router",
    "compile_route_pattern",
    "create_router",
    "is_route_file",
    "parse_file_name",
    "register_route_file",
    "validate_route",
    "validate_route_safe",
    "walk",
]
