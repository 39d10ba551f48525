"""Method-aware route matching with lazy handler loading.

Routes are kept per HTTP method in registration order. Matching scans
that list and the first pattern that matches wins, so the walk order
decides which of two overlapping routes serves a path.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType, ModuleType
from typing import Any

import anyio.to_thread

from bext._internal.invoke import invoke
from bext.config import DEFAULT_CACHE_TTL
from bext.errors import RouteError, RouteLoadError
from bext.routing.cache import RouteCache
from bext.routing.parser import load_module
from bext.routing.route import DEFAULT_HANDLER, Route, RouteMatch


@dataclass(frozen=True, slots=True)
class Dispatcher:
    """Calls the module export that handles the inbound method.

    Resolution order: the function named after the request method,
    then the module's default ``handler``, then ``INVALID_HANDLER``.
    """

    route: Route
    module: ModuleType

    def resolve(self, method: str) -> Callable[..., Any]:
        func = getattr(self.module, method.upper(), None)
        if callable(func):
            return func

        default = getattr(self.module, DEFAULT_HANDLER, None)
        if callable(default):
            return default

        msg = (
            f"Route handler must export either a '{method}' function "
            f"or a default '{DEFAULT_HANDLER}' function: {self.route.file}"
        )
        raise RouteError(msg, "INVALID_HANDLER")

    async def __call__(self, ctx: Any) -> Any:
        handler = self.resolve(ctx.request.method)
        return await invoke(handler, ctx)


@dataclass(frozen=True, slots=True)
class HandlerLoader:
    """Deferred accessor for a route's handler module.

    Matching only produces a loader; the module import is paid when the
    loader is awaited, in a worker thread.
    """

    route: Route

    async def __call__(self) -> Dispatcher:
        try:
            module = await anyio.to_thread.run_sync(load_module, self.route.file)
        except RouteLoadError as exc:
            msg = f"Failed to load route handler: {self.route.file}. Reason: {exc}"
            raise RouteError(msg, "HANDLER_LOAD_ERROR") from exc
        return Dispatcher(route=self.route, module=module)


class RouteMatcher:
    """Owns the route table and the match cache.

    Usage::

        matcher = RouteMatcher(prefix="/api")
        matcher.add(route)
        match = matcher.match("GET", "/api/users/42")
    """

    __slots__ = ("_by_method", "_routes", "cache", "prefix", "scan_count")

    def __init__(
        self,
        *,
        cache: bool = True,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        prefix: str = "",
    ) -> None:
        self._by_method: dict[str, list[Route]] = {}
        self._routes: list[Route] = []
        self.cache: RouteCache | None = RouteCache(ttl=cache_ttl) if cache else None
        self.prefix = prefix or ""
        # Number of route-list scans; cache hits do not scan
        self.scan_count = 0

    def add(self, route: Route) -> None:
        """Index *route* under every method it declares.

        Raises:
            RouteError: If *route* is not a complete ``Route``.
        """
        if not isinstance(route, Route):
            msg = f"Route must be a Route instance, got {type(route).__name__}"
            raise RouteError(msg, "INVALID_ROUTE")

        if not route.methods or not route.path or not route.file or route.pattern is None:
            raise RouteError("Route is missing required properties", "INVALID_ROUTE")

        for method in route.methods:
            self._by_method.setdefault(method, []).append(route)
        self._routes.append(route)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Every registered route once, in registration order."""
        return tuple(self._routes)

    def match(self, method: str, pathname: str) -> RouteMatch | None:
        """Resolve a method and path to a match, or ``None``.

        Raises:
            RouteError: If *method* or *pathname* is not a non-empty string.
        """
        if not method or not isinstance(method, str):
            raise RouteError("Method must be a non-empty string", "INVALID_METHOD")
        if not pathname or not isinstance(pathname, str):
            raise RouteError("Pathname must be a non-empty string", "INVALID_PATH")

        normalized_method = method.upper()

        match_path = pathname
        if self.prefix:
            if not pathname.startswith(self.prefix):
                return None
            match_path = pathname[len(self.prefix) :]
            if match_path and not match_path.startswith("/"):
                match_path = "/" + match_path

        cache_key = f"{normalized_method}:{match_path}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        route_match = self._find(normalized_method, match_path)
        if route_match is None:
            return None

        if self.cache is not None:
            self.cache.set(cache_key, route_match)
        return route_match

    def _find(self, method: str, path: str) -> RouteMatch | None:
        """First route for *method* whose pattern matches *path*."""
        self.scan_count += 1
        for route in self._by_method.get(method, ()):
            found = route.pattern.match(path)
            if found is None:
                continue
            return RouteMatch(
                params=_extract_params(route.keys, found),
                load=HandlerLoader(route),
            )
        return None


def _extract_params(keys: tuple[str, ...], found: re.Match[str]) -> MappingProxyType[str, str]:
    """Map captured groups onto *keys*, skipping groups that did not take part."""
    params: dict[str, str] = {}
    for key, value in zip(keys, found.groups(), strict=True):
        if value is not None:
            params[key] = value
    return MappingProxyType(params)
