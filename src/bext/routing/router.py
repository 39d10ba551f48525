"""Router facade — one-time route discovery plus request matching.

::

    router = create_router("app/api", RouterConfig(prefix="/api"))
    match = router.match(request)
    if match is not None:
        dispatcher = await match.load()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

from bext.config import RouterConfig
from bext.routing.matcher import RouteMatcher
from bext.routing.route import Route, RouteMatch
from bext.routing.walker import walk

logger = logging.getLogger("bext.router")


class RequestLike(Protocol):
    """Anything with an HTTP method and a URL.

    A request that also carries a decoded ``path`` (like
    :class:`bext.http.request.Request`) is matched on that path as is;
    ``url`` is only parsed when no ``path`` is available.
    """

    method: str
    url: str


class Router:
    """Owns a :class:`RouteMatcher` and discovers its routes once.

    ``initialized`` starts False and flips to True after the first
    successful walk. Later ``initialize()`` calls are no-ops; each
    router instance tracks this on its own.
    """

    __slots__ = ("base_dir", "config", "initialized", "matcher")

    def __init__(self, base_dir: str | Path, config: RouterConfig | None = None) -> None:
        self.base_dir = Path(base_dir).resolve()
        self.config = config or RouterConfig()
        self.matcher = RouteMatcher(
            cache=self.config.cache,
            cache_ttl=self.config.cache_ttl,
            prefix=self.config.prefix,
        )
        self.initialized = False

    def initialize(self) -> None:
        """Walk ``base_dir`` and register its routes, at most once."""
        if self.initialized:
            return

        try:
            walk(self.base_dir, "", self.matcher, debug=self.config.debug)
        except Exception:
            logger.debug("Route discovery aborted for %s", self.base_dir)
            raise

        self.initialized = True
        logger.debug("%d routes registered from %s", len(self.matcher.routes), self.base_dir)

    def match(self, request: RequestLike) -> RouteMatch | None:
        """Match a request by its method and path."""
        pathname = getattr(request, "path", None)
        if pathname is None:
            pathname = urlsplit(request.url).path or "/"
        return self.matcher.match(request.method, pathname)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of all registered routes, in registration order."""
        return self.matcher.routes


def create_router(base_dir: str | Path, config: RouterConfig | None = None) -> Router:
    """Build a router and discover the routes under *base_dir*.

    Relative paths resolve against the working directory. Registration
    errors propagate to the caller.
    """
    router = Router(base_dir, config)
    router.initialize()
    return router
