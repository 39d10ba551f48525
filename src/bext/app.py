"""The ASGI application — routes directory in, HTTP responses out.

::

    from bext import App, AppConfig

    app = App("app/api", config=AppConfig(prefix="/api"))
    app.run()
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from bext._internal.asgi import Receive, Scope, Send
from bext.config import AppConfig
from bext.routing.route import Route
from bext.routing.router import Router, create_router
from bext.server.handler import handle_request

logger = logging.getLogger("bext.server")


class App:
    """ASGI 3.0 application serving a file-system route tree.

    The router is built once, on lifespan startup or on the first
    request, whichever comes first. A broken route tree therefore fails
    startup instead of individual requests.

    The freeze uses a Lock + double-check so exactly one thread walks
    the routes directory even when workers race on the first request.
    """

    __slots__ = ("_freeze_lock", "_router", "config", "routes_dir")

    def __init__(self, routes_dir: str | Path | None = None, *, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.routes_dir = Path(routes_dir if routes_dir is not None else self.config.routes_dir)
        self._router: Router | None = None
        self._freeze_lock = threading.Lock()

    @property
    def router(self) -> Router:
        """The app's router, building it if needed."""
        return self._ensure_frozen()

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._ensure_frozen().routes

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Discover routes, then serve with uvicorn until interrupted.

        Route registration errors propagate before the server binds.
        """
        router = self._ensure_frozen()

        import uvicorn

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info(
            "bext server starting on http://%s:%d (%d routes registered)",
            _host,
            _port,
            len(router.routes),
        )
        uvicorn.run(self, host=_host, port=_port, log_level=self.config.log_level)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        router = self._ensure_frozen()
        await handle_request(scope, receive, send, router=router, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, building the router at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> Router:
        """Thread-safe router construction with double-check locking."""
        router = self._router
        if router is not None:
            return router
        with self._freeze_lock:
            if self._router is None:
                self._router = create_router(self.routes_dir, self.config.router_config())
            return self._router
