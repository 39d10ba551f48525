"""Bext — file-system routing for Python HTTP APIs.

Drop handler modules into a directory and each one becomes a route::

    app/api/index.py        -> /
    app/api/hello.py        -> /hello
    app/api/users/[id].py   -> /users/[id]

A route module exports functions named after HTTP methods::

    def GET(ctx):
        return {"id": ctx.params["id"]}

Serve the tree with the ASGI app::

    from bext import App

    App("app/api").run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BextError",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "NotFound",
    "Request",
    "Response",
    "RouteError",
    "RouteLoadError",
    "RouteValidationError",
    "Router",
    "RouterConfig",
    "ServerError",
    "create_router",
    "get_request",
]

_ERRORS = frozenset(
    {
        "BextError",
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "RouteError",
        "RouteLoadError",
        "RouteValidationError",
        "ServerError",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bext`` fast while providing a clean top-level API.
    """
    if name == "App":
        from bext.app import App

        return App

    if name in ("AppConfig", "RouterConfig"):
        import bext.config

        return getattr(bext.config, name)

    if name in ("Context", "get_request"):
        import bext.context

        return getattr(bext.context, name)

    if name == "Request":
        from bext.http.request import Request

        return Request

    if name == "Response":
        from bext.http.response import Response

        return Response

    if name in ("Router", "create_router"):
        import bext.routing.router

        return getattr(bext.routing.router, name)

    if name in _ERRORS:
        import bext.errors

        return getattr(bext.errors, name)

    msg = f"module 'bext' has no attribute {name!r}"
    raise AttributeError(msg)
