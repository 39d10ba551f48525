"""ASGI request pipeline — match, load, invoke, serialize.

The only component that touches raw ASGI scope dicts. A request that
fails at any stage becomes an error response; nothing raised here
reaches the server.
"""

import logging
import secrets
import time
from typing import Any

from bext._internal.asgi import Receive, Scope, Send
from bext.config import AppConfig
from bext.context import Context, request_var
from bext.errors import HTTPError, NotFound, RouteError
from bext.http.request import Request
from bext.http.response import Response
from bext.routing.router import Router
from bext.server.sender import send_response

logger = logging.getLogger("bext.server")

# Values serialized as JSON when a handler returns them directly
_JSON_TYPES = (dict, list, tuple, int, float, bool)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    request_id = secrets.token_hex(6)
    started = time.perf_counter()
    logger.debug("[%s] %s %s", request_id, request.method, request.url)

    token = request_var.set(request)
    try:
        response = await dispatch(request, router=router, config=config)
    except HTTPError as exc:
        response = http_error_response(exc, request)
    except Exception as exc:
        response = internal_error_response(exc, request, debug=config.debug)
    finally:
        request_var.reset(token)

    response = response.with_header("X-Request-ID", request_id)
    elapsed_ms = round((time.perf_counter() - started) * 1000)
    logger.info(
        "[%s] %s %s %d %dms",
        request_id,
        request.method,
        request.url,
        response.status,
        elapsed_ms,
    )
    await send_response(response, send)


async def dispatch(request: Request, *, router: Router, config: AppConfig) -> Response:
    """Match *request*, load its handler and turn the result into a Response.

    Raises:
        NotFound: If no route matches.
        HTTPError: 400 if the router rejects the method or path.
    """
    try:
        match = router.match(request)
    except RouteError as exc:
        raise HTTPError(status=400, detail=str(exc)) from exc

    if match is None:
        raise NotFound(f"No route matches {request.method} {request.path!r}")

    ctx = Context(
        request,
        params=match.params,
        env=config.env,
        plugins=config.plugins,
        secure_cookies=not config.debug,
    )

    dispatcher = await match.load()
    result = await dispatcher(ctx)
    return negotiate(result, ctx)


def negotiate(result: Any, ctx: Context) -> Response:
    """Convert a handler's return value into a Response.

    - ``Response`` → returned as is
    - ``None`` → 204 No Content
    - dict, list, tuple, numbers, bools → JSON
    - anything else → ``text/plain`` via ``str()``

    Cookies queued on the context are attached in every case; the
    context's response headers only to values serialized here.
    """
    if isinstance(result, Response):
        response = result
    elif result is None:
        response = ctx.send(None)
    elif isinstance(result, _JSON_TYPES):
        response = ctx.json(result)
    else:
        response = ctx.text(str(result))
    return response.with_cookies(ctx.cookies)


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text response with its status."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors.

    The exception message is only exposed in debug mode.
    """
    logger.exception("500 %s %s", request.method, request.path)
    body = (str(exc) or type(exc).__name__) if debug else "Internal Server Error"
    return Response(body=body, status=500)
