"""Per-request handler context.

Every route handler receives a :class:`Context`::

    def GET(ctx):
        return ctx.json({"id": ctx.params["id"]})

The current request is also published through ``request_var`` for code
that has no context at hand. It is set by the ASGI app before dispatch
and reset afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any

from bext.http.cookies import SetCookie
from bext.http.request import Request
from bext.http.response import TEXT_CONTENT_TYPE, Response

request_var: ContextVar[Request] = ContextVar("bext_request")
"""The current request. Set by the ASGI app before dispatch."""

_EPOCH = "Thu, 01 Jan 1970 00:00:00 GMT"


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request.
    """
    return request_var.get()


def _check_cookie_name(name: object) -> None:
    if not name or not isinstance(name, str):
        raise TypeError("Cookie name must be a non-empty string")


class Context:
    """Request, route parameters and response helpers for one handler call.

    ``params``, ``env`` and ``plugins`` are read-only views.
    ``response_headers`` is merged into responses built by the helpers
    and into values the app serializes on the handler's behalf.
    Cookies set here are attached to whatever response the handler
    returns.
    """

    __slots__ = (
        "_cookies",
        "_secure_cookies",
        "env",
        "params",
        "plugins",
        "request",
        "response_headers",
    )

    def __init__(
        self,
        request: Request,
        *,
        params: Mapping[str, str] | None = None,
        env: Mapping[str, Any] | None = None,
        plugins: Mapping[str, Any] | None = None,
        secure_cookies: bool = False,
    ) -> None:
        self.request = request
        self.params: Mapping[str, str] = MappingProxyType(dict(params or {}))
        self.env: Mapping[str, Any] = MappingProxyType(dict(env or {}))
        self.plugins: Mapping[str, Any] = MappingProxyType(dict(plugins or {}))
        self.response_headers: dict[str, str] = {}
        self._cookies: list[SetCookie] = []
        self._secure_cookies = secure_cookies

    # -- Response helpers --

    def json(
        self,
        data: Any,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """JSON response carrying the context's response headers."""
        return self._build(Response.json(data, status=status), headers)

    def text(
        self,
        data: str,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Plain-text response carrying the context's response headers."""
        response = Response(body=data, status=status, content_type=TEXT_CONTENT_TYPE)
        return self._build(response, headers)

    def send(
        self,
        data: Any,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Pick a response type from *data*.

        ``None`` is 204 No Content, a ``Response`` is returned as is,
        dicts and lists become JSON, everything else becomes text.
        """
        if data is None:
            return self._build(Response(status=204), headers)
        if isinstance(data, Response):
            return data
        if isinstance(data, (dict, list, tuple)):
            return self.json(data, status, headers)
        return self.text(str(data), status, headers)

    def _build(self, response: Response, headers: Mapping[str, str] | None) -> Response:
        merged = {**self.response_headers, **(headers or {})}
        # content_type is carried on the Response itself
        content_type = merged.pop("Content-Type", None) or merged.pop("content-type", None)
        if content_type:
            response = response.with_content_type(content_type)
        return response.with_headers(merged)

    # -- Cookies --

    def get_cookie(self, name: str) -> str | None:
        """Value of cookie *name*: set during this request, else sent by the client."""
        _check_cookie_name(name)
        for cookie in reversed(self._cookies):
            if cookie.name == name:
                return cookie.value or None
        return self.request.cookies.get(name)

    def set_cookie(
        self,
        name: str,
        value: str,
        *,
        max_age: int | None = None,
        path: str = "/",
        domain: str | None = None,
        secure: bool | None = None,
        httponly: bool = True,
        samesite: str = "lax",
    ) -> None:
        """Queue a cookie. ``secure`` defaults to the app's production setting."""
        _check_cookie_name(name)
        self._cookies.append(
            SetCookie(
                name=name,
                value=value,
                max_age=max_age,
                path=path,
                domain=domain,
                secure=self._secure_cookies if secure is None else secure,
                httponly=httponly,
                samesite=samesite,
            )
        )

    def delete_cookie(self, name: str, path: str = "/") -> None:
        """Expire cookie *name*; *path* must match the one it was set with."""
        _check_cookie_name(name)
        self._cookies.append(
            SetCookie(
                name=name,
                value="",
                max_age=0,
                expires=_EPOCH,
                path=path,
                secure=self._secure_cookies,
                httponly=True,
            )
        )

    @property
    def cookies(self) -> tuple[SetCookie, ...]:
        """Set-Cookie directives queued during this request."""
        return tuple(self._cookies)
