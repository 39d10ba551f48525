"""Tests for bext.context — handler context and response helpers."""

import pytest

from bext.context import Context, get_request, request_var
from bext.http.request import Request
from bext.http.response import Response


def _request(cookie: str = "") -> Request:
    headers = [(b"cookie", cookie.encode("latin-1"))] if cookie else []
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/users/1",
        "headers": headers,
        "query_string": b"",
    }

    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request.from_asgi(scope, receive)


class TestViews:
    def test_params_read_only(self) -> None:
        ctx = Context(_request(), params={"id": "1"})
        assert ctx.params["id"] == "1"
        with pytest.raises(TypeError):
            ctx.params["id"] = "2"  # type: ignore[index]

    def test_env_and_plugins(self) -> None:
        ctx = Context(_request(), env={"DEBUG": "1"}, plugins={"db": object})
        assert ctx.env["DEBUG"] == "1"
        assert ctx.plugins["db"] is object

    def test_defaults_empty(self) -> None:
        ctx = Context(_request())
        assert dict(ctx.params) == {}
        assert dict(ctx.env) == {}


class TestResponseHelpers:
    def test_json(self) -> None:
        response = Context(_request()).json({"ok": True}, status=201)
        assert response.status == 201
        assert response.content_type == "application/json"
        assert response.json_body() == {"ok": True}

    def test_text(self) -> None:
        response = Context(_request()).text("hi")
        assert response.text == "hi"
        assert response.content_type.startswith("text/plain")

    def test_response_headers_merged(self) -> None:
        ctx = Context(_request())
        ctx.response_headers["X-Trace"] = "abc"
        response = ctx.json([], headers={"X-Extra": "1"})
        assert response.header("x-trace") == "abc"
        assert response.header("X-Extra") == "1"

    def test_content_type_header_overrides(self) -> None:
        response = Context(_request()).text("<p>", headers={"Content-Type": "text/html"})
        assert response.content_type == "text/html"
        assert response.header("Content-Type") is None

    def test_send_none(self) -> None:
        assert Context(_request()).send(None).status == 204

    def test_send_response_passthrough(self) -> None:
        original = Response("x", status=418)
        assert Context(_request()).send(original) is original

    def test_send_dict_and_str(self) -> None:
        ctx = Context(_request())
        assert ctx.send({"a": 1}).content_type == "application/json"
        assert ctx.send(42).text == "42"


class TestCookies:
    def test_reads_request_cookie(self) -> None:
        ctx = Context(_request(cookie="session=abc; theme=dark"))
        assert ctx.get_cookie("theme") == "dark"
        assert ctx.get_cookie("missing") is None

    def test_pending_cookie_wins(self) -> None:
        ctx = Context(_request(cookie="theme=dark"))
        ctx.set_cookie("theme", "light")
        assert ctx.get_cookie("theme") == "light"

    def test_deleted_cookie_reads_none(self) -> None:
        ctx = Context(_request(cookie="theme=dark"))
        ctx.delete_cookie("theme")
        assert ctx.get_cookie("theme") is None
        (cookie,) = ctx.cookies
        assert cookie.max_age == 0
        assert "Expires=Thu, 01 Jan 1970" in cookie.to_header_value()

    def test_secure_default_follows_context(self) -> None:
        ctx = Context(_request(), secure_cookies=True)
        ctx.set_cookie("a", "1")
        ctx.set_cookie("b", "2", secure=False)
        a, b = ctx.cookies
        assert a.secure is True
        assert b.secure is False

    def test_invalid_name(self) -> None:
        ctx = Context(_request())
        with pytest.raises(TypeError):
            ctx.set_cookie("", "x")


class TestRequestVar:
    def test_outside_request(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    def test_inside_request(self) -> None:
        request = _request()
        token = request_var.set(request)
        try:
            assert get_request() is request
        finally:
            request_var.reset(token)
