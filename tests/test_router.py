"""Tests for bext.routing.router — discovery facade and request matching."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from bext.config import RouterConfig
from bext.errors import RouteError
from bext.routing.router import Router, create_router

USERS_BY_ID = """
def GET(ctx):
    return {"id": ctx.params["id"]}
"""

USERS_ME = """
def GET(ctx):
    return {"id": "me"}
"""

INDEX = """
def GET(ctx):
    return "root"
"""


@dataclass
class FakeRequest:
    method: str
    url: str


@dataclass
class FakePathRequest:
    method: str
    path: str
    url: str


@dataclass
class FakeContext:
    request: FakeRequest
    params: dict


@pytest.fixture
def api(route_tree: Callable[[dict[str, str]], Path]) -> Path:
    return route_tree(
        {
            "index.py": INDEX,
            "users/me.py": USERS_ME,
            "users/[id].py": USERS_BY_ID,
        }
    )


class TestCreateRouter:
    def test_initializes(self, api: Path) -> None:
        router = create_router(api)
        assert router.initialized is True
        assert [r.path for r in router.routes] == ["/", "/users/[id]", "/users/me"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        router = create_router(tmp_path / "nothing")
        assert router.initialized is True
        assert router.routes == ()

    def test_initialize_is_idempotent(self, api: Path) -> None:
        router = create_router(api)
        router.initialize()
        assert len(router.routes) == 3

    def test_each_router_initializes_on_its_own(self, api: Path) -> None:
        first = create_router(api)
        second = Router(api)
        assert second.initialized is False
        second.initialize()
        assert len(second.routes) == len(first.routes)

    def test_registration_error_propagates(self, route_tree: Callable[[dict[str, str]], Path]) -> None:
        root = route_tree({"broken.py": "def GET(ctx):\n    return (\n"})
        router = Router(root)
        with pytest.raises(RouteError):
            router.initialize()
        assert router.initialized is False

    def test_registration_error_logged_once(
        self,
        route_tree: Callable[[dict[str, str]], Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        root = route_tree({"broken.py": "VALUE = 1\n"})
        with caplog.at_level(logging.DEBUG, logger="bext.router"), pytest.raises(RouteError):
            create_router(root)
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].exc_info is None


class TestRouterMatch:
    def test_dynamic_segment(self, api: Path) -> None:
        router = create_router(api)
        found = router.match(FakeRequest("GET", "http://localhost/users/42"))
        assert found is not None
        assert dict(found.params) == {"id": "42"}

    def test_bracket_file_sorts_before_static_sibling(self, api: Path) -> None:
        # "[" orders before letters, so users/[id].py registers first and wins
        router = create_router(api)
        found = router.match(FakeRequest("GET", "/users/me"))
        assert found is not None
        assert found.route.path == "/users/[id]"
        assert dict(found.params) == {"id": "me"}

    def test_query_string_ignored(self, api: Path) -> None:
        router = create_router(api)
        found = router.match(FakeRequest("GET", "/users/42?expand=1"))
        assert found is not None
        assert dict(found.params) == {"id": "42"}

    def test_decoded_path_is_not_reparsed(self, api: Path) -> None:
        router = create_router(api)
        request = FakePathRequest("GET", path="/users/a?b#c", url="/users/a%3Fb%23c")
        found = router.match(request)
        assert found is not None
        assert dict(found.params) == {"id": "a?b#c"}

    def test_root(self, api: Path) -> None:
        router = create_router(api)
        assert router.match(FakeRequest("GET", "http://localhost")) is not None
        assert router.match(FakeRequest("GET", "/")) is not None

    def test_unhandled_method(self, api: Path) -> None:
        router = create_router(api)
        assert router.match(FakeRequest("POST", "/users/42")) is None

    def test_prefix(self, api: Path) -> None:
        router = create_router(api, RouterConfig(prefix="/api"))
        assert router.match(FakeRequest("GET", "/users/42")) is None
        found = router.match(FakeRequest("GET", "/api/users/42"))
        assert found is not None
        assert dict(found.params) == {"id": "42"}

    def test_uncached_router(self, api: Path) -> None:
        router = create_router(api, RouterConfig(cache=False))
        assert router.matcher.cache is None
        assert router.match(FakeRequest("GET", "/users/7")) is not None


class TestLazyLoad:
    async def test_load_and_dispatch(self, api: Path) -> None:
        router = create_router(api)
        request = FakeRequest("GET", "/users/42")
        found = router.match(request)
        assert found is not None

        dispatcher = await found.load()
        result = await dispatcher(FakeContext(request, dict(found.params)))
        assert result == {"id": "42"}

    async def test_dispatch_unsupported_method(self, api: Path) -> None:
        router = create_router(api)
        found = router.match(FakeRequest("GET", "/users/42"))
        assert found is not None

        dispatcher = await found.load()
        with pytest.raises(RouteError) as exc_info:
            await dispatcher(FakeContext(FakeRequest("POST", "/users/42"), {}))
        assert exc_info.value.code == "INVALID_HANDLER"
