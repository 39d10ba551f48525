"""Tests for bext.routing.registry — route path construction and registration."""

from pathlib import Path

import pytest

from bext.errors import RouteLoadError
from bext.routing.matcher import RouteMatcher
from bext.routing.registry import build_route_path, normalize_route_path, register_route_file


class TestBuildRoutePath:
    @pytest.mark.parametrize(
        ("prefix", "name", "is_index", "expected"),
        [
            ("", "", True, "/"),
            ("users", "", True, "/users/"),
            ("", "hello", False, "/hello"),
            ("users", "me", False, "/users/me"),
            ("", "[id]", False, "/[id]"),
            ("users", "[id]", False, "/users[id]"),
        ],
    )
    def test_build(self, prefix: str, name: str, is_index: bool, expected: str) -> None:
        assert build_route_path(prefix, name, is_index) == expected


class TestNormalizeRoutePath:
    def test_inserts_slash_before_bracket(self) -> None:
        assert normalize_route_path("/users[id]") == "/users/[id]"

    def test_collapses_repeated_slashes(self) -> None:
        assert normalize_route_path("/a//b///c") == "/a/b/c"

    def test_adds_leading_slash(self) -> None:
        assert normalize_route_path("hello") == "/hello"

    def test_bracket_contents_untouched(self) -> None:
        assert normalize_route_path("/a/[x]") == "/a/[x]"

    def test_index_keeps_trailing_slash(self) -> None:
        assert normalize_route_path("/users/") == "/users/"


class TestRegisterRouteFile:
    def test_registers_exported_methods(self, tmp_path: Path) -> None:
        source = tmp_path / "[id].py"
        source.write_text("def GET(ctx): pass\ndef DELETE(ctx): pass\n")
        matcher = RouteMatcher()

        route = register_route_file(matcher, "[id].py", str(source), "users")

        assert route.path == "/users/[id]"
        assert route.methods == frozenset({"GET", "DELETE"})
        assert route.keys == ("id",)
        assert matcher.routes == (route,)

    def test_index_matches_with_or_without_slash(self, tmp_path: Path) -> None:
        source = tmp_path / "index.py"
        source.write_text("def GET(ctx): pass\n")
        matcher = RouteMatcher()

        route = register_route_file(matcher, "index.py", str(source), "users")

        assert route.path == "/users/"
        assert route.pattern.match("/users")
        assert route.pattern.match("/users/")

    def test_dotted_names_are_not_traversal(self, tmp_path: Path) -> None:
        matcher = RouteMatcher()
        for name in ("[...slug].py", "v1..2.py"):
            source = tmp_path / name
            source.write_text("def GET(ctx): pass\n")
            register_route_file(matcher, name, str(source), "docs")

        catch_all, versioned = matcher.routes
        assert catch_all.path == "/docs/[...slug]"
        assert catch_all.keys == ("...slug",)
        assert versioned.path == "/docs/v1..2"
        assert versioned.pattern.match("/docs/v1..2")

    def test_no_methods_is_rejected(self, tmp_path: Path) -> None:
        source = tmp_path / "empty.py"
        source.write_text("VALUE = 1\n")
        matcher = RouteMatcher()

        with pytest.raises(RouteLoadError):
            register_route_file(matcher, "empty.py", str(source), "")
        assert matcher.routes == ()
