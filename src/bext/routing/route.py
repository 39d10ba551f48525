"""Route, RouteMatch and Dirent frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bext.routing.matcher import HandlerLoader

# Recognised handler function names, in introspection order
HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

# Module attribute used when no export matches the inbound method
DEFAULT_HANDLER = "handler"


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route definition.

    Created once by the registry at startup and never mutated.
    ``keys`` lists the parameter names in the order their capturing
    groups appear in ``pattern``.
    """

    methods: frozenset[str]
    path: str
    file: str
    pattern: re.Pattern[str]
    keys: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``load`` defers importing the handler module until the match is
    actually used: ``dispatcher = await match.load()``.
    """

    params: Mapping[str, str]
    load: HandlerLoader
    meta: Any = None

    @property
    def route(self) -> Route:
        return self.load.route


@dataclass(frozen=True, slots=True)
class Dirent:
    """A directory entry seen during the route walk."""

    name: str
    path: str
    is_file: bool
    is_directory: bool
    is_symbolic_link: bool = False
