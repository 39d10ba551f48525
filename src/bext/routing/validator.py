"""Route record validation.

Checks the shape of a route before it reaches the matcher: known HTTP
methods, an absolute path without traversal, and a readable ``.py``
source file.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from bext.errors import RouteValidationError
from bext.routing.route import HTTP_METHODS


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of :func:`validate_route_safe`."""

    valid: bool
    error: RouteValidationError | None = None


def validate_route(methods: Iterable[str], path: str, file: str) -> None:
    """Validate a route's methods, path and source file.

    Raises:
        RouteValidationError: On the first failed check, with ``code``
            and ``field`` set.
    """
    _validate_methods(methods)
    _validate_path(path)
    _validate_file(file)


def validate_route_safe(methods: Iterable[str], path: str, file: str) -> ValidationResult:
    """Like :func:`validate_route` but returns the outcome instead of raising."""
    try:
        validate_route(methods, path, file)
    except RouteValidationError as exc:
        return ValidationResult(valid=False, error=exc)
    return ValidationResult(valid=True)


def _validate_methods(methods: Iterable[str]) -> None:
    if isinstance(methods, str):
        methods = (methods,)
    methods = tuple(methods)
    if not methods:
        msg = "Route methods must be a non-empty collection"
        raise RouteValidationError(msg, "INVALID_METHODS", "methods")

    for method in methods:
        if method not in HTTP_METHODS:
            msg = f"Invalid HTTP method: {method}. Must be one of: {', '.join(HTTP_METHODS)}"
            raise RouteValidationError(msg, "INVALID_METHOD", "methods")


def _validate_path(path: str) -> None:
    if not isinstance(path, str) or not path.strip():
        raise RouteValidationError("Route path must be a non-empty string", "INVALID_PATH", "path")

    if not path.startswith("/"):
        msg = f"Route path must start with '/': {path}"
        raise RouteValidationError(msg, "PATH_MUST_START_WITH_SLASH", "path")

    if ".." in path.split("/") or "//" in path:
        msg = f"Invalid path: {path}. Path traversal is not allowed"
        raise RouteValidationError(msg, "INVALID_PATH_TRAVERSAL", "path")


def _validate_file(file: str) -> None:
    if not isinstance(file, str) or not file.strip():
        raise RouteValidationError("Route file must be a non-empty string", "INVALID_FILE", "file")

    if Path(file).suffix.lower() != ".py":
        msg = f"Route file must be a Python source file: {file}"
        raise RouteValidationError(msg, "INVALID_FILE_EXTENSION", "file")

    if not os.access(file, os.R_OK):
        msg = f"Route file not found or not readable: {file}"
        raise RouteValidationError(msg, "FILE_NOT_FOUND", "file")
