"""Bext exception hierarchy.

Shared across the router, the ASGI app and the CLI so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class BextError(Exception):
    """Base for all bext-specific errors."""


class ConfigurationError(BextError):
    """Raised when app or router configuration is invalid."""


class RouteError(BextError):
    """A route could not be registered, matched or loaded.

    ``code`` is a stable machine-readable identifier such as
    ``INVALID_ROUTE`` or ``INVALID_HANDLER``.
    """

    def __init__(self, message: str, code: str, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class RouteLoadError(RouteError):
    """A route module failed to import or exports no HTTP method handler."""

    def __init__(self, message: str, code: str = "ROUTE_LOAD_ERROR") -> None:
        super().__init__(message, code)


class RouteValidationError(BextError):
    """A route record failed validation.

    ``field`` names the offending attribute (``methods``, ``path`` or
    ``file``) when one applies.
    """

    def __init__(self, message: str, code: str, field: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.field = field


@dataclass(frozen=True, slots=True)
class HTTPError(BextError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or the request pipeline. The ASGI app catches
    these and turns them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ServerError(HTTPError):
    """5xx raised deliberately by a handler or the pipeline."""

    def __init__(self, detail: str = "Internal Server Error", status: int = 500) -> None:
        super().__init__(status=status, detail=detail)
