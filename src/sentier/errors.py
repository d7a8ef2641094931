"""Sentier exception hierarchy.

Shared across the route table, Pipeline, Controller, and service registry
so every module raises and catches the same types.

User callables may raise anything. Those exceptions are never wrapped:
error handlers receive the original object, and the phase it escaped from
is recorded on the request ``Outcome``.
"""

from dataclasses import dataclass


class SentierError(Exception):
    """Base for all sentier-specific errors."""


class ConfigurationError(SentierError):
    """Raised when a registration call receives malformed arguments.

    Typically a non-callable handler or an empty method token, caught
    during setup before any request is routed.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SentierError):
    """An error that maps directly to an HTTP status code.

    Raised while resolving a route. The Pipeline catches these and
    hands them to the registered error handlers like any other failure.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818
    """404: no route registered for the path (or method, in script mode)."""

    def __init__(self, detail: str = "Route does not exist") -> None:
        super().__init__(status=404, detail=detail)


class MethodMismatch(HTTPError):  # noqa: N818
    """405: a route exists for the path, but not for this method.

    Includes an ``Allow`` header naming the method the route was
    registered with.
    """

    def __init__(self, allowed: str, detail: str = "") -> None:
        default_detail = f"Route does not exist for the request method. Allowed method: {allowed}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allowed),),
        )

    @property
    def allowed(self) -> str:
        """The method the matched route was registered with."""
        return dict(self.headers)["Allow"]
