"""Request outcomes.

``Pipeline.route()``, ``Pipeline.dispatch()`` and ``Controller.dispatch()``
never let an ``Exception`` escape. They return an ``Outcome`` describing what
happened instead, so callers that want more than the side effects of their
dispatch hooks can still inspect the result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sentier.routing.route import Route


class Phase(Enum):
    """One ordered stage of request processing."""

    RESOLVE = "resolve"
    INITIALIZE = "initialize"
    MIDDLEWARE = "middleware"
    SERVICE_MIDDLEWARE = "service-middleware"
    PRE = "pre"
    HANDLER = "handler"
    POST = "post"
    DISPATCH = "dispatch"


@dataclass(frozen=True, slots=True)
class Outcome:
    """The result of processing one request.

    ``error`` is the exception that aborted the request, exactly as raised,
    and ``phase`` is where it escaped from. ``hook_errors`` collects failures
    raised by error hooks or destructors while cleaning up; those never
    replace ``error``.
    """

    route: Route | None = None
    result: Any = None
    error: Exception | None = None
    phase: Phase | None = None
    hook_errors: tuple[Exception, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None
