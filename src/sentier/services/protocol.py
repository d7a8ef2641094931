"""Service capability protocols.

A service is any object that takes part in one or more pipeline phases.
No base class required. The registry checks the shape, not the lineage::

    class RequestLog:
        def middleware(self) -> None:
            self.started = time.monotonic()

        def dispatch(self, result: Any) -> None:
            log.info("done in %.3fs", time.monotonic() - self.started)

``RequestLog`` satisfies both ``Middleware`` and ``Dispatch`` and is invoked
once in each of those phases.
"""

from enum import Enum
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Middleware(Protocol):
    """Runs after the global middleware, before the route's pre-handlers."""

    def middleware(self) -> None: ...


@runtime_checkable
class Dispatch(Protocol):
    """Receives the handler's result once the route has run."""

    def dispatch(self, result: Any) -> None: ...


@runtime_checkable
class ErrorHandler(Protocol):
    """Receives any exception caught while processing a request."""

    def handle_error(self, exc: Exception) -> None: ...


@runtime_checkable
class ErrorDispatch(Protocol):
    """Produces the response for a failed request, after error handlers."""

    def error_dispatch(self, exc: Exception) -> None: ...


@runtime_checkable
class Destructor(Protocol):
    """Teardown logic. Runs after every request, success or failure."""

    def destruct(self) -> None: ...


class Capability(Enum):
    """The phases a service can contribute to, named after their method."""

    MIDDLEWARE = "middleware"
    DISPATCH = "dispatch"
    ERROR_HANDLER = "handle_error"
    ERROR_DISPATCH = "error_dispatch"
    DESTRUCTOR = "destruct"

    @property
    def protocol(self) -> type:
        return _PROTOCOLS[self]

    def satisfied_by(self, service: object) -> bool:
        # runtime_checkable only checks that the attribute exists
        return isinstance(service, _PROTOCOLS[self]) and callable(
            getattr(service, self.value, None)
        )


_PROTOCOLS: dict[Capability, type] = {
    Capability.MIDDLEWARE: Middleware,
    Capability.DISPATCH: Dispatch,
    Capability.ERROR_HANDLER: ErrorHandler,
    Capability.ERROR_DISPATCH: ErrorDispatch,
    Capability.DESTRUCTOR: Destructor,
}


def capabilities(service: object) -> frozenset[Capability]:
    """Return every capability *service* implements."""
    return frozenset(cap for cap in Capability if cap.satisfied_by(service))
