"""ServiceRegistry: ordered services, invoked per capability.

Each phase walks every registered service in registration order and calls
only the ones implementing that phase's capability. A service lacking a
capability is skipped; that is never an error.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from sentier.services.protocol import Capability, capabilities

logger = logging.getLogger("sentier.services")


class ServiceRegistry:
    """Heterogeneous services in registration order.

    Usage::

        services = ServiceRegistry()
        services.add(RequestLog())
        services.add(JsonResponder())

        services.middleware()
        services.dispatch(result)
    """

    __slots__ = ("_services",)

    def __init__(self, services: Iterable[object] = ()) -> None:
        self._services: list[object] = []
        for service in services:
            self.add(service)

    def add(self, service: object) -> None:
        """Append *service*. It is never removed."""
        if not capabilities(service):
            logger.debug("Service %r implements no pipeline capability", service)
        self._services.append(service)

    def implementing(self, capability: Capability) -> list[Any]:
        """Services satisfying *capability*, in registration order."""
        return [s for s in self._services if capability.satisfied_by(s)]

    def bound(self, capability: Capability) -> list[Callable[..., Any]]:
        """The phase methods of every service satisfying *capability*."""
        return [getattr(s, capability.value) for s in self.implementing(capability)]

    # -- Phases --

    def middleware(self) -> None:
        for method in self.bound(Capability.MIDDLEWARE):
            method()

    def dispatch(self, result: Any) -> None:
        for method in self.bound(Capability.DISPATCH):
            method(result)

    def handle_error(self, exc: Exception) -> None:
        for method in self.bound(Capability.ERROR_HANDLER):
            method(exc)

    def error_dispatch(self, exc: Exception) -> None:
        for method in self.bound(Capability.ERROR_DISPATCH):
            method(exc)

    def destruct(self) -> None:
        for method in self.bound(Capability.DESTRUCTOR):
            method()

    def __iter__(self) -> Iterator[object]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __repr__(self) -> str:
        return f"<ServiceRegistry {len(self._services)} services>"
