"""Class-based controllers.

A Controller answers requests with its own methods instead of registered
routes. Subclasses override ``get()``, ``put()``, ``post()``, ``patch()``
and ``delete()``; ``dispatch(method)`` picks the matching one, and
``action(name)`` runs any public method by name, which suits URL schemes
resolved outside sentier.

Controllers take part in the same service phases as a Pipeline, without
global hooks or pre/post handlers: service middleware, the method, service
dispatch; on failure, error-handler then error-dispatch services; always,
destructor services.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from sentier._internal.guard import call_guarded
from sentier.errors import HTTPError, RouteNotFound
from sentier.outcome import Outcome, Phase
from sentier.services.protocol import Capability
from sentier.services.registry import ServiceRegistry

logger = logging.getLogger("sentier.controller")

_REQUEST_METHODS = frozenset({"GET", "PUT", "POST", "PATCH", "DELETE"})

# Controller machinery, never reachable through action()
_RESERVED = frozenset({"action", "dispatch", "service", "services"})


class Controller:
    """Base class for method-per-verb request handlers.

    Usage::

        class Items(Controller):
            def get(self):
                return store.list()

            def post(self):
                return store.create(self.payload)

        Items([JsonResponder()], payload=body).dispatch("POST")
    """

    def __init__(self, services: Iterable[object] = (), *, payload: Any = None) -> None:
        self.payload = payload
        self._services = ServiceRegistry(services)

    # -- Request methods --

    def get(self) -> Any:
        raise RouteNotFound("Handler for the HTTP-GET request method is not implemented")

    def put(self) -> Any:
        raise RouteNotFound("Handler for the HTTP-PUT request method is not implemented")

    def post(self) -> Any:
        raise RouteNotFound("Handler for the HTTP-POST request method is not implemented")

    def patch(self) -> Any:
        raise RouteNotFound("Handler for the HTTP-PATCH request method is not implemented")

    def delete(self) -> Any:
        raise RouteNotFound("Handler for the HTTP-DELETE request method is not implemented")

    # -- Services --

    def service(self, service: object) -> "Controller":
        """Plug in a service implementing any of the capability protocols."""
        self._services.add(service)
        return self

    @property
    def services(self) -> ServiceRegistry:
        return self._services

    # -- Entry points --

    def dispatch(self, method: str) -> Outcome:
        """Run the handler method for the request *method* (``"GET"``, ...)."""
        return self._run(lambda: self._method_handler(method), method)

    def action(self, name: str) -> Outcome:
        """Run the public method *name* as the request handler."""
        return self._run(lambda: self._action_handler(name), name)

    # -- Internal --

    def _method_handler(self, method: str) -> Callable[[], Any]:
        if method not in _REQUEST_METHODS:
            raise RouteNotFound(f"Handler for the HTTP-{method} request method is not implemented")
        return getattr(self, method.lower())

    def _action_handler(self, name: str) -> Callable[[], Any]:
        if name.startswith("_") or name in _RESERVED:
            raise RouteNotFound(f"Action {name!r} is not public")
        handler = getattr(self, name, None)
        if not callable(handler):
            raise RouteNotFound(f"Action {name!r} does not exist")
        return handler

    def _run(self, resolve: Callable[[], Callable[[], Any]], label: str) -> Outcome:
        phase = Phase.RESOLVE
        result: Any = None
        error: Exception | None = None
        hook_errors: list[Exception] = []
        try:
            handler = resolve()
            phase = Phase.SERVICE_MIDDLEWARE
            self._services.middleware()
            phase = Phase.HANDLER
            result = handler()
            phase = Phase.DISPATCH
            self._services.dispatch(result)
        except Exception as exc:
            error = exc
            if isinstance(exc, HTTPError):
                logger.debug("%d %s.%s - %s", exc.status, type(self).__name__, label, exc.detail)
            else:
                logger.exception("%s.%s failed during %s", type(self).__name__, label, phase.value)
            hook_errors += call_guarded(
                self._services.bound(Capability.ERROR_HANDLER), exc, logger=logger, label="Error"
            )
            hook_errors += call_guarded(
                self._services.bound(Capability.ERROR_DISPATCH), exc, logger=logger, label="Error dispatch"
            )
        finally:
            hook_errors += call_guarded(
                self._services.bound(Capability.DESTRUCTOR), logger=logger, label="Destructor"
            )

        if error is not None:
            return Outcome(error=error, phase=phase, hook_errors=tuple(hook_errors))
        return Outcome(result=result, hook_errors=tuple(hook_errors))
