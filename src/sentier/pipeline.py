"""The sentier Pipeline.

Owns the route tables, the global hook lists and the service registry,
and runs every request through the same fixed sequence of phases.

Mutable during setup (route, hook and service registration). Setup is
expected to finish before the first ``route()`` or ``dispatch()`` call;
no locking is done, so callers configuring from several threads must
serialize that themselves.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from kida import Environment

from sentier._internal.guard import call_guarded
from sentier._internal.hooks import HandlerList
from sentier._internal.invoke import invoke, thread
from sentier._internal.types import Handler, Hook
from sentier.config import PipelineConfig
from sentier.errors import HTTPError
from sentier.outcome import Outcome, Phase
from sentier.routing.route import Route
from sentier.routing.table import RouteTable
from sentier.services.protocol import Capability
from sentier.services.registry import ServiceRegistry
from sentier.templating.views import create_environment, render_view

logger = logging.getLogger("sentier.pipeline")


class _Progress:
    """Tracks the phase a request has reached, for error reporting."""

    __slots__ = ("phase",)

    def __init__(self) -> None:
        self.phase = Phase.RESOLVE


class Pipeline:
    """Request router and middleware pipeline.

    Usage::

        pipeline = Pipeline()
        pipeline.initialize(open_db)
        pipeline.middleware(authenticate)
        pipeline.get("/items", list_items).post(render_json)
        pipeline.error_handler(report)
        pipeline.destructor(close_db)

        pipeline.route("GET", "/items")

    Every request runs, in order: initializers, global middleware, service
    middleware, the route's pre-handlers, the handler, the route's
    post-handlers, global dispatchers, and dispatch services. The first
    exception anywhere aborts that sequence and is handed to the global
    error handlers, then error-handler services, then error-dispatch
    services. Global destructors and destructor services always run last.
    """

    __slots__ = (
        "_destructors",
        "_dispatchers",
        "_error_handlers",
        "_initializers",
        "_kida_env",
        "_middleware",
        "_services",
        "_table",
        "config",
    )

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        services: Iterable[object] = (),
        kida_env: Environment | None = None,
    ) -> None:
        self.config: PipelineConfig = config or PipelineConfig()
        self._table = RouteTable()
        self._initializers = HandlerList("initializers")
        self._middleware = HandlerList("middleware")
        self._dispatchers = HandlerList("dispatchers")
        self._error_handlers = HandlerList("error handlers")
        self._destructors = HandlerList("destructors")
        self._services = ServiceRegistry(services)
        self._kida_env: Environment | None = kida_env

    # -- Route registration --

    def get(self, path: str, handler: Handler) -> Route:
        """Register *handler* for GET requests at *path*."""
        return self.add_route(path, handler, "GET")

    def put(self, path: str, handler: Handler) -> Route:
        """Register *handler* for PUT requests at *path*."""
        return self.add_route(path, handler, "PUT")

    def patch(self, path: str, handler: Handler) -> Route:
        """Register *handler* for PATCH requests at *path*."""
        return self.add_route(path, handler, "PATCH")

    def post(self, path: str, handler: Handler) -> Route:
        """Register *handler* for POST requests at *path*."""
        return self.add_route(path, handler, "POST")

    def delete(self, path: str, handler: Handler) -> Route:
        """Register *handler* for DELETE requests at *path*."""
        return self.add_route(path, handler, "DELETE")

    def add_route(self, path: str, handler: Handler, method: str) -> Route:
        """Register *handler* for *method* at *path*.

        A path holds exactly one route: registering again at the same
        path replaces the earlier route, whatever its method.
        """
        return self._table.add(Route(path, handler, method))

    def request_handler(self, method: str, handler: Handler) -> Route:
        """Register a script mode *handler*, resolved by *method* alone."""
        return self._table.add(Route(None, handler, method))

    def register(self, path: str, *, method: str = "GET") -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        The decorated function is returned unchanged; reach the Route
        through ``pipeline.routes`` to attach hooks::

            @pipeline.register("/items", method="POST")
            def create_item(payload):
                ...
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func, method)
            return func

        return decorator

    def script(self, method: str) -> Callable[[Handler], Handler]:
        """Register a script mode request handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.request_handler(method, func)
            return func

        return decorator

    # -- Global hooks --

    def initialize(self, handler: Hook) -> "Pipeline":
        """Append initialization logic, run first on every request."""
        self._initializers.append(handler)
        return self

    def middleware(self, handler: Hook) -> "Pipeline":
        """Append middleware, run after the initializers."""
        self._middleware.append(handler)
        return self

    def dispatcher(self, handler: Hook) -> "Pipeline":
        """Append dispatch logic, called with the handler's result."""
        self._dispatchers.append(handler)
        return self

    def error_handler(self, handler: Hook) -> "Pipeline":
        """Append error handling logic, called with the caught exception."""
        self._error_handlers.append(handler)
        return self

    def destructor(self, handler: Hook) -> "Pipeline":
        """Append teardown logic, run after every request."""
        self._destructors.append(handler)
        return self

    def service(self, service: object) -> "Pipeline":
        """Plug in a service implementing any of the capability protocols."""
        self._services.add(service)
        return self

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        return self._table.routes

    @property
    def request_handlers(self) -> list[Route]:
        return self._table.request_handlers

    @property
    def services(self) -> ServiceRegistry:
        return self._services

    # -- Entry points --

    def route(self, method: str, path: str) -> Outcome:
        """Process a request for the route registered at *path*.

        Never raises an ``Exception``: resolution misses and handler
        failures go to the error handlers and are reported on the
        returned ``Outcome``.
        """
        return self._run(lambda: self._table.resolve(method, path), method, path)

    def dispatch(self, method: str) -> Outcome:
        """Process a request for the script mode handler answering *method*."""
        return self._run(lambda: self._table.resolve_method(method), method, None)

    def view(self, name: str, **context: Any) -> str:
        """Render the view template *name* and return the produced text."""
        if self._kida_env is None:
            self._kida_env = create_environment(self.config)
        return render_view(self._kida_env, name, context)

    # -- Internal --

    def _run(self, resolve: Callable[[], Route], method: str, path: str | None) -> Outcome:
        progress = _Progress()
        route: Route | None = None
        result: Any = None
        error: Exception | None = None
        hook_errors: list[Exception] = []
        try:
            route = resolve()
            result = self._process(route, progress)
        except Exception as exc:
            error = exc
            self._report(exc, progress.phase, method, path)
            hook_errors.extend(self._handle_error(exc))
        finally:
            hook_errors.extend(self._teardown())

        if error is not None:
            return Outcome(
                route=route,
                error=error,
                phase=progress.phase,
                hook_errors=tuple(hook_errors),
            )
        return Outcome(route=route, result=result, hook_errors=tuple(hook_errors))

    def _process(self, route: Route, progress: _Progress) -> Any:
        progress.phase = Phase.INITIALIZE
        self._initializers.call_all()

        progress.phase = Phase.MIDDLEWARE
        payload = self._thread(self._middleware, None)

        progress.phase = Phase.SERVICE_MIDDLEWARE
        self._services.middleware()

        progress.phase = Phase.PRE
        payload = self._thread(route.pre_handlers, payload)

        progress.phase = Phase.HANDLER
        if self.config.thread_payload:
            result = invoke(route.handler, payload)
        else:
            result = route.handler()

        progress.phase = Phase.POST
        for handler in route.post_handlers:
            handler(result)

        progress.phase = Phase.DISPATCH
        self._dispatchers.call_all(result)
        self._services.dispatch(result)
        return result

    def _thread(self, handlers: Iterable[Hook], payload: Any) -> Any:
        if self.config.thread_payload:
            return thread(handlers, payload)
        for handler in handlers:
            handler()
        return payload

    def _handle_error(self, exc: Exception) -> list[Exception]:
        failures = call_guarded(self._error_handlers, exc, logger=logger, label="Error")
        failures += call_guarded(
            self._services.bound(Capability.ERROR_HANDLER), exc, logger=logger, label="Error"
        )
        failures += call_guarded(
            self._services.bound(Capability.ERROR_DISPATCH), exc, logger=logger, label="Error dispatch"
        )
        return failures

    def _teardown(self) -> list[Exception]:
        failures = call_guarded(self._destructors, logger=logger, label="Destructor")
        failures += call_guarded(
            self._services.bound(Capability.DESTRUCTOR), logger=logger, label="Destructor"
        )
        return failures

    def _report(self, exc: Exception, phase: Phase, method: str, path: str | None) -> None:
        if not self.config.log_errors:
            return
        target = path if path is not None else "<script>"
        if isinstance(exc, HTTPError):
            logger.debug("%d %s %s - %s", exc.status, method, target, exc.detail)
        else:
            logger.exception("%s %s failed during %s", method, target, phase.value)
