"""Route: a path/method binding with ordered pre and post hooks."""

from sentier._internal.hooks import HandlerList
from sentier._internal.types import Handler, Hook
from sentier.errors import ConfigurationError


class Route:
    """A registered route.

    The path, method and handler are fixed at construction. The pre and
    post hook lists are append-only and run in registration order::

        route = pipeline.get("/items", list_items)
        route.pre(require_login).pre(load_filters).post(audit)

    A route without a path is a *script mode* route, resolved by method alone.
    """

    __slots__ = ("_handler", "_method", "_path", "_post", "_pre")

    def __init__(self, path: str | None, handler: Handler, method: str) -> None:
        if not method:
            msg = "A route needs a non-empty request method."
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Route handler for {method} {path!r} must be callable, got {type(handler).__name__}"
            raise ConfigurationError(msg)
        self._path = path or None
        self._method = method
        self._handler = handler
        self._pre = HandlerList("pre-handlers")
        self._post = HandlerList("post-handlers")

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def method(self) -> str:
        return self._method

    @property
    def handler(self) -> Handler:
        return self._handler

    @property
    def is_script(self) -> bool:
        """True when the route is resolved by method alone."""
        return self._path is None

    # -- Hooks --

    def pre(self, handler: Hook) -> "Route":
        """Append a hook that runs before the handler. Returns self."""
        self._pre.append(handler)
        return self

    def post(self, handler: Hook) -> "Route":
        """Append a hook that runs after the handler. Returns self."""
        self._post.append(handler)
        return self

    @property
    def pre_handlers(self) -> tuple[Hook, ...]:
        return self._pre.snapshot()

    @property
    def post_handlers(self) -> tuple[Hook, ...]:
        return self._post.snapshot()

    def __repr__(self) -> str:
        target = self._path if self._path is not None else "<script>"
        name = getattr(self._handler, "__name__", repr(self._handler))
        return f"<Route {self._method} {target} -> {name}>"
