"""Route tables with exact-match lookup.

Two independent mappings live here: routes keyed by path, and script mode
routes keyed by method. Registering a second route under the same key
replaces the first.
"""

from sentier.errors import MethodMismatch, RouteNotFound
from sentier.routing.route import Route


class RouteTable:
    """Path-keyed and method-keyed route storage.

    Usage::

        table = RouteTable()
        table.add(Route("/users", list_users, "GET"))
        table.add(Route(None, run_script, "POST"))

        table.resolve("GET", "/users")   # -> Route
        table.resolve_method("POST")     # -> Route
    """

    __slots__ = ("_request_handlers", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._request_handlers: dict[str, Route] = {}

    def add(self, route: Route) -> Route:
        """Store *route* in the table its path selects. Returns the route."""
        if route.is_script:
            self._request_handlers[route.method] = route
        else:
            assert route.path is not None
            self._routes[route.path] = route
        return route

    def resolve(self, method: str, path: str) -> Route:
        """Return the route registered at *path* for *method*.

        Raises ``RouteNotFound`` if nothing is registered at the path.
        Raises ``MethodMismatch`` if the route there answers a different method.
        """
        route = self._routes.get(path)
        if route is None:
            raise RouteNotFound(f"Route does not exist: {path!r}")
        if route.method != method:
            raise MethodMismatch(route.method)
        return route

    def resolve_method(self, method: str) -> Route:
        """Return the script mode route for *method*.

        Raises ``RouteNotFound`` if no request handler answers the method.
        """
        route = self._request_handlers.get(method)
        if route is None:
            raise RouteNotFound(f"Request handler does not exist for the request method {method!r}")
        return route

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """All path-keyed routes, in first-registration order of their paths."""
        return list(self._routes.values())

    @property
    def request_handlers(self) -> list[Route]:
        """All script mode routes, in first-registration order of their methods."""
        return list(self._request_handlers.values())

    @property
    def paths(self) -> frozenset[str]:
        return frozenset(self._routes)

    @property
    def methods(self) -> frozenset[str]:
        """Methods with a script mode request handler."""
        return frozenset(self._request_handlers)

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __len__(self) -> int:
        return len(self._routes) + len(self._request_handlers)
