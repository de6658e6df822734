"""Prefix router.

Only the first slash-delimited segment of the path selects a handler:
``/post/my-slug`` dispatches on ``/post/`` and hands ``my-slug`` to the
handler. Routes are registered during setup and the table is frozen by
``compile()``.
"""

import re

from inkwell.errors import ConfigurationError, MethodNotAllowed
from inkwell.routing.route import Route, RouteMatch

_PREFIX_RE = re.compile(r"^/[^/]*/")


def extract_prefix(path: str) -> str | None:
    """Return the leading ``/segment/`` of *path*, or ``None``.

    Examples::

        "/post/my-slug" -> "/post/"
        "/home/"        -> "/home/"
        "/home"         -> None
        "/"             -> None
        "post/x/"       -> None
    """
    match = _PREFIX_RE.match(path)
    if match is None:
        return None
    return match.group(0)


class Router:
    """Static prefix -> handler table.

    Usage::

        router = Router()
        router.add(Route("/post/", post_handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/post/hello")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if extract_prefix(route.prefix) != route.prefix:
            msg = f"Route prefix must look like '/segment/', got {route.prefix!r}"
            raise ConfigurationError(msg)
        if route.prefix in self._routes:
            msg = f"Duplicate route prefix {route.prefix!r}"
            raise ConfigurationError(msg)
        self._routes[route.prefix] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Match a request against the prefix table.

        Returns ``None`` when no prefix can be extracted or none is
        registered; the caller redirects those requests home.
        Raises ``MethodNotAllowed`` if the prefix exists but not for *method*.
        HEAD is accepted wherever GET is.
        """
        prefix = extract_prefix(path)
        if prefix is None:
            return None
        route = self._routes.get(prefix)
        if route is None:
            return None

        allowed = route.methods
        if method not in allowed and not (method == "HEAD" and "GET" in allowed):
            raise MethodNotAllowed(allowed)
        return RouteMatch(route=route, remainder=path[len(prefix) :])
