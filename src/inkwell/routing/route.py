"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``prefix`` is the exact ``/segment/`` string the router dispatches on.
    """

    prefix: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``remainder`` is everything in the path after the prefix, possibly empty.
    """

    route: Route
    remainder: str
