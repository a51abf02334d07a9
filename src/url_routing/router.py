"""
Router interface: bidirectional mapping between typed routes and requests.

A router prints a route into RequestData for the client, and optionally
parses RequestData back into a route. The grammar used to do that belongs to
the application; this module only defines the contract plus two small
routers the client and CLI rely on.
"""

from typing import Any
from typing import Generic
from typing import Protocol
from typing import TypeVar
from urllib.parse import urlsplit

from url_routing.exceptions import RoutingError
from url_routing.request import RequestData

RouteT = TypeVar("RouteT")


class Router(Protocol[RouteT]):
    def print(self, route: RouteT) -> RequestData:
        """
        Turn a route into a request.

        Raises:
            RoutingError: If the route cannot be printed
        """

    def parse(self, request: RequestData) -> RouteT:
        """
        Turn a request back into a route.

        Raises:
            RoutingError: If the request does not match any route
        """


class IdentityRouter:
    """Router whose routes already are RequestData values."""

    def print(self, route: RequestData) -> RequestData:
        if not isinstance(route, RequestData):
            raise RoutingError(
                f"IdentityRouter expects RequestData, got {type(route).__name__}"
            )
        return route

    def parse(self, request: RequestData) -> RequestData:
        return request


class BaseURLRouter(Generic[RouteT]):
    """
    Wraps a router and places its requests under a base URL.

    Scheme, host and port come from the base URL and its path is prefixed
    to every printed path, replacing whatever scheme, host and port the
    wrapped router printed. `parse` strips the prefix and hands the wrapped
    router a request with the default scheme and no host or port, so
    `parse(print(route)) == route` holds when the wrapped router round-trips
    and leaves those three fields at their defaults.

    Example:
        router = BaseURLRouter(AppRouter(), "https://api.example.com/v1")
    """

    def __init__(self, router: Router[RouteT], base_url: str):
        parts = urlsplit(base_url)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Base URL must be absolute: {base_url!r}")
        self.router = router
        self.base_url = base_url
        self.scheme = parts.scheme
        self.host = parts.hostname
        self.port = parts.port
        self.prefix = [segment for segment in parts.path.split("/") if segment]

    def print(self, route: RouteT) -> RequestData:
        request = self.router.print(route)
        return request.model_copy(
            update={
                "scheme": self.scheme,
                "host": self.host,
                "port": self.port,
                "path": self.prefix + list(request.path),
            }
        )

    def parse(self, request: RequestData) -> RouteT:
        if request.path[: len(self.prefix)] != self.prefix:
            raise RoutingError(
                f"Path {request.path_string} is outside base URL {self.base_url}"
            )
        stripped = request.model_copy(
            update={
                "scheme": "https",
                "host": None,
                "port": None,
                "path": list(request.path[len(self.prefix) :]),
            }
        )
        return self.router.parse(stripped)

    def __repr__(self) -> str:
        return f"BaseURLRouter({self.router!r}, {self.base_url!r})"


def print_route(router: Router[Any], route: Any) -> RequestData:
    """Print `route`, reporting every failure as a RoutingError."""
    try:
        return router.print(route)
    except RoutingError:
        raise
    except Exception as err:
        raise RoutingError(f"Failed to print route {route!r}: {err}") from err
