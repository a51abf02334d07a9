"""
Async routing client.

This module provides RoutingClient, the public entry point of url-routing.
A client is built from a router, a transport and an ordered list of
interceptors:

- the router prints a typed route into RequestData
- the interceptors wrap the transport call, in list order on the way down
  and in reverse order on the way up
- the transport performs the exchange and returns ResponseData
- `decoded` turns the response body into an application type

Example usage:
    from url_routing import BaseURLRouter, BearerAuthInterceptor, LoggingInterceptor, RoutingClient

    client = RoutingClient(
        router=BaseURLRouter(AppRouter(), "https://api.example.com"),
        interceptors=[LoggingInterceptor(), BearerAuthInterceptor(token)],
    )

    user, response = await client.decoded(UserRoute(id=42), User)

    await client.aclose()
"""

import logging
from typing import Any
from typing import Generic
from typing import Sequence
from typing import TypeVar

from url_routing.config import RoutingSettings
from url_routing.decoding import Decoder
from url_routing.decoding import JSONDecoder
from url_routing.interceptor import Interceptor
from url_routing.interceptor import Next
from url_routing.interceptor import build_chain
from url_routing.response import ResponseData
from url_routing.router import Router
from url_routing.router import print_route
from url_routing.transport import BaseTransport
from url_routing.transport import get_transport

logger = logging.getLogger("url_routing.client")

RouteT = TypeVar("RouteT")
T = TypeVar("T")


class RoutingClient(Generic[RouteT]):
    """
    Async client executing typed routes through an interceptor chain.

    The client holds no per-call state, so one instance can serve many
    concurrent calls. Router, transport, interceptors and decoder are fixed
    at construction; use `with_interceptors` to derive a client with more
    interceptors.

    Args:
        router (Router): Prints routes into RequestData
        transport (BaseTransport | None): Performs requests. Defaults to the
                                          transport named in settings
        interceptors (Sequence[Interceptor]): Interceptors in execution order
        decoder (Decoder | None): Default decoder for `decoded`. Defaults to a
                                  JSONDecoder using settings.key_decoding_strategy
        settings (RoutingSettings | None): Client configuration

    Example:
        client = RoutingClient(router, interceptors=[LoggingInterceptor()])
        response = await client.execute(route)
        print(response.status_code, response.text)
    """

    def __init__(
        self,
        router: Router[RouteT],
        transport: BaseTransport | None = None,
        interceptors: Sequence[Interceptor] = (),
        decoder: Decoder | None = None,
        settings: RoutingSettings | None = None,
    ):
        self.settings = settings or RoutingSettings()
        self.router = router
        self.transport = transport or get_transport(
            self.settings.transport, timeout=self.settings.timeout
        )
        self.interceptors: tuple[Interceptor, ...] = tuple(interceptors)
        self.decoder = decoder or JSONDecoder(self.settings.key_decoding_strategy)
        self._chain: Next | None = None

    @property
    def chain(self) -> Next:
        """Composed interceptor chain, built on first use."""
        if self._chain is None:
            self._chain = build_chain(self.interceptors, self.transport.send)
        return self._chain

    def with_interceptors(self, *interceptors: Interceptor) -> "RoutingClient[RouteT]":
        """
        Return a new client running `interceptors` after the existing ones.

        Router, transport, decoder and settings are shared with this client.
        """
        return RoutingClient(
            router=self.router,
            transport=self.transport,
            interceptors=self.interceptors + tuple(interceptors),
            decoder=self.decoder,
            settings=self.settings,
        )

    async def execute(self, route: RouteT) -> ResponseData:
        """
        Execute `route` and return the raw response.

        The router's request is handed to the chain unchanged. No status
        code is treated as a failure here; add RaiseForStatusInterceptor
        for that.

        Args:
            route: Typed route understood by the client's router

        Returns:
            ResponseData: Body bytes plus status, headers and URL

        Raises:
            RoutingError: If the router cannot print the route. Raised before
                          any interceptor or the transport runs
            TransportError: If the transport fails and no interceptor recovers
            Exception: Any error raised by an interceptor
        """
        request = print_route(self.router, route)
        logger.debug(f"Executing {request.method} {request.url}")
        return await self.chain(request, route)

    async def decoded(
        self,
        route: RouteT,
        as_type: type[T],
        decoder: Decoder | None = None,
    ) -> tuple[T, ResponseData]:
        """
        Execute `route` and decode the response body into `as_type`.

        Args:
            route: Typed route understood by the client's router
            as_type: Type to decode into (pydantic model, dataclass, ...)
            decoder (Decoder | None): Overrides the client's default decoder
                                      for this call

        Returns:
            tuple[T, ResponseData]: The decoded value and the raw response

        Raises:
            DecodingError: If the body does not match `as_type`
            RoutingError, TransportError: As for `execute`

        Example:
            user, response = await client.decoded(UserRoute(id=1), User)
        """
        response = await self.execute(route)
        value = (decoder or self.decoder).decode(response.body, as_type)
        return value, response

    async def aclose(self):
        """
        Close the transport and release its connections.

        Example:
            async with RoutingClient(router) as client:
                response = await client.execute(route)
        """
        await self.transport.close()

    async def __aenter__(self) -> "RoutingClient[RouteT]":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any):
        await self.aclose()
