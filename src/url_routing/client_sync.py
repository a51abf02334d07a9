"""
Synchronous wrapper for RoutingClient.

This module provides a blocking interface on top of the async RoutingClient
for scripts and other code without an event loop.
"""

import asyncio
from typing import Generic
from typing import TypeVar

from .client import RoutingClient
from .decoding import Decoder
from .response import ResponseData

RouteT = TypeVar("RouteT")
T = TypeVar("T")


class RoutingClientSync(Generic[RouteT]):
    """
    Synchronous wrapper for RoutingClient.

    All calls run on one private event loop, so transports that keep
    connections bound to a loop (httpx, aiohttp) stay usable across calls.

    Example:
        with RoutingClientSync(RoutingClient(router)) as client:
            user, _ = client.decoded(UserRoute(id=1), User)
    """

    def __init__(self, client: RoutingClient[RouteT]):
        """
        Initialize the synchronous client.

        Args:
            client: Async client to drive
        """
        self._async_client = client
        self._loop = asyncio.new_event_loop()

    def execute(self, route: RouteT) -> ResponseData:
        """
        Synchronous route execution.

        Raises:
            RoutingError, TransportError: As for RoutingClient.execute
        """
        return self._loop.run_until_complete(self._async_client.execute(route))

    def decoded(
        self,
        route: RouteT,
        as_type: type[T],
        decoder: Decoder | None = None,
    ) -> tuple[T, ResponseData]:
        """
        Synchronous route execution with decoding.

        Raises:
            DecodingError: If the body does not match `as_type`
        """
        return self._loop.run_until_complete(
            self._async_client.decoded(route, as_type, decoder=decoder)
        )

    def close(self):
        """
        Synchronous cleanup of client resources.
        """
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self._async_client.aclose())
        finally:
            self._loop.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
