"""
Interceptor interface and chain builder for RoutingClient.

An interceptor wraps everything downstream of it: the remaining interceptors
and, at the bottom, the transport. It receives the request, the route that
produced it, and a `next` continuation:

    class AuthenticationInterceptor:
        async def intercept(self, request, route, next):
            request = request.with_header("Authorization", f"Bearer {self.token}")
            return await next(request, route)

Interceptors run in list order on the way down. Work done after
`await next(...)` runs in reverse list order on the way up, so the first
interceptor sees the request first and the response last.

An interceptor may:
- transform the request before calling `next`
- not call `next` at all (short-circuit), skipping downstream interceptors
  and the transport
- transform the response returned by `next`
- call `next` more than once; every call re-enters the whole downstream
  chain independently
- catch failures from `next` and recover or raise a different error
"""

import logging
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Protocol
from typing import Sequence

from url_routing.request import RequestData
from url_routing.response import ResponseData

logger = logging.getLogger("url_routing.interceptor")

Next = Callable[[RequestData, Any], Awaitable[ResponseData]]
Send = Callable[[RequestData], Awaitable[ResponseData]]


class Interceptor(Protocol):
    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        """
        Handle one request/response cycle.

        Args:
            request (RequestData): Request as produced by the router and any
                upstream interceptors
            route (Any): The typed route the request was printed from
            next (Next): Continuation running all downstream interceptors and
                the transport

        Returns:
            ResponseData: The response to hand back upstream
        """


class FunctionInterceptor:
    """
    Adapts a plain async function to the Interceptor interface.

    Example:
        @function_interceptor
        async def add_trace_id(request, route, next):
            return await next(request.with_header("X-Trace-Id", new_id()), route)
    """

    def __init__(
        self,
        func: Callable[[RequestData, Any, Next], Awaitable[ResponseData]],
        name: str | None = None,
    ):
        self._func = func
        self.name = name or getattr(func, "__name__", type(self).__name__)

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        return await self._func(request, route, next)

    def __repr__(self) -> str:
        return f"FunctionInterceptor({self.name!r})"


def function_interceptor(func=None, *, name: str | None = None):
    """Decorator turning an async function into a FunctionInterceptor."""

    def decorator(fn):
        return FunctionInterceptor(fn, name=name)

    if func is not None:
        return decorator(func)
    return decorator


def interceptor_name(mw: Any) -> str:
    return getattr(mw, "name", None) or type(mw).__name__


def build_chain(interceptors: Sequence[Interceptor], send: Send) -> Next:
    """
    Compose interceptors around the terminal transport call.

    The chain is folded right to left: the transport call is wrapped by the
    last interceptor, that by the one before it, and so on, so the first
    interceptor in the list is the outermost one.

    Args:
        interceptors: Interceptors in execution order
        send: Terminal call performing the request, usually `transport.send`

    Returns:
        An async callable `(request, route) -> ResponseData`
    """

    async def terminal(request: RequestData, route: Any) -> ResponseData:
        return await send(request)

    chain: Next = terminal
    for mw in reversed(interceptors):

        def make_link(mw: Interceptor, downstream: Next) -> Next:
            async def link(request: RequestData, route: Any) -> ResponseData:
                return await mw.intercept(request, route, downstream)

            return link

        chain = make_link(mw, chain)

    logger.debug(
        f"Built chain: {[interceptor_name(mw) for mw in interceptors]} -> transport"
    )
    return chain
