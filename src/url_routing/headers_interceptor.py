"""
Header injection interceptors.

HeadersInterceptor sets fixed headers on every outgoing request;
BearerAuthInterceptor is the common case of an Authorization header.
"""

from typing import Any

from url_routing.interceptor import Next
from url_routing.request import RequestData
from url_routing.response import ResponseData


class HeadersInterceptor:
    """
    Sets `headers` on a copy of every request, replacing existing values.

    Example:
        HeadersInterceptor({"User-Agent": "my-app/1.0"})
    """

    name = "headers"

    def __init__(self, headers: dict[str, str]):
        self.headers = dict(headers)

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        for header, value in self.headers.items():
            request = request.with_header(header, value)
        return await next(request, route)


class BearerAuthInterceptor(HeadersInterceptor):
    """Injects `Authorization: Bearer <token>` into every request."""

    name = "bearer-auth"

    def __init__(self, token: str):
        if not token or not token.strip():
            raise ValueError("Bearer token is missing or empty")
        super().__init__({"Authorization": f"Bearer {token}"})
