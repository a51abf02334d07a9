"""
Interceptor turning error status codes into exceptions.

Transports report every HTTP status as a normal response. Placing
RaiseForStatusInterceptor in the chain makes 4xx/5xx responses fail with
HTTPStatusError instead, which interceptors above it can catch.
"""

from typing import Any

from url_routing.exceptions import HTTPStatusError
from url_routing.interceptor import Next
from url_routing.request import RequestData
from url_routing.response import ResponseData


class RaiseForStatusInterceptor:
    """
    Raises HTTPStatusError for responses with status >= `min_status`.

    Args:
        min_status (int): Lowest status treated as an error (default: 400)
    """

    name = "raise-for-status"

    def __init__(self, min_status: int = 400):
        self.min_status = min_status

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        response = await next(request, route)
        if response.status_code >= self.min_status:
            raise HTTPStatusError(
                f"{request.method} {request.url} returned {response.status_code}",
                response=response,
            )
        return response
