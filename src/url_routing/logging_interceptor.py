"""
Logging interceptor for url-routing.

This module provides LoggingInterceptor, a built-in interceptor that logs
every request and its outcome with timing information. Useful for
debugging, monitoring, and understanding how a chain behaves.

Features:
- Request logging with method, URL and headers
- Response logging with status code and timing
- Failure and cancellation logging (errors are re-raised untouched)
"""

import asyncio
import logging
import time
from typing import Any

from url_routing.interceptor import Next
from url_routing.request import RequestData
from url_routing.response import ResponseData

logger = logging.getLogger("url_routing.interceptor.logging")


class LoggingInterceptor:
    """
    Interceptor logging requests and responses through standard Python logging.

    Timing is measured per call, so one instance can be shared by
    concurrent requests.

    Args:
        level (int): Log level for request/response lines (default: INFO)
        log_headers (bool): Include request headers in the request line
    """

    name = "logging"

    def __init__(self, level: int = logging.INFO, log_headers: bool = True):
        self.level = level
        self.log_headers = log_headers

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        line = f"Request: {request.method} {request.url}"
        if self.log_headers:
            line += f" | headers={request.headers}"
        logger.log(self.level, line)

        start = time.monotonic()
        try:
            response = await next(request, route)
        except asyncio.CancelledError:
            logger.warning(
                f"Cancelled: {request.method} {request.url} | elapsed={time.monotonic() - start:.3f}s"
            )
            raise
        except Exception as e:
            logger.error(
                f"Failed: {request.method} {request.url} | {type(e).__name__}: {e} | elapsed={time.monotonic() - start:.3f}s"
            )
            raise

        logger.log(
            self.level,
            f"Response: {response.status_code} | elapsed={time.monotonic() - start:.3f}s",
        )
        return response
