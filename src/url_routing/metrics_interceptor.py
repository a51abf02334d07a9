"""
Metrics interceptor for url-routing.

MetricsInterceptor accumulates counters across calls. The counters are
shared by every request going through the chain, so all updates happen
under an asyncio.Lock.
"""

import asyncio
import time
from collections import Counter
from typing import Any

from url_routing.interceptor import Next
from url_routing.request import RequestData
from url_routing.response import ResponseData


class MetricsInterceptor:
    """
    Counts requests, failures, cancellations and responses per status code,
    and sums latency. Every counted request ends up in exactly one of
    `failures`, `cancelled` or `statuses`.

    Example:
        metrics = MetricsInterceptor()
        client = RoutingClient(router, interceptors=[metrics])
        ...
        snapshot = await metrics.snapshot()
        snapshot["requests"], snapshot["statuses"][200]
    """

    name = "metrics"

    def __init__(self):
        self._lock = asyncio.Lock()
        self._requests = 0
        self._failures = 0
        self._cancelled = 0
        self._statuses: Counter[int] = Counter()
        self._total_latency = 0.0

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        async with self._lock:
            self._requests += 1

        start = time.monotonic()
        try:
            response = await next(request, route)
        except asyncio.CancelledError:
            async with self._lock:
                self._cancelled += 1
                self._total_latency += time.monotonic() - start
            raise
        except Exception:
            async with self._lock:
                self._failures += 1
                self._total_latency += time.monotonic() - start
            raise

        async with self._lock:
            self._statuses[response.status_code] += 1
            self._total_latency += time.monotonic() - start
        return response

    async def snapshot(self) -> dict[str, Any]:
        """Copy of the current counters."""
        async with self._lock:
            return {
                "requests": self._requests,
                "failures": self._failures,
                "cancelled": self._cancelled,
                "statuses": dict(self._statuses),
                "total_latency": self._total_latency,
            }

    async def reset(self):
        async with self._lock:
            self._requests = 0
            self._failures = 0
            self._cancelled = 0
            self._statuses.clear()
            self._total_latency = 0.0
