"""
Tests for the built-in interceptors.

This module tests:
- LoggingInterceptor request/response/failure logging
- HeadersInterceptor and BearerAuthInterceptor header injection
- CacheInterceptor short-circuiting and invalidation
- RaiseForStatusInterceptor error conversion
- MetricsInterceptor counters under concurrency
"""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from url_routing.cache_interceptor import CacheInterceptor
from url_routing.client import RoutingClient
from url_routing.exceptions import HTTPStatusError
from url_routing.exceptions import TransportError
from url_routing.headers_interceptor import BearerAuthInterceptor
from url_routing.headers_interceptor import HeadersInterceptor
from url_routing.logging_interceptor import LoggingInterceptor
from url_routing.metrics_interceptor import MetricsInterceptor
from url_routing.response import ResponseData
from url_routing.status_interceptor import RaiseForStatusInterceptor
from tests.fakes import Accumulator
from tests.fakes import AppRouter
from tests.fakes import CreateUserRoute
from tests.fakes import MockTransport
from tests.fakes import RecordingInterceptor
from tests.fakes import SearchRoute
from tests.fakes import UserRoute


def counting_transport(status_code: int = 200) -> MockTransport:
    async def handler(request):
        return ResponseData(
            status_code=status_code,
            body=f"call-{len(transport.requests)}".encode(),
            url=request.url,
        )

    transport = MockTransport(handler)
    return transport


@pytest.mark.asyncio
async def test_logging_interceptor_logs(caplog: pytest.LogCaptureFixture):
    """
    Request line, response status and timing are logged.

    Expected behavior:
    - Request method, URL and headers appear in the log
    - Response status and elapsed time appear in the log
    """
    caplog.set_level(logging.INFO, logger="url_routing.interceptor.logging")
    client = RoutingClient(
        router=AppRouter(),
        transport=MockTransport(),
        interceptors=[BearerAuthInterceptor("secret"), LoggingInterceptor()],
    )

    await client.execute(UserRoute(42))

    logs = caplog.text
    assert "Request: GET https://api.test/users/42" in logs
    assert "headers={'Authorization': ['Bearer secret']}" in logs
    assert "Response: 200" in logs
    assert "elapsed=" in logs


@pytest.mark.asyncio
async def test_logging_interceptor_logs_and_reraises_failures(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="url_routing.interceptor.logging")

    async def handler(request):
        raise TransportError("boom")

    client = RoutingClient(
        router=AppRouter(),
        transport=MockTransport(handler),
        interceptors=[LoggingInterceptor(log_headers=False)],
    )

    with pytest.raises(TransportError):
        await client.execute(UserRoute(1))

    assert "Failed: GET https://api.test/users/1 | TransportError: boom" in caplog.text
    assert "headers=" not in caplog.text


@pytest.mark.asyncio
async def test_headers_interceptor_sets_headers():
    transport = MockTransport()
    client = RoutingClient(
        router=AppRouter(),
        transport=transport,
        interceptors=[HeadersInterceptor({"User-Agent": "tests/1.0", "Content-Type": "text/plain"})],
    )

    await client.execute(CreateUserRoute("Blob"))

    headers = transport.requests[0].headers
    assert headers["User-Agent"] == ["tests/1.0"]
    assert headers["Content-Type"] == ["text/plain"]


def test_bearer_auth_rejects_empty_token():
    with pytest.raises(ValueError):
        BearerAuthInterceptor("  ")


@pytest.mark.asyncio
async def test_cache_hit_short_circuits_downstream():
    """
    A cached GET response is served without running later interceptors or
    the transport.
    """
    accumulator = Accumulator()
    transport = counting_transport()
    client = RoutingClient(
        router=AppRouter(),
        transport=transport,
        interceptors=[
            RecordingInterceptor("outer", accumulator),
            CacheInterceptor(ttl=60),
            RecordingInterceptor("inner", accumulator),
        ],
    )

    first = await client.execute(UserRoute(1))
    second = await client.execute(UserRoute(1))

    assert transport.request_count == 1
    assert second == first
    assert await accumulator.value() == [
        "outer-req",
        "inner-req",
        "inner-resp",
        "outer-resp",
        "outer-req",
        "outer-resp",
    ]


@pytest.mark.asyncio
async def test_cache_keys_include_query():
    transport = counting_transport()
    client = RoutingClient(
        router=AppRouter(), transport=transport, interceptors=[CacheInterceptor()]
    )

    await client.execute(SearchRoute("a"))
    await client.execute(SearchRoute("b"))
    await client.execute(SearchRoute("a"))

    assert transport.request_count == 2


@pytest.mark.asyncio
async def test_cache_skips_unsuccessful_responses():
    transport = counting_transport(status_code=500)
    client = RoutingClient(
        router=AppRouter(), transport=transport, interceptors=[CacheInterceptor()]
    )

    await client.execute(UserRoute(1))
    await client.execute(UserRoute(1))

    assert transport.request_count == 2


@pytest.mark.asyncio
async def test_cache_invalidated_by_successful_unsafe_request():
    """
    A successful POST to a URL evicts the cached GET for that URL.
    """
    transport = counting_transport()
    cache = CacheInterceptor()
    client = RoutingClient(router=AppRouter(), transport=transport, interceptors=[cache])
    router = AppRouter()

    async def send(request, route):
        return await transport.send(request)

    get_request = router.print(UserRoute(1)).model_copy(update={"path": ["users"]})
    await cache.intercept(get_request, None, send)
    await cache.intercept(get_request, None, send)
    await client.execute(CreateUserRoute("Blob"))
    await cache.intercept(get_request, None, send)

    assert transport.request_count == 3


@pytest.mark.asyncio
async def test_cache_read_errors_fall_through():
    backend = AsyncMock()
    backend.get.side_effect = RuntimeError("cache down")
    transport = MockTransport()
    client = RoutingClient(
        router=AppRouter(),
        transport=transport,
        interceptors=[CacheInterceptor(cache=backend)],
    )

    response = await client.execute(UserRoute(1))

    assert response.status_code == 200
    assert transport.request_count == 1
    backend.set.assert_awaited_once()


@pytest.mark.asyncio
async def test_cache_clear():
    transport = counting_transport()
    cache = CacheInterceptor()
    client = RoutingClient(router=AppRouter(), transport=transport, interceptors=[cache])

    await client.execute(UserRoute(1))
    await cache.clear()
    await client.execute(UserRoute(1))

    assert transport.request_count == 2


@pytest.mark.asyncio
async def test_cache_separates_vary_header_variants():
    """
    Requests to one URL that differ in a vary header get their own cached
    responses, and invalidating the URL evicts all of them.
    """
    transport = counting_transport()
    cache = CacheInterceptor()

    async def send(request, route):
        return await transport.send(request)

    request = AppRouter().print(UserRoute(1))
    as_json = request.with_header("Accept", "application/json")
    as_text = request.with_header("accept", "text/plain")

    json_response = await cache.intercept(as_json, None, send)
    text_response = await cache.intercept(as_text, None, send)

    assert transport.request_count == 2
    assert await cache.intercept(as_json, None, send) is json_response
    assert await cache.intercept(as_text, None, send) is text_response
    assert transport.request_count == 2

    await cache.invalidate(as_json)
    await cache.intercept(as_text, None, send)

    assert transport.request_count == 3


@pytest.mark.asyncio
async def test_cache_ignores_headers_outside_vary():
    transport = counting_transport()
    cache = CacheInterceptor(vary=("Accept",))

    async def send(request, route):
        return await transport.send(request)

    request = AppRouter().print(UserRoute(1))

    await cache.intercept(request.with_header("X-Trace-Id", "a"), None, send)
    await cache.intercept(request.with_header("X-Trace-Id", "b"), None, send)

    assert transport.request_count == 1

@pytest.mark.asyncio
async def test_raise_for_status():
    client = RoutingClient(
        router=AppRouter(),
        transport=counting_transport(status_code=404),
        interceptors=[RaiseForStatusInterceptor()],
    )

    with pytest.raises(HTTPStatusError) as exc_info:
        await client.execute(UserRoute(1))

    assert exc_info.value.response.status_code == 404
    assert isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_raise_for_status_passes_success():
    client = RoutingClient(
        router=AppRouter(),
        transport=counting_transport(status_code=302),
        interceptors=[RaiseForStatusInterceptor()],
    )

    response = await client.execute(UserRoute(1))

    assert response.status_code == 302


@pytest.mark.asyncio
async def test_metrics_interceptor_counts_concurrent_calls():
    """
    Counters stay exact when many calls run concurrently.

    Expected behavior:
    - Every call is counted once
    - Failures and statuses are tallied separately
    """

    async def handler(request):
        await asyncio.sleep(0)
        user_id = int(request.path[1])
        if user_id % 5 == 0:
            raise TransportError("flaky")
        return ResponseData(status_code=200 if user_id % 2 else 404)

    metrics = MetricsInterceptor()
    client = RoutingClient(
        router=AppRouter(), transport=MockTransport(handler), interceptors=[metrics]
    )

    results = await asyncio.gather(
        *(client.execute(UserRoute(i)) for i in range(1, 51)), return_exceptions=True
    )

    snapshot = await metrics.snapshot()
    assert snapshot["requests"] == 50
    assert snapshot["failures"] == 10
    assert snapshot["cancelled"] == 0
    assert snapshot["statuses"] == {200: 20, 404: 20}
    assert snapshot["total_latency"] >= 0
    assert sum(isinstance(result, TransportError) for result in results) == 10

    await metrics.reset()
    assert (await metrics.snapshot())["requests"] == 0


@pytest.mark.asyncio
async def test_metrics_interceptor_counts_cancelled_calls():
    """
    A call cancelled while the transport is suspended is counted as cancelled.

    Expected behavior:
    - requests == failures + cancelled + sum(statuses) after the cancellation
    - Latency of the cancelled call is included
    - CancelledError still reaches the caller
    """
    started = asyncio.Event()

    async def handler(request):
        started.set()
        await asyncio.sleep(0.01)
        await asyncio.Event().wait()

    metrics = MetricsInterceptor()
    client = RoutingClient(
        router=AppRouter(), transport=MockTransport(handler), interceptors=[metrics]
    )

    task = asyncio.create_task(client.execute(UserRoute(1)))
    await started.wait()
    await asyncio.sleep(0.02)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    snapshot = await metrics.snapshot()
    assert snapshot["requests"] == 1
    assert snapshot["cancelled"] == 1
    assert snapshot["failures"] == 0
    assert snapshot["requests"] == (
        snapshot["failures"] + snapshot["cancelled"] + sum(snapshot["statuses"].values())
    )
    assert snapshot["total_latency"] > 0
