import httpx

from url_routing.exceptions import TransportError
from url_routing.request import RequestData
from url_routing.response import ResponseData

from .base import BaseTransport


class HttpxTransport(BaseTransport):
    """
    Async transport implementation using httpx.AsyncClient.

    An existing client can be passed in, e.g. one built on
    `httpx.MockTransport` for tests.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.AsyncClient | None = None):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    async def _send(self, request: RequestData) -> ResponseData:
        try:
            response = await self._client.request(
                method=request.method,
                url=request.url,
                headers=request.header_items(),
                content=request.body,
                timeout=self._timeout,
            )
        except httpx.HTTPError as err:
            raise TransportError(
                f"{request.method} {request.url} failed: {err!r}"
            ) from err

        return ResponseData(
            status_code=response.status_code,
            headers=ResponseData.collect_headers(response.headers.multi_items()),
            body=response.content,
            url=str(response.url),
        )

    async def close(self):
        await self._client.aclose()
