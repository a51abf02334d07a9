import asyncio

import requests

from url_routing.exceptions import TransportError
from url_routing.request import RequestData
from url_routing.response import ResponseData

from .base import BaseTransport


class RequestsTransport(BaseTransport):
    """
    Sync transport implementation using requests.Session.

    This transport wraps the synchronous requests library in an async interface
    so it can sit at the bottom of an interceptor chain.

    Note: Cancelling the awaiting task does not abort the request already
    running in the worker thread. For best behaviour, use httpx or aiohttp.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session = requests.Session()

    async def _send(self, request: RequestData) -> ResponseData:
        """
        Async wrapper around synchronous requests.

        This method runs the synchronous requests call in a thread pool
        to avoid blocking the event loop.
        """
        loop = asyncio.get_running_loop()

        def make_request() -> requests.Response:
            return self._session.request(
                method=request.method,
                url=request.url,
                # requests takes one value per header name
                headers={name: ", ".join(values) for name, values in request.headers.items()},
                data=request.body,
                timeout=self._timeout,
            )

        try:
            response = await loop.run_in_executor(None, make_request)
        except requests.RequestException as err:
            raise TransportError(
                f"{request.method} {request.url} failed: {err!r}"
            ) from err

        return ResponseData(
            status_code=response.status_code,
            headers={name: [value] for name, value in response.headers.items()},
            body=response.content,
            url=response.url,
        )

    async def close(self):
        """
        Async wrapper for closing the session.
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._session.close)
