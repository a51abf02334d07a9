"""
Aiohttp transport implementation for url-routing.

This module provides AiohttpTransport, an alternative async HTTP client.
The session is created lazily on first use, inside the running event loop.
"""

import asyncio

import aiohttp

from url_routing.exceptions import TransportError
from url_routing.request import RequestData
from url_routing.response import ResponseData

from .base import BaseTransport


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _send(self, request: RequestData) -> ResponseData:
        # Create session if not exists
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        try:
            async with self._session.request(
                method=request.method,
                url=request.url,
                headers=request.header_items(),
                data=request.body,
            ) as response:
                body = await response.read()
                return ResponseData(
                    status_code=response.status,
                    headers=ResponseData.collect_headers(response.headers.items()),
                    body=body,
                    url=str(response.url),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise TransportError(
                f"{request.method} {request.url} failed: {err!r}"
            ) from err

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None
