import logging

from url_routing.exceptions import TransportError
from url_routing.request import RequestData
from url_routing.response import ResponseData

logger = logging.getLogger("url_routing.transport")


class BaseTransport:
    """
    Abstract transport layer interface for url-routing.
    All HTTP client backends should inherit from this class.

    Supported transports:
    - httpx: Native async HTTP client
    - aiohttp: Native async HTTP client
    - requests: Sync HTTP client wrapped in async interface
    """

    async def send(self, request: RequestData) -> ResponseData:
        """
        Perform `request` and return the response.

        Raises:
            TransportError: If the request is incomplete or the exchange fails
        """
        self.ensure_complete(request)
        logger.debug(f"{type(self).__name__}: {request.method} {request.url}")
        return await self._send(request)

    async def _send(self, request: RequestData) -> ResponseData:
        """
        Backend-specific request execution.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self):
        pass

    @staticmethod
    def ensure_complete(request: RequestData):
        if not request.is_complete:
            raise TransportError(
                f"Incomplete request: missing host for {request.method} {request.path_string}"
            )
