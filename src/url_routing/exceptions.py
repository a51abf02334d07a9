"""
Custom exceptions for url-routing.
Every failure a caller of the client can observe derives from URLRoutingError.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from url_routing.response import ResponseData


class URLRoutingError(Exception):
    """
    Base exception for all client-level failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., validation errors).
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class RoutingError(URLRoutingError):
    """The router could not turn a route into a request."""


class TransportError(URLRoutingError):
    """The transport failed to perform the request (network, timeout, protocol)."""


class HTTPStatusError(TransportError):
    """
    Raised by RaiseForStatusInterceptor for error status codes.

    The offending response stays available on `response`.
    """

    def __init__(self, message: str, response: "ResponseData"):
        super().__init__(message, details=response.text)
        self.response = response


class DecodingError(URLRoutingError):
    """The response body could not be decoded into the requested type."""


class UnknownTransportError(URLRoutingError, ValueError):
    """No transport backend is registered under the requested name."""
