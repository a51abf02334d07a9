"""
url-routing - Async routing client with an interceptor chain.

This package provides:
- Async client executing typed routes through a router and a transport
- Interceptor chain wrapped around the transport call
- Synchronous wrapper for sync operations
- Multiple HTTP transport support
- Pluggable decoders with key naming strategies
- Built-in logging, header, caching, status and metrics interceptors
"""

from .cache_interceptor import CacheInterceptor
from .client import RoutingClient
from .client_sync import RoutingClientSync
from .config import RoutingSettings
from .decoding import JSONDecoder
from .decoding import Decoder
from .exceptions import DecodingError
from .exceptions import HTTPStatusError
from .exceptions import RoutingError
from .exceptions import TransportError
from .exceptions import UnknownTransportError
from .exceptions import URLRoutingError
from .headers_interceptor import BearerAuthInterceptor
from .headers_interceptor import HeadersInterceptor
from .interceptor import FunctionInterceptor
from .interceptor import Interceptor
from .interceptor import Next
from .interceptor import build_chain
from .interceptor import function_interceptor
from .logging_interceptor import LoggingInterceptor
from .metrics_interceptor import MetricsInterceptor
from .request import RequestData
from .response import ResponseData
from .router import BaseURLRouter
from .router import IdentityRouter
from .router import Router
from .status_interceptor import RaiseForStatusInterceptor

__version__ = "1.0.0"

__all__ = [
    "RoutingClient",
    "RoutingClientSync",
    "RoutingSettings",
    "Router",
    "IdentityRouter",
    "BaseURLRouter",
    "RequestData",
    "ResponseData",
    "Interceptor",
    "Next",
    "FunctionInterceptor",
    "function_interceptor",
    "build_chain",
    "Decoder",
    "JSONDecoder",
    "URLRoutingError",
    "RoutingError",
    "TransportError",
    "HTTPStatusError",
    "DecodingError",
    "UnknownTransportError",
    "LoggingInterceptor",
    "HeadersInterceptor",
    "BearerAuthInterceptor",
    "CacheInterceptor",
    "RaiseForStatusInterceptor",
    "MetricsInterceptor",
]
