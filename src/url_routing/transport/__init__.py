"""
Transport backends for url-routing.

Every backend turns a complete RequestData into a ResponseData and reports
failures as TransportError, so any of them can sit at the bottom of an
interceptor chain. httpx is always installed; aiohttp and requests come with
the matching package extras and are imported only when asked for.
"""

from importlib import import_module

from url_routing.exceptions import UnknownTransportError

from .base import BaseTransport
from .httpx import HttpxTransport

__all__ = ["BaseTransport", "HttpxTransport", "TRANSPORTS", "get_transport"]

# name -> (module, class)
TRANSPORTS = {
    "httpx": (".httpx", "HttpxTransport"),
    "aiohttp": (".aiohttp", "AiohttpTransport"),
    "requests": (".requests", "RequestsTransport"),
}


def get_transport(name: str, timeout: float = 10.0) -> BaseTransport:
    """
    Build the transport registered under `name` (case-insensitive).

    Raises:
        UnknownTransportError: If `name` is not one of TRANSPORTS
        ImportError: If the backend's optional package is not installed
    """
    key = name.lower()
    if key not in TRANSPORTS:
        raise UnknownTransportError(
            f"Unknown transport: {name}. Available: {', '.join(TRANSPORTS)}",
            details={"transport": name},
        )

    module_name, class_name = TRANSPORTS[key]
    try:
        module = import_module(module_name, __name__)
    except ImportError as err:
        raise ImportError(
            f"{key} transport requires the {key} package. "
            f"Install with: pip install 'url-routing[{key}]'"
        ) from err
    return getattr(module, class_name)(timeout)
