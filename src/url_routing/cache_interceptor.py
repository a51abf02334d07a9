"""
Response caching interceptor.

CacheInterceptor serves repeated safe requests (GET, HEAD by default) from
an aiocache cache. A hit short-circuits the chain: interceptors placed after
it and the transport do not run. A successful unsafe request (POST, PUT,
DELETE, ...) to a URL evicts the cached GET response for that URL, so
follow-up reads fetch fresh data.

Each cache entry is keyed by method and URL and holds one response per
combination of the request headers named in `vary`, so requests that differ
only in, say, `Accept` get separate responses.
"""

import logging
from typing import Any

from aiocache import Cache
from aiocache.serializers import NullSerializer

from url_routing.interceptor import Next
from url_routing.request import RequestData
from url_routing.response import ResponseData

logger = logging.getLogger("url_routing.interceptor.cache")

DEFAULT_VARY = ("Accept", "Accept-Encoding", "Accept-Language", "Authorization")


class CacheInterceptor:
    """
    Interceptor caching successful responses to safe requests.

    Responses are stored as-is (ResponseData is immutable). Only 2xx
    responses are cached. Cache errors are logged and the request falls
    through to the rest of the chain.

    Args:
        ttl (int): Time to live for cached responses in seconds
        cache: aiocache cache instance (default: in-memory cache)
        methods (tuple[str, ...]): Methods whose responses are cached
        vary (tuple[str, ...]): Request headers that select between cached
                                responses for the same URL (case-insensitive)
    """

    name = "cache"

    def __init__(
        self,
        ttl: int = 60,
        cache: Any = None,
        methods: tuple[str, ...] = ("GET", "HEAD"),
        vary: tuple[str, ...] = DEFAULT_VARY,
    ):
        self.ttl = ttl
        self.methods = tuple(method.upper() for method in methods)
        self.vary = tuple(header.lower() for header in vary)
        self._cache = cache or Cache(
            Cache.MEMORY, serializer=NullSerializer(), namespace="url_routing"
        )

    @staticmethod
    def cache_key(request: RequestData, method: str | None = None) -> str:
        return f"{(method or request.method).upper()} {request.url}"

    def variant_key(self, request: RequestData) -> tuple:
        """Values of the `vary` headers of `request`, in `vary` order."""
        headers = {name.lower(): tuple(values) for name, values in request.headers.items()}
        return tuple(headers.get(name, ()) for name in self.vary)

    async def intercept(
        self,
        request: RequestData,
        route: Any,
        next: Next,
    ) -> ResponseData:
        if request.method.upper() not in self.methods:
            response = await next(request, route)
            if response.is_success:
                await self.invalidate(request)
            return response

        key = self.cache_key(request)
        variant = self.variant_key(request)
        try:
            variants = await self._cache.get(key)
        except Exception as e:
            logger.warning(f"Failed to read cache for {key}: {e}")
            variants = None
        if not isinstance(variants, dict):
            variants = {}

        cached = variants.get(variant)
        if isinstance(cached, ResponseData):
            logger.info(f"Cache HIT for {key}")
            return cached

        logger.info(f"Cache MISS for {key}")
        response = await next(request, route)

        if response.is_success:
            try:
                await self._cache.set(key, {**variants, variant: response}, ttl=self.ttl)
            except Exception as e:
                logger.error(f"Failed to write to cache for {key}: {e}")
        return response

    async def invalidate(self, request: RequestData):
        """Evict every cached variant for the URL of `request`."""
        for method in self.methods:
            key = self.cache_key(request, method)
            try:
                await self._cache.delete(key)
            except Exception as e:
                logger.error(f"Failed to delete cache for {key}: {e}")
            else:
                logger.debug(f"Cleared cache for {key}")

    async def clear(self):
        """Drop every entry in this interceptor's cache namespace."""
        await self._cache.clear(namespace=getattr(self._cache, "namespace", None))
