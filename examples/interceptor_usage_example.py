"""
Example usage of interceptors with RoutingClient.

This example defines a small typed router for a users API and runs its
routes through a chain of built-in and custom interceptors.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass

from pydantic import BaseModel

from url_routing import BaseURLRouter
from url_routing import BearerAuthInterceptor
from url_routing import CacheInterceptor
from url_routing import LoggingInterceptor
from url_routing import MetricsInterceptor
from url_routing import RaiseForStatusInterceptor
from url_routing import RequestData
from url_routing import RoutingClient
from url_routing import RoutingError
from url_routing import RoutingSettings
from url_routing import URLRoutingError
from url_routing import function_interceptor

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    pass


@dataclass(frozen=True)
class UserRepos:
    username: str
    per_page: int = 10


class Repo(BaseModel):
    id: int
    fullName: str


class UsersRouter:
    def print(self, route):
        if isinstance(route, CurrentUser):
            return RequestData(path=["user"])
        if isinstance(route, UserRepos):
            return RequestData(
                path=["users", route.username, "repos"],
                query={"per_page": [str(route.per_page)]},
            )
        raise RoutingError(f"No route for {route!r}")

    def parse(self, request):
        if request.path == ["user"]:
            return CurrentUser()
        if len(request.path) == 3 and request.path[0] == "users":
            return UserRepos(request.path[1], int(request.query["per_page"][0]))
        raise RoutingError(f"No route matches {request.path_string}")


@function_interceptor
async def trace_id(request, route, next):
    """Tags every request with a fresh trace id."""
    return await next(request.with_header("X-Trace-Id", uuid.uuid4().hex), route)


async def main():
    settings = RoutingSettings(key_decoding_strategy="convert_from_snake_case")
    metrics = MetricsInterceptor()

    # Order matters: logging sees the final outcome of everything below it,
    # and cache hits skip auth and the status check entirely.
    client = RoutingClient(
        router=BaseURLRouter(UsersRouter(), "https://api.github.com"),
        interceptors=[
            LoggingInterceptor(),
            metrics,
            trace_id,
            CacheInterceptor(ttl=settings.cache_ttl),
            BearerAuthInterceptor("your-token"),
            RaiseForStatusInterceptor(),
        ],
        settings=settings,
    )

    try:
        repos, _ = await client.decoded(UserRepos("octocat"), list[Repo])
        logger.info(f"Fetched {len(repos)} repos")

        # served from cache
        await client.decoded(UserRepos("octocat"), list[Repo])
    except URLRoutingError as e:
        logger.error(f"Request failed: {e}")
    finally:
        logger.info(f"Metrics: {await metrics.snapshot()}")
        await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
