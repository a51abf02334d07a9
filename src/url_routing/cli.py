"""
Command-line interface for url-routing.

Sends a single request through a RoutingClient so interceptors and
transports can be tried out from a shell. The route is a RequestData
built from the command-line arguments and placed under --base-url
(or URL_ROUTING_BASE_URL).

Available commands:
- fetch: Execute one request and print status and body
"""

import asyncio
import logging
import sys

import click

from url_routing.client import RoutingClient
from url_routing.config import RoutingSettings
from url_routing.exceptions import URLRoutingError
from url_routing.headers_interceptor import BearerAuthInterceptor
from url_routing.logging_interceptor import LoggingInterceptor
from url_routing.request import RequestData
from url_routing.router import BaseURLRouter
from url_routing.router import IdentityRouter
from url_routing.transport import get_transport

logger = logging.getLogger("url_routing.cli")


def _pairs(values: tuple[str, ...], separator: str) -> dict[str, list[str]]:
    pairs: dict[str, list[str]] = {}
    for item in values:
        name, sep, value = item.partition(separator)
        if not sep:
            raise click.BadParameter(f"Expected NAME{separator}VALUE, got {item!r}")
        pairs.setdefault(name.strip(), []).append(value.strip())
    return pairs


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """url-routing CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.argument("path")
@click.option("--method", "-X", default="GET", show_default=True, help="HTTP method")
@click.option("--base-url", default=None, help="Base URL (default: URL_ROUTING_BASE_URL)")
@click.option("--query", "-q", multiple=True, help="Query parameter NAME=VALUE")
@click.option("--header", "-H", multiple=True, help="Header NAME:VALUE")
@click.option("--data", "-d", default=None, help="Request body")
@click.option("--bearer", default=None, help="Bearer token for Authorization header")
@click.option("--transport", default=None, help="httpx, aiohttp or requests")
@click.option("--log/--no-log", default=True, help="Log requests and responses")
def fetch(path, method, base_url, query, header, data, bearer, transport, log):
    """Send one request and print the response."""
    settings = RoutingSettings()
    base_url = base_url or settings.base_url
    if not base_url:
        raise click.UsageError("No base URL: pass --base-url or set URL_ROUTING_BASE_URL")

    route = RequestData(
        method=method.upper(),
        path=[segment for segment in path.split("/") if segment],
        query=_pairs(query, "="),
        headers=_pairs(header, ":"),
        body=data.encode("utf-8") if data is not None else None,
    )

    interceptors = []
    if log:
        interceptors.append(LoggingInterceptor())
    if bearer:
        interceptors.append(BearerAuthInterceptor(bearer))

    async def _run():
        client = RoutingClient(
            router=BaseURLRouter(IdentityRouter(), base_url),
            transport=get_transport(transport or settings.transport, timeout=settings.timeout),
            interceptors=interceptors,
            settings=settings,
        )
        try:
            return await client.execute(route)
        finally:
            await client.aclose()

    try:
        response = asyncio.run(_run())
    except URLRoutingError as exc:
        logger.error("Request failed: %s", exc)
        sys.exit(1)

    click.echo(f"{response.status_code} {response.url or ''}".rstrip())
    click.echo(response.text)


if __name__ == "__main__":
    cli()
