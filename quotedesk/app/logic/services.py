"""Construction of the API services shared by the dashboard and the CLI."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from loguru import logger

from quotedesk.client.directory import DirectoryLoader, build_directory_loader
from quotedesk.client.http import ApiRequester, build_http_client
from quotedesk.client.quotes import QuoteFetcher
from quotedesk.config.settings import Config
from quotedesk.core.config import Settings


@dataclass
class Services:
    """Container for the directory loader and quote fetcher."""

    directory_loader: DirectoryLoader
    fetcher: QuoteFetcher


@asynccontextmanager
async def open_services(
    settings: Settings,
    config: Config,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[Services]:
    """Open one HTTP client and build the services on top of it.

    Args:
        settings: Environment settings (endpoints, token, timeout)
        config: YAML configuration (directory source)
        transport: Optional httpx transport override

    Yields:
        Ready-to-use services; the HTTP client is closed on exit
    """
    if not settings.api_token:
        logger.warning("QUOTEDESK_API_TOKEN is not set; IEX Cloud will reject requests")

    async with build_http_client(settings, transport=transport) as client:
        requester = ApiRequester(client, timeout=settings.request_timeout)
        yield Services(
            directory_loader=build_directory_loader(config.directory, requester, settings),
            fetcher=QuoteFetcher(requester, settings),
        )
