"""Company directory loaders.

The directory is loaded once per session and handed to the controller as an
immutable `CompanyDirectory`.
"""

from typing import Protocol

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from quotedesk.client.http import ApiRequester
from quotedesk.config.settings import DirectoryConfig, DirectorySource
from quotedesk.core.config import Settings
from quotedesk.core.domain_models import CompanyDirectory, CompanyListing
from quotedesk.core.exceptions import MalformedResponseError

_LISTINGS_ADAPTER = TypeAdapter(list[CompanyListing])


class DirectoryLoader(Protocol):
    async def load(self) -> CompanyDirectory: ...


class CompanyDirectoryLoader:
    """Loads the most active companies from the IEX Cloud market list."""

    def __init__(self, requester: ApiRequester, settings: Settings) -> None:
        self.requester = requester
        self.settings = settings

    @property
    def url(self) -> str:
        return f"{self.settings.api_base_url}/stock/market/list/mostactive"

    async def load(self) -> CompanyDirectory:
        """
        Fetch and parse the most-active list.

        Returns:
            Directory of company name -> symbol in response order

        Raises:
            NetworkError: Request failed, timed out, non-200 or empty body
            MalformedResponseError: Body is not a JSON array of
                `{companyName: str, symbol: str}` objects
        """
        logger.info(f"Loading company directory (limit {self.settings.list_limit})")
        body = await self.requester.get_bytes(
            self.url,
            params={"listLimit": self.settings.list_limit, "token": self.settings.api_token},
        )

        try:
            listings = _LISTINGS_ADAPTER.validate_json(body)
        except ValidationError as e:
            logger.error(f"Malformed company list: {e.error_count()} validation error(s)")
            raise MalformedResponseError(f"Malformed company list: {e}") from e

        directory = CompanyDirectory.from_listings(listings)
        logger.success(f"Loaded {len(directory)} companies")
        return directory


class StaticDirectoryLoader:
    """Serves a fixed directory taken from configuration."""

    def __init__(self, companies: dict[str, str]) -> None:
        self.companies = companies

    async def load(self) -> CompanyDirectory:
        directory = CompanyDirectory.from_pairs(self.companies.items())
        logger.info(f"Using static company directory with {len(directory)} companies")
        return directory


def build_directory_loader(
    config: DirectoryConfig,
    requester: ApiRequester,
    settings: Settings,
) -> DirectoryLoader:
    """Pick the loader named by `directory.source`."""
    if config.source == DirectorySource.STATIC:
        return StaticDirectoryLoader(config.companies)
    return CompanyDirectoryLoader(requester, settings)
