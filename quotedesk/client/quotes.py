"""Quote and logo fetching for a single ticker symbol."""

from loguru import logger
from pydantic import ValidationError

from quotedesk.client.http import ApiRequester
from quotedesk.core.config import Settings
from quotedesk.core.domain_models import Quote, QuoteEnvelope
from quotedesk.core.exceptions import MalformedResponseError


class QuoteFetcher:
    """Fetches latest quotes and company logos. Both operations are read-only."""

    def __init__(self, requester: ApiRequester, settings: Settings) -> None:
        self.requester = requester
        self.settings = settings

    def quote_url(self, symbol: str) -> str:
        # The batch endpoint is addressed by the lower-cased symbol
        return f"{self.settings.api_base_url}/stock/{symbol.lower()}/batch"

    def logo_url(self, symbol: str) -> str:
        # Logo file names are case sensitive
        return f"{self.settings.logo_base_url}/{symbol}.png"

    async def fetch_quote(self, symbol: str) -> Quote:
        """
        Fetch the latest quote for a symbol.

        Args:
            symbol: Ticker symbol in any casing (e.g., "AAPL", "aapl")

        Returns:
            Parsed `Quote`

        Raises:
            NetworkError: Request failed, timed out, non-200 or empty body
            MalformedResponseError: Invalid JSON or missing / mistyped quote field
        """
        logger.info(f"[{symbol}] Fetching quote")
        body = await self.requester.get_bytes(
            self.quote_url(symbol),
            params={"types": "quote", "token": self.settings.api_token},
        )

        try:
            envelope = QuoteEnvelope.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"[{symbol}] Invalid quote payload: {e.error_count()} validation error(s)")
            raise MalformedResponseError(f"Invalid quote payload for {symbol}: {e}") from e

        quote = envelope.quote
        logger.success(f"[{symbol}] {quote.company_name}: {quote.latest_price} ({quote.change})")
        return quote

    async def fetch_logo(self, symbol: str) -> bytes:
        """
        Fetch the PNG logo for a symbol, preserving its casing.

        Raises:
            NetworkError: Request failed, timed out, non-200 or empty body
        """
        logger.info(f"[{symbol}] Fetching logo")
        image = await self.requester.get_bytes(self.logo_url(symbol))
        logger.success(f"[{symbol}] Fetched logo ({len(image)} bytes)")
        return image
