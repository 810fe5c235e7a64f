"""Display state for the quote panel.

Pure Python view model: what the labels, change color, logo and busy
indicator should show. No Streamlit calls.
"""

from pydantic import BaseModel, ConfigDict

from quotedesk.core.domain_models import ChangeTrend, Quote

PLACEHOLDER = "-"


def format_number(value: float) -> str:
    """Default string form of a float, e.g. 150.25, -1.5, 0.0."""
    return str(float(value))


class DisplayError(BaseModel):
    """Error prompt shown to the user.

    `fatal` errors block the app until the user retries or exits;
    the others can be dismissed.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    fatal: bool = False


class QuoteDisplay(BaseModel):
    """Immutable snapshot of everything the quote panel renders."""

    model_config = ConfigDict(frozen=True)

    company_name: str = PLACEHOLDER
    symbol: str = PLACEHOLDER
    price: str = PLACEHOLDER
    change: str = PLACEHOLDER
    trend: ChangeTrend = ChangeTrend.NEUTRAL
    logo: bytes | None = None
    busy: bool = False
    error: DisplayError | None = None

    @classmethod
    def loading(cls) -> "QuoteDisplay":
        """Placeholder texts, no logo, neutral color, busy indicator on."""
        return cls(busy=True)

    def with_quote(self, quote: Quote) -> "QuoteDisplay":
        return self.model_copy(
            update={
                "company_name": quote.company_name,
                "symbol": quote.symbol,
                "price": format_number(quote.latest_price),
                "change": format_number(quote.change),
                "trend": quote.trend,
                "busy": False,
            }
        )

    def with_logo(self, logo: bytes) -> "QuoteDisplay":
        return self.model_copy(update={"logo": logo})

    def with_error(self, error: DisplayError) -> "QuoteDisplay":
        return self.model_copy(update={"error": error, "busy": False})

    def without_error(self) -> "QuoteDisplay":
        return self.model_copy(update={"error": None})
