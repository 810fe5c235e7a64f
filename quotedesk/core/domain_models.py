from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class ChangeTrend(str, Enum):
    """Direction of the latest price change."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @classmethod
    def from_change(cls, change: float) -> "ChangeTrend":
        if change > 0:
            return cls.POSITIVE
        if change < 0:
            return cls.NEGATIVE
        return cls.NEUTRAL


# --- Wire Models ---


class CompanyListing(BaseModel):
    """One element of the most-active companies list."""

    model_config = ConfigDict(strict=True, frozen=True)

    company_name: str = Field(alias="companyName")
    symbol: str


# --- Domain Models ---


class Quote(BaseModel):
    """
    Snapshot of a security's latest traded price and price change.

    Validation is strict: names must be JSON strings and prices JSON numbers.
    Integers are accepted as numbers, booleans and numeric strings are not.
    """

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    company_name: str = Field(alias="companyName")
    symbol: str
    latest_price: float = Field(alias="latestPrice")
    change: float

    @property
    def trend(self) -> ChangeTrend:
        return ChangeTrend.from_change(self.change)


class QuoteEnvelope(BaseModel):
    """Response body of the batch endpoint with `types=quote`."""

    model_config = ConfigDict(strict=True, frozen=True)

    quote: Quote


@dataclass(frozen=True)
class CompanyDirectory:
    """
    Immutable company name -> ticker symbol directory.

    `names` keeps the order in which names first appeared; `symbols` is a
    read-only lookup. Index based selection goes through `names` only.
    """

    names: tuple[str, ...] = ()
    symbols: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "CompanyDirectory":
        """Insert pairs in order. Duplicate names keep their first position, last symbol wins."""
        entries: dict[str, str] = {}
        for name, symbol in pairs:
            entries[name] = symbol
        return cls(names=tuple(entries), symbols=MappingProxyType(entries))

    @classmethod
    def from_listings(cls, listings: Iterable[CompanyListing]) -> "CompanyDirectory":
        return cls.from_pairs((item.company_name, item.symbol) for item in listings)

    def symbol_for(self, name: str) -> str:
        return self.symbols[name]

    def symbol_at(self, index: int) -> str:
        return self.symbols[self.names[index]]

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.symbols

    @property
    def is_empty(self) -> bool:
        return not self.names
