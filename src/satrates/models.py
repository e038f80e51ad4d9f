"""Shared data models for sat-denominated price series.

Prices are floats expressed in satoshis (1 BTC = 100_000_000 sats).
Timestamps are Unix milliseconds throughout.
"""

from dataclasses import dataclass
from enum import Enum

SATS_PER_BTC = 100_000_000

#: The pivot currency. Every tracked price is expressed in its smallest unit.
BASE_SYMBOL = "BTC"


class SortOrder(str, Enum):
    """Ordering of a returned price series by timestamp."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Currency:
    """A tracked currency (crypto or fiat)."""

    symbol: str
    name: str


@dataclass(frozen=True)
class BasePriceSample:
    """Price of one unit of a currency in satoshis at a point in time."""

    timestamp_ms: int
    price_sats: float

    def to_json(self) -> dict:
        return {"priceSats": self.price_sats, "date": self.timestamp_ms}


@dataclass(frozen=True)
class CrossRateSample:
    """Price of the priced currency measured in units of the comparison currency."""

    timestamp_ms: int
    ratio: float

    def to_json(self) -> dict:
        return {"price": self.ratio, "date": self.timestamp_ms}


KNOWN_CURRENCIES: dict[str, Currency] = {
    c.symbol: c
    for c in (
        Currency("USD", "United States Dollar"),
        Currency("EUR", "Euro"),
        Currency("ETH", "Ethereum"),
        Currency("LTC", "Litecoin"),
        Currency("BCH", "Bitcoin Cash"),
        Currency("XRP", "Ripple"),
        Currency("BNB", "Binance Coin"),
    )
}


def currency_for(symbol: str) -> Currency:
    """Return the Currency for a symbol, using the symbol as name when unknown."""
    return KNOWN_CURRENCIES.get(symbol, Currency(symbol, symbol))
