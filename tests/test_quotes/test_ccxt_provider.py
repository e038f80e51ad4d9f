"""Tests for CcxtQuoteProvider.

All tests use mocked ccxt exchange methods to avoid real API calls.
"""

from unittest.mock import AsyncMock

import pytest

from satrates.config import QuoteSettings
from satrates.exceptions import QuoteUnavailableError
from satrates.models import BasePriceSample
from satrates.quotes.ccxt_provider import CcxtQuoteProvider

MOCK_MARKETS = {
    "BTC/USD": {"symbol": "BTC/USD", "base": "BTC", "quote": "USD"},
    "BTC/EUR": {"symbol": "BTC/EUR", "base": "BTC", "quote": "EUR"},
    "ETH/BTC": {"symbol": "ETH/BTC", "base": "ETH", "quote": "BTC"},
}


@pytest.fixture
def provider() -> CcxtQuoteProvider:
    """Provider with mocked markets pre-loaded."""
    p = CcxtQuoteProvider(QuoteSettings(exchange_id="kraken"))
    p._markets = MOCK_MARKETS
    return p


class TestConstruction:
    """Tests for exchange selection."""

    def test_unknown_exchange_rejected(self) -> None:
        with pytest.raises(ValueError):
            CcxtQuoteProvider(QuoteSettings(exchange_id="not_a_real_exchange"))

    @pytest.mark.asyncio
    async def test_connect_loads_markets(self) -> None:
        p = CcxtQuoteProvider(QuoteSettings(exchange_id="kraken"))
        p._exchange.load_markets = AsyncMock(return_value=MOCK_MARKETS)
        await p.connect()
        p._exchange.load_markets.assert_awaited_once()
        p._exchange.close = AsyncMock()
        await p.close()
        p._exchange.close.assert_awaited_once()


class TestFetchPriceInSats:
    """Tests for market resolution and sat conversion."""

    @pytest.mark.asyncio
    async def test_btc_quoted_market_is_inverted(
        self, provider: CcxtQuoteProvider
    ) -> None:
        provider._exchange.fetch_ticker = AsyncMock(
            return_value={"last": 50_000.0, "timestamp": 1_700_000_000_000}
        )

        result = await provider.fetch_price_in_sats("USD")

        assert result == BasePriceSample(timestamp_ms=1_700_000_000_000, price_sats=2000.0)
        provider._exchange.fetch_ticker.assert_awaited_once_with("BTC/USD")

    @pytest.mark.asyncio
    async def test_btc_base_market_is_multiplied(
        self, provider: CcxtQuoteProvider
    ) -> None:
        provider._exchange.fetch_ticker = AsyncMock(
            return_value={"last": 0.05, "timestamp": 1_700_000_000_000}
        )

        result = await provider.fetch_price_in_sats("ETH")

        assert result.price_sats == pytest.approx(5_000_000.0)
        provider._exchange.fetch_ticker.assert_awaited_once_with("ETH/BTC")

    @pytest.mark.asyncio
    async def test_missing_timestamp_uses_now(
        self, provider: CcxtQuoteProvider
    ) -> None:
        provider._exchange.fetch_ticker = AsyncMock(
            return_value={"last": 40_000.0, "timestamp": None}
        )
        result = await provider.fetch_price_in_sats("EUR")
        assert result.timestamp_ms > 1_700_000_000_000

    @pytest.mark.asyncio
    async def test_unknown_market_raises(self, provider: CcxtQuoteProvider) -> None:
        with pytest.raises(QuoteUnavailableError):
            await provider.fetch_price_in_sats("XRP")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("last", [None, 0, -1.0])
    async def test_unusable_price_raises(
        self, provider: CcxtQuoteProvider, last
    ) -> None:
        provider._exchange.fetch_ticker = AsyncMock(
            return_value={"last": last, "timestamp": 1}
        )
        with pytest.raises(QuoteUnavailableError):
            await provider.fetch_price_in_sats("USD")

    @pytest.mark.asyncio
    async def test_loads_markets_lazily(self) -> None:
        p = CcxtQuoteProvider(QuoteSettings(exchange_id="kraken"))
        p._exchange.load_markets = AsyncMock(return_value=MOCK_MARKETS)
        p._exchange.fetch_ticker = AsyncMock(return_value={"last": 25_000.0, "timestamp": 5})

        result = await p.fetch_price_in_sats("USD")

        p._exchange.load_markets.assert_awaited_once()
        assert result.price_sats == 4000.0
