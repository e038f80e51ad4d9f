"""Quote provider backed by any ccxt async exchange.

A currency X is priced from the BTC/X market when the exchange lists it
(the last price is BTC expressed in X, so sats = 1e8 / last), otherwise
from the X/BTC market (sats = last * 1e8).
"""

import time

import ccxt.async_support as ccxt_async

from satrates.config import QuoteSettings
from satrates.exceptions import QuoteUnavailableError
from satrates.logging import get_logger
from satrates.models import BASE_SYMBOL, SATS_PER_BTC, BasePriceSample
from satrates.quotes.provider import QuoteProvider

logger = get_logger(__name__)


class CcxtQuoteProvider(QuoteProvider):
    """Concrete quote provider using ccxt async public ticker endpoints."""

    def __init__(self, settings: QuoteSettings) -> None:
        self._settings = settings

        exchange_class = getattr(ccxt_async, settings.exchange_id, None)
        if exchange_class is None:
            raise ValueError(f"Unknown ccxt exchange: {settings.exchange_id}")

        config: dict = {
            "enableRateLimit": True,
            "timeout": settings.timeout_ms,
        }
        api_key = settings.api_key.get_secret_value()
        if api_key:
            config["apiKey"] = api_key
            config["secret"] = settings.api_secret.get_secret_value()

        self._exchange = exchange_class(config)
        self._markets: dict = {}

    @property
    def exchange(self) -> ccxt_async.Exchange:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        """Initialize connection by loading markets."""
        logger.info("connecting_to_exchange", exchange=self._settings.exchange_id)
        self._markets = await self._exchange.load_markets()
        logger.info(
            "exchange_connected",
            exchange=self._settings.exchange_id,
            market_count=len(self._markets),
        )

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid leaking sessions."""
        await self._exchange.close()
        logger.info("exchange_connection_closed", exchange=self._settings.exchange_id)

    def _resolve_market(self, symbol: str) -> tuple[str, bool]:
        """Pick the market to price ``symbol`` from.

        Returns:
            (market symbol, inverted) where inverted is True for BTC/X markets.
        """
        direct = f"{BASE_SYMBOL}/{symbol}"
        if direct in self._markets:
            return direct, True
        reverse = f"{symbol}/{BASE_SYMBOL}"
        if reverse in self._markets:
            return reverse, False
        raise QuoteUnavailableError(
            f"No {direct} or {reverse} market on {self._settings.exchange_id}"
        )

    async def fetch_price_in_sats(self, symbol: str) -> BasePriceSample:
        if not self._markets:
            await self.connect()

        market, inverted = self._resolve_market(symbol)
        ticker = await self._exchange.fetch_ticker(market)

        last = ticker.get("last")
        if last is None or last <= 0:
            raise QuoteUnavailableError(f"No usable last price for {market}: {last}")

        price_sats = SATS_PER_BTC / last if inverted else last * SATS_PER_BTC
        timestamp_ms = ticker.get("timestamp") or int(time.time() * 1000)

        logger.debug(
            "quote_fetched",
            symbol=symbol,
            market=market,
            price_sats=price_sats,
            timestamp_ms=timestamp_ms,
        )
        return BasePriceSample(timestamp_ms=int(timestamp_ms), price_sats=float(price_sats))
