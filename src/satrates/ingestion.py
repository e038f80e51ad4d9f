"""Periodic price ingestion into the recency cache and the price store.

Every cycle sweeps expired samples out of the cache, then fetches one fresh
sat quote per tracked currency and records it in both the cache and the
store. A failing currency is logged and skipped; it never aborts the cycle
or touches what is already cached for other currencies.
"""

import asyncio

from satrates.config import IngestionSettings
from satrates.data.store import PriceStore
from satrates.logging import get_logger
from satrates.models import currency_for
from satrates.quotes.provider import QuoteProvider
from satrates.rates.cache import RecencyCache

logger = get_logger(__name__)


class PriceIngestor:
    """Fetches live sat prices on a fixed interval and persists them.

    Usage:
        ingestor = PriceIngestor(provider, store, cache, settings.ingestion)
        await ingestor.register_currencies()
        await ingestor.seed_cache()
        await ingestor.start()
    """

    def __init__(
        self,
        provider: QuoteProvider,
        store: PriceStore,
        cache: RecencyCache,
        settings: IngestionSettings,
    ) -> None:
        self._provider = provider
        self._store = store
        self._cache = cache
        self._settings = settings
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def symbols(self) -> list[str]:
        return list(self._settings.tracked_symbols)

    async def register_currencies(self) -> None:
        """Create or rename the store rows for every tracked currency."""
        for symbol in self.symbols:
            await self._store.upsert_currency(currency_for(symbol))
        logger.info("currencies_registered", count=len(self.symbols))

    async def seed_cache(self, now_ms: int | None = None) -> int:
        """Load the last TTL window of stored prices into the cache.

        Returns the number of samples cached.
        """
        if now_ms is None:
            now_ms = self._cache.now_ms()
        since_ms = now_ms - self._cache.ttl_ms

        seeded = 0
        for symbol in self.symbols:
            for sample in await self._store.get_recent_prices(symbol, since_ms):
                if await self._cache.insert(symbol, sample):
                    seeded += 1

        logger.info("cache_seeded", symbols=len(self.symbols), samples=seeded)
        return seeded

    async def ingest_once(self) -> int:
        """Fetch and record one quote per tracked currency.

        Returns the number of currencies ingested successfully.
        """
        ingested = 0
        for symbol in self.symbols:
            try:
                sample = await self._provider.fetch_price_in_sats(symbol)
                await self._store.insert_price(symbol, sample)
                await self._cache.insert(symbol, sample)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("ingestion_failed", symbol=symbol, exc_info=True)
                continue
            ingested += 1

        logger.info(
            "ingestion_cycle_complete",
            ingested=ingested,
            failed=len(self.symbols) - ingested,
        )
        return ingested

    async def run_cycle(self) -> None:
        """One tick of the background loop: cache cleanup, then ingestion."""
        removed = await self._cache.cleanup()
        logger.debug("cache_cleaned", removed=removed, cached_samples=len(self._cache))
        await self.ingest_once()

    async def start(self) -> None:
        """Begin ingesting in the background."""
        if self._running:
            logger.warning("ingestor_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("ingestor_started", interval=self._settings.interval)

    async def stop(self) -> None:
        """Stop the ingestion loop gracefully."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("ingestor_stopped")

    async def _run_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._settings.interval)
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.error("ingestion_cycle_error", exc_info=True)
