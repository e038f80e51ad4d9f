"""Entry point for the sat-denominated rate service.

Wires all components together and serves the FastAPI app with uvicorn.
The ingestion loop and the request handlers share a single asyncio event
loop; FastAPI's lifespan context manager owns component startup and
shutdown.

Component wiring order (in _build_components):
1. PriceDatabase + PriceStore (persistence)
2. RecencyCache (shared in-memory recent prices)
3. CcxtQuoteProvider (live quotes)
4. PriceIngestor (periodic cleanup + ingestion)
5. RateService (request layer)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from satrates.api.app import create_app
from satrates.config import AppSettings
from satrates.data.database import PriceDatabase
from satrates.data.store import PriceStore
from satrates.ingestion import PriceIngestor
from satrates.logging import get_logger, setup_logging
from satrates.quotes.ccxt_provider import CcxtQuoteProvider
from satrates.rates.cache import RecencyCache
from satrates.service import RateService


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all service components from settings.

    Does NOT open the database or connect the provider; that happens in
    the lifespan.
    """
    database = PriceDatabase(settings.store.db_path)
    store = PriceStore(database)
    cache = RecencyCache(ttl_ms=settings.cache.ttl_seconds * 1000)
    provider = CcxtQuoteProvider(settings.quotes)
    ingestor = PriceIngestor(provider, store, cache, settings.ingestion)
    rate_service = RateService(store, cache)

    return {
        "database": database,
        "store": store,
        "cache": cache,
        "provider": provider,
        "ingestor": ingestor,
        "rate_service": rate_service,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage component lifecycle within the FastAPI application.

    On startup: opens the database, registers currencies, seeds the cache
    from the store, connects the quote provider and starts ingestion.

    On shutdown: stops ingestion, closes the provider and the database.
    """
    logger = get_logger("satrates.main")
    settings: AppSettings = app.state.settings
    components = app.state.components

    app.state.cache = components["cache"]
    app.state.rate_service = components["rate_service"]
    app.state.default_limit = settings.api.default_limit

    await components["database"].connect()
    ingestor: PriceIngestor = components["ingestor"]
    await ingestor.register_currencies()

    logger.info("seeding_cache")
    await ingestor.seed_cache()

    if settings.ingestion.enabled:
        # markets load lazily on the first fetch if the exchange is down now
        try:
            await components["provider"].connect()
        except Exception:
            logger.warning("exchange_connect_failed", exc_info=True)
        await ingestor.start()

    logger.info("lifespan_started", port=settings.api.port)

    yield

    await ingestor.stop()
    if settings.ingestion.enabled:
        await components["provider"].close()
    await components["database"].close()

    logger.info("satrates_stopped")


async def run() -> None:
    """Run the API server and the ingestion loop."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("satrates.main")

    components = _build_components(settings)

    app = create_app(lifespan=lifespan)
    app.state.settings = settings
    app.state.components = components

    logger.info(
        "starting_server",
        host=settings.api.host,
        port=settings.api.port,
        exchange=settings.quotes.exchange_id,
        tracked=settings.ingestion.tracked_symbols,
    )

    config = uvicorn.Config(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
