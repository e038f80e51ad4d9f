"""Shared test fixtures for the sat rate service."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from factories import FakeClock
from satrates.config import AppSettings, CacheSettings, IngestionSettings, StoreSettings
from satrates.data.database import PriceDatabase
from satrates.data.store import PriceStore
from satrates.rates.cache import RecencyCache


@pytest.fixture
def mock_settings(tmp_path) -> AppSettings:
    """Return AppSettings with test defaults (temp database, two tracked symbols)."""
    return AppSettings(
        log_level="DEBUG",
        cache=CacheSettings(ttl_seconds=24 * 60 * 60),
        ingestion=IngestionSettings(interval=1, tracked_symbols=["USD", "ETH"]),
        store=StoreSettings(db_path=str(tmp_path / "prices.db")),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> RecencyCache:
    """Fresh RecencyCache driven by the fake clock."""
    return RecencyCache(clock=clock)


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[PriceDatabase]:
    """Connected PriceDatabase in a temporary directory."""
    async with PriceDatabase(str(tmp_path / "prices.db")) as db:
        yield db


@pytest_asyncio.fixture
async def store(database: PriceDatabase) -> PriceStore:
    return PriceStore(database)
