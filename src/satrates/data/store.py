"""Typed SQLite read/write abstraction for sat-denominated price history.

Provides PriceStore with typed methods for registering currencies, inserting
price samples and range-querying them. All SQL is isolated behind this
interface.
"""

from satrates.data.database import PriceDatabase
from satrates.logging import get_logger
from satrates.models import BasePriceSample, Currency, SortOrder

logger = get_logger(__name__)


class PriceStore:
    """Async SQLite store for tracked currencies and their sat prices.

    Usage:
        async with PriceDatabase("data/prices.db") as database:
            store = PriceStore(database)
            await store.insert_price("USD", sample)
    """

    def __init__(self, database: PriceDatabase) -> None:
        self._database = database

    # ──────────────────────────────────────────────
    # Write methods
    # ──────────────────────────────────────────────

    async def upsert_currency(self, currency: Currency) -> None:
        """Insert a currency, or update its name if the symbol already exists."""
        await self._database.db.execute(
            "INSERT INTO currencies (symbol, name) VALUES (?, ?) "
            "ON CONFLICT(symbol) DO UPDATE SET name = excluded.name",
            (currency.symbol, currency.name),
        )
        await self._database.db.commit()

    async def insert_price(self, symbol: str, sample: BasePriceSample) -> bool:
        """Insert a price sample, ignoring duplicates via INSERT OR IGNORE.

        Returns True if a row was written, False if the (symbol, timestamp)
        pair already existed.
        """
        cursor = await self._database.db.execute(
            "INSERT OR IGNORE INTO prices (symbol, timestamp_ms, price_sats) "
            "VALUES (?, ?, ?)",
            (symbol, sample.timestamp_ms, sample.price_sats),
        )
        await self._database.db.commit()

        inserted = cursor.rowcount > 0
        logger.debug(
            "inserted_price",
            symbol=symbol,
            timestamp_ms=sample.timestamp_ms,
            inserted=inserted,
        )
        return inserted

    # ──────────────────────────────────────────────
    # Read methods
    # ──────────────────────────────────────────────

    async def get_prices(
        self,
        symbol: str,
        since_ms: int | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        limit: int = 10,
        offset: int = 0,
    ) -> list[BasePriceSample]:
        """Query a page of price samples for a symbol.

        The since_ms filter (strictly newer than) is applied before
        limit and offset.
        """
        conditions = ["symbol = ?"]
        params: list = [symbol]

        if since_ms is not None:
            conditions.append("timestamp_ms > ?")
            params.append(since_ms)

        where = " AND ".join(conditions)
        direction = "DESC" if SortOrder(sort_order) is SortOrder.DESC else "ASC"
        params.extend([limit, offset])

        cursor = await self._database.db.execute(
            f"SELECT timestamp_ms, price_sats FROM prices WHERE {where} "
            f"ORDER BY timestamp_ms {direction} LIMIT ? OFFSET ?",
            params,
        )
        rows = await cursor.fetchall()
        return [BasePriceSample(timestamp_ms=row[0], price_sats=row[1]) for row in rows]

    async def get_recent_prices(
        self, symbol: str, since_ms: int
    ) -> list[BasePriceSample]:
        """Return every sample for a symbol newer than since_ms, ascending.

        Used to seed the recency cache on startup.
        """
        cursor = await self._database.db.execute(
            "SELECT timestamp_ms, price_sats FROM prices "
            "WHERE symbol = ? AND timestamp_ms > ? ORDER BY timestamp_ms ASC",
            (symbol, since_ms),
        )
        rows = await cursor.fetchall()
        return [BasePriceSample(timestamp_ms=row[0], price_sats=row[1]) for row in rows]

    async def get_currencies(self) -> list[Currency]:
        """Return all registered currencies ordered by symbol."""
        cursor = await self._database.db.execute(
            "SELECT symbol, name FROM currencies ORDER BY symbol"
        )
        rows = await cursor.fetchall()
        return [Currency(symbol=row[0], name=row[1]) for row in rows]
