"""Shared in-memory recency cache of sat-denominated price samples.

Keeps, per currency symbol, the samples from the last TTL window (24h by
default) in ascending timestamp order so that recent-history requests can be
answered without touching the price store. The ingestion task inserts and
sweeps; request handlers read. All access is serialized through one
asyncio.Lock per cache instance.

Reads return copies: a list handed to a caller is never mutated by a later
insert or cleanup.
"""

import asyncio
import bisect
import time
from collections.abc import Callable

from satrates.logging import get_logger
from satrates.models import BasePriceSample

logger = get_logger(__name__)

DEFAULT_TTL_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class RecencyCache:
    """Time-ordered, deduplicated, TTL-bounded price samples keyed by symbol.

    Args:
        ttl_ms: Maximum sample age in milliseconds, measured from "now" at
            insert and cleanup time.
        clock: Returns the current time in Unix milliseconds.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._series: dict[str, list[BasePriceSample]] = {}
        self._lock = asyncio.Lock()

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def now_ms(self) -> int:
        """Current time according to the cache clock."""
        return self._clock()

    def _is_expired(self, sample: BasePriceSample, now_ms: int) -> bool:
        return now_ms - sample.timestamp_ms > self._ttl_ms

    async def insert(self, symbol: str, sample: BasePriceSample) -> bool:
        """Add a sample at its sorted position.

        Stale samples (older than the TTL) and samples whose timestamp is
        already cached for the symbol are ignored.

        Returns:
            True if the sample was stored, False if it was ignored.
        """
        async with self._lock:
            if self._is_expired(sample, self._clock()):
                return False

            series = self._series.setdefault(symbol, [])
            timestamps = [s.timestamp_ms for s in series]
            idx = bisect.bisect_left(timestamps, sample.timestamp_ms)
            if idx < len(series) and timestamps[idx] == sample.timestamp_ms:
                return False

            series.insert(idx, sample)
            return True

    async def get(self, symbol: str) -> list[BasePriceSample] | None:
        """Return a snapshot of the cached samples for a symbol, or None if absent."""
        async with self._lock:
            series = self._series.get(symbol)
            return list(series) if series else None

    async def get_covering(
        self, symbol: str, since_ms: int
    ) -> list[BasePriceSample] | None:
        """Return cached samples newer than ``since_ms`` if the cache reaches back past it.

        The cache is considered to cover the request when its oldest sample
        for the symbol is strictly older than ``since_ms``. Gaps inside the
        cached window (e.g. from an ingestion outage) are not detected.

        Returns:
            Samples with timestamp > since_ms in ascending order, or None when
            the caller must fall back to the price store.
        """
        async with self._lock:
            series = self._series.get(symbol)
            if not series or series[0].timestamp_ms >= since_ms:
                return None
            timestamps = [s.timestamp_ms for s in series]
            return series[bisect.bisect_right(timestamps, since_ms):]

    async def cleanup(self) -> int:
        """Drop samples older than the TTL and remove symbols left empty.

        Returns:
            Number of samples removed.
        """
        async with self._lock:
            now_ms = self._clock()
            removed = 0
            for symbol in list(self._series):
                series = self._series[symbol]
                kept = [s for s in series if not self._is_expired(s, now_ms)]
                removed += len(series) - len(kept)
                if kept:
                    self._series[symbol] = kept
                else:
                    del self._series[symbol]

        if removed:
            logger.debug("cache_expired_samples_removed", removed=removed)
        return removed

    async def symbols(self) -> list[str]:
        """Return the symbols that currently have cached samples."""
        async with self._lock:
            return sorted(self._series)

    def __len__(self) -> int:
        return sum(len(series) for series in self._series.values())
