"""Request layer: query validation and cache read-through for price series.

Serves sat-denominated series and cross-rates for the HTTP API. When a
request's startDate is already covered by the recency cache the store is
skipped; otherwise the page is read from the price store.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from satrates.data.store import PriceStore
from satrates.exceptions import InvalidQueryError, UnsupportedCurrencyError
from satrates.logging import get_logger
from satrates.models import BASE_SYMBOL, BasePriceSample, CrossRateSample, SortOrder
from satrates.rates.cache import RecencyCache
from satrates.rates.cross_rate import compute_cross_rate

logger = get_logger(__name__)

DEFAULT_LIMIT = 10

_INTEGER_RE = re.compile(r"(-?[0-9]+)(?:\.0+)?")


def _parse_int(raw: str | None, name: str) -> int | None:
    """Parse an integer query parameter; "5" and "5.0" are accepted, "5.5" is not."""
    if raw is None or raw == "":
        return None
    match = _INTEGER_RE.fullmatch(raw)
    if match is None:
        raise InvalidQueryError(f"{name} must be an integer.")
    return int(match.group(1))


@dataclass(frozen=True)
class PriceQuery:
    """Pagination and filtering for a price series request.

    since_ms keeps only samples strictly newer than it and is applied
    before offset and limit.
    """

    limit: int = DEFAULT_LIMIT
    offset: int = 0
    since_ms: int | None = None
    sort_order: SortOrder = SortOrder.ASC

    @classmethod
    def from_params(
        cls, params: Mapping[str, str], default_limit: int = DEFAULT_LIMIT
    ) -> "PriceQuery":
        """Validate raw query-string parameters.

        Recognized keys: limit, offset, startDate (ms since the Unix epoch)
        and sortOrder ("asc" or "desc").

        Raises:
            InvalidQueryError: If any parameter is malformed or negative.
        """
        limit = _parse_int(params.get("limit"), "Limit")
        if limit is None:
            limit = default_limit
        if limit < 0:
            raise InvalidQueryError("Limit cannot be negative.")

        offset = _parse_int(params.get("offset"), "Offset") or 0
        if offset < 0:
            raise InvalidQueryError("Offset cannot be negative.")

        try:
            since_ms = _parse_int(params.get("startDate"), "Start date")
        except InvalidQueryError:
            raise InvalidQueryError(
                "Start date must be an integer (representing milliseconds "
                "since the unix epoch)."
            ) from None
        if since_ms is not None and since_ms < 0:
            raise InvalidQueryError("Start date cannot be negative.")

        raw_order = params.get("sortOrder") or SortOrder.ASC.value
        try:
            sort_order = SortOrder(raw_order)
        except ValueError:
            raise InvalidQueryError('Sort order must be either "asc" or "desc".') from None

        return cls(limit=limit, offset=offset, since_ms=since_ms, sort_order=sort_order)


class RateService:
    """Serves price series and cross-rates from the cache or the store.

    Args:
        store: Persistent price store.
        cache: Shared recency cache fed by the ingestion task.
    """

    def __init__(self, store: PriceStore, cache: RecencyCache) -> None:
        self._store = store
        self._cache = cache

    async def get_prices_in_sats(
        self, symbol: str, query: PriceQuery
    ) -> list[BasePriceSample]:
        """Return a page of sat prices for a symbol."""
        if query.since_ms is not None:
            cached = await self._cache.get_covering(symbol, query.since_ms)
            if cached is not None:
                logger.debug(
                    "using_cached_prices", symbol=symbol, since_ms=query.since_ms
                )
                return self._paginate(cached, query)

        return await self._store.get_prices(
            symbol,
            since_ms=query.since_ms,
            sort_order=query.sort_order,
            limit=query.limit,
            offset=query.offset,
        )

    async def get_cross_rate(
        self, base_symbol: str, priced_symbol: str, query: PriceQuery
    ) -> list[CrossRateSample]:
        """Return the price of ``priced_symbol`` measured in ``base_symbol``.

        Both series are fetched with the same query, interpolated at the
        union of their timestamps and divided.

        Raises:
            UnsupportedCurrencyError: If either side is the pivot currency.
        """
        for symbol in (base_symbol, priced_symbol):
            if symbol == BASE_SYMBOL:
                raise UnsupportedCurrencyError(
                    f"{BASE_SYMBOL} cannot be used here; use /priceInSats/{{symbol}} instead."
                )

        base_prices = await self.get_prices_in_sats(base_symbol, query)
        priced_prices = await self.get_prices_in_sats(priced_symbol, query)

        rates = compute_cross_rate(priced_prices, base_prices)
        if query.sort_order is SortOrder.DESC:
            rates.reverse()
        return rates

    @staticmethod
    def _paginate(
        samples: list[BasePriceSample], query: PriceQuery
    ) -> list[BasePriceSample]:
        """Apply sort order, offset and limit to ascending cached samples."""
        if query.sort_order is SortOrder.DESC:
            samples = samples[::-1]
        return samples[query.offset : query.offset + query.limit]
