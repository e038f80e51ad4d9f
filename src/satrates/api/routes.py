"""JSON endpoints for sat-denominated prices and cross-rates.

Query parameters shared by both price endpoints:
  limit: maximum number of price points to return (default 10).
  offset: number of price points to skip (default 0).
  startDate: only return prices strictly newer than this many milliseconds
             since the Unix epoch. Applied before limit and offset.
  sortOrder: "asc" (default) or "desc".
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from satrates.service import PriceQuery

router = APIRouter()


def _query_from_request(request: Request) -> PriceQuery:
    return PriceQuery.from_params(
        request.query_params,
        default_limit=request.app.state.default_limit,
    )


@router.get("/priceInSats/{symbol}")
async def get_price_in_sats(request: Request, symbol: str) -> JSONResponse:
    """Price of ``symbol`` in satoshis: [{"priceSats": float, "date": ms}]."""
    query = _query_from_request(request)
    prices = await request.app.state.rate_service.get_prices_in_sats(symbol, query)
    return JSONResponse(content=[p.to_json() for p in prices])


@router.get("/price/{base_symbol}/{priced_symbol}")
async def get_price(
    request: Request, base_symbol: str, priced_symbol: str
) -> JSONResponse:
    """Price of ``priced_symbol`` in units of ``base_symbol``: [{"price": float, "date": ms}].

    Bitcoin is not accepted on either side; use /priceInSats for it.
    """
    query = _query_from_request(request)
    rates = await request.app.state.rate_service.get_cross_rate(
        base_symbol, priced_symbol, query
    )
    return JSONResponse(content=[r.to_json() for r in rates])


@router.get("/health")
async def health(request: Request) -> JSONResponse:
    """Cache occupancy for liveness checks."""
    cache = request.app.state.cache
    return JSONResponse(
        content={
            "status": "ok",
            "cached_symbols": await cache.symbols(),
            "cached_samples": len(cache),
        }
    )
