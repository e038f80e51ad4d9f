"""Tests for the HTTP API using FastAPI's TestClient.

The rate service is backed by a mocked store and an empty cache, so every
request exercises validation, the store path and JSON serialization.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from factories import sample
from satrates.api.app import create_app
from satrates.data.store import PriceStore
from satrates.models import SortOrder
from satrates.rates.cache import RecencyCache
from satrates.service import RateService

USD = [sample(1_000, 2000.0), sample(3_000, 2200.0)]
EUR = [sample(2_000, 1800.0)]


@pytest.fixture
def mock_store() -> AsyncMock:
    store = AsyncMock(spec=PriceStore)
    store.get_prices = AsyncMock(
        side_effect=lambda symbol, **_: {"USD": USD, "EUR": EUR}.get(symbol, [])
    )
    return store


@pytest.fixture
def client(mock_store: AsyncMock) -> TestClient:
    app = create_app()
    cache = RecencyCache()
    app.state.cache = cache
    app.state.rate_service = RateService(mock_store, cache)
    return TestClient(app)


class TestPriceInSats:
    """GET /priceInSats/{symbol}"""

    def test_returns_samples_as_json(self, client: TestClient) -> None:
        response = client.get("/priceInSats/USD")

        assert response.status_code == 200
        assert response.json() == [
            {"priceSats": 2000.0, "date": 1_000},
            {"priceSats": 2200.0, "date": 3_000},
        ]

    def test_passes_query_to_store(
        self, client: TestClient, mock_store: AsyncMock
    ) -> None:
        client.get(
            "/priceInSats/EUR",
            params={"limit": "3", "offset": "1", "startDate": "500", "sortOrder": "desc"},
        )

        mock_store.get_prices.assert_awaited_once_with(
            "EUR", since_ms=500, sort_order=SortOrder.DESC, limit=3, offset=1
        )

    def test_unknown_symbol_is_empty_list(self, client: TestClient) -> None:
        response = client.get("/priceInSats/DOGE")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        ("params", "message"),
        [
            ({"limit": "ten"}, "Limit must be an integer."),
            ({"offset": "-1"}, "Offset cannot be negative."),
            ({"sortOrder": "sideways"}, 'Sort order must be either "asc" or "desc".'),
        ],
    )
    def test_invalid_query_is_400_plain_text(
        self, client: TestClient, params: dict, message: str
    ) -> None:
        response = client.get("/priceInSats/USD", params=params)

        assert response.status_code == 400
        assert response.text == message


class TestCrossRate:
    """GET /price/{base}/{priced}"""

    def test_returns_interpolated_ratios(self, client: TestClient) -> None:
        """EUR priced in USD; USD interpolates to 2100 at t=2000."""
        response = client.get("/price/USD/EUR")

        assert response.status_code == 200
        assert response.json() == [
            {"price": 1800.0 / 2000.0, "date": 1_000},
            {"price": 1800.0 / 2100.0, "date": 2_000},
            {"price": 1800.0 / 2200.0, "date": 3_000},
        ]

    def test_bitcoin_rejected(self, client: TestClient) -> None:
        response = client.get("/price/BTC/USD")
        assert response.status_code == 400
        assert "/priceInSats" in response.text

    def test_invalid_start_date(self, client: TestClient) -> None:
        response = client.get("/price/USD/EUR", params={"startDate": "-5"})
        assert response.status_code == 400
        assert response.text == "Start date cannot be negative."


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "cached_symbols": [], "cached_samples": 0}
