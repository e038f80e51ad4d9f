"""Sample builders and a controllable clock shared across test modules."""

from satrates.models import BasePriceSample

#: Fixed "now" for cache tests: 2024-01-01T00:00:00Z in milliseconds.
NOW_MS = 1_704_067_200_000
HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


class FakeClock:
    """Settable millisecond clock for TTL tests."""

    def __init__(self, now_ms: int = NOW_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def sample(timestamp_ms: int, price_sats: float) -> BasePriceSample:
    return BasePriceSample(timestamp_ms=timestamp_ms, price_sats=price_sats)


def series(*points: tuple[int, float]) -> list[BasePriceSample]:
    """Build a series from (timestamp_ms, price_sats) pairs."""
    return [sample(ts, price) for ts, price in points]
