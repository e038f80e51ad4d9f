"""Linear interpolation over sparse, irregularly-timestamped price series.

Estimates a currency's sat price at an arbitrary timestamp from the samples
around it. Exact matches are returned verbatim so no floating-point error is
introduced for timestamps that were actually observed. Outside the sampled
range the nearest price is held flat.
"""

import bisect
from collections.abc import Iterable

from satrates.models import BasePriceSample


def sort_series(series: Iterable[BasePriceSample]) -> list[BasePriceSample]:
    """Return the series ordered by timestamp, skipping the sort when already ascending."""
    samples = list(series)
    if all(a.timestamp_ms <= b.timestamp_ms for a, b in zip(samples, samples[1:])):
        return samples
    return sorted(samples, key=lambda s: s.timestamp_ms)


def estimate_at(series: Iterable[BasePriceSample], target_ms: int) -> float | None:
    """Estimate the sat price of a currency at ``target_ms``.

    The series is treated as a mapping from timestamp to price, so the
    caller may pass samples in any order. Duplicate timestamps are a caller
    error; which duplicate is used is undefined.

    Args:
        series: Price samples for a single currency.
        target_ms: Timestamp to estimate the price at (Unix milliseconds).

    Returns:
        The exact price on a timestamp match, a linearly interpolated price
        between the surrounding samples, the nearest price when the target
        lies outside the sampled range, or None for an empty series.
    """
    samples = sort_series(series)
    if not samples:
        return None

    timestamps = [s.timestamp_ms for s in samples]
    idx = bisect.bisect_left(timestamps, target_ms)

    if idx < len(samples) and timestamps[idx] == target_ms:
        return samples[idx].price_sats

    before = samples[idx - 1] if idx > 0 else None
    after = samples[idx] if idx < len(samples) else None

    if before is None:
        return after.price_sats  # type: ignore[union-attr]
    if after is None:
        return before.price_sats

    time_fraction = (target_ms - before.timestamp_ms) / (
        after.timestamp_ms - before.timestamp_ms
    )
    return before.price_sats + time_fraction * (after.price_sats - before.price_sats)
