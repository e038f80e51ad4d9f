"""Cross-rate computation between two sat-denominated price series.

Both series are interpolated at the union of their sample timestamps and
divided, giving the price of one currency in units of the other.
"""

import math
from collections.abc import Sequence

from satrates.models import BasePriceSample, CrossRateSample
from satrates.rates.interpolation import estimate_at, sort_series


def union_timestamps(*series: Sequence[BasePriceSample]) -> list[int]:
    """Return the distinct timestamps present in any of the series, ascending."""
    return sorted({s.timestamp_ms for samples in series for s in samples})


def compute_cross_rate(
    priced_series: Sequence[BasePriceSample],
    comparison_series: Sequence[BasePriceSample],
) -> list[CrossRateSample]:
    """Compute the priced/comparison ratio at every sampled timestamp.

    Timestamps where either side has no estimate (an empty series) or where
    the comparison price is zero are omitted; no partial, infinite or NaN
    entries are emitted.

    Args:
        priced_series: Sat prices of the currency being priced.
        comparison_series: Sat prices of the currency the price is measured in.

    Returns:
        CrossRateSample list in ascending timestamp order.
    """
    priced = sort_series(priced_series)
    comparison = sort_series(comparison_series)

    results: list[CrossRateSample] = []
    for timestamp_ms in union_timestamps(priced, comparison):
        priced_estimate = estimate_at(priced, timestamp_ms)
        comparison_estimate = estimate_at(comparison, timestamp_ms)

        if priced_estimate is None or comparison_estimate is None:
            continue
        if comparison_estimate == 0:
            continue

        ratio = priced_estimate / comparison_estimate
        if not math.isfinite(ratio):
            continue
        results.append(CrossRateSample(timestamp_ms=timestamp_ms, ratio=ratio))

    return results
