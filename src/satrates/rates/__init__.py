"""Interpolation, cross-rate computation and the recency cache."""

from satrates.rates.cache import RecencyCache
from satrates.rates.cross_rate import compute_cross_rate
from satrates.rates.interpolation import estimate_at

__all__ = [
    "RecencyCache",
    "compute_cross_rate",
    "estimate_at",
]
