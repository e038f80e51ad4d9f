"""Price history persistence layer.

Provides the SQLite database manager and the typed read/write store for
tracked currencies and their sat-denominated prices.
"""

from satrates.data.database import PriceDatabase
from satrates.data.store import PriceStore

__all__ = [
    "PriceDatabase",
    "PriceStore",
]
