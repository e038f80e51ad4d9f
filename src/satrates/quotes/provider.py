"""Abstract price quote provider interface.

Ingestion depends only on this interface, keeping exchange-specific
details isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod

from satrates.models import BasePriceSample


class QuoteProvider(ABC):
    """Abstract base class for sources of live sat-denominated prices."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        ...

    @abstractmethod
    async def fetch_price_in_sats(self, symbol: str) -> BasePriceSample:
        """Fetch the latest price of one unit of ``symbol`` in satoshis.

        Raises QuoteUnavailableError when no usable price exists.
        """
        ...
