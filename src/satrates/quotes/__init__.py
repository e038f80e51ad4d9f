from satrates.quotes.ccxt_provider import CcxtQuoteProvider
from satrates.quotes.provider import QuoteProvider

__all__ = ["CcxtQuoteProvider", "QuoteProvider"]
