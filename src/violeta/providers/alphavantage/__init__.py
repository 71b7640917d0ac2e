"""Alpha Vantage provider for intraday quotes, daily bars and RSI."""

from violeta.providers.alphavantage.client import AlphaVantageQuoteProvider

__all__ = ["AlphaVantageQuoteProvider"]
