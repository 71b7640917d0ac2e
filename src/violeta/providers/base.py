"""Abstract provider protocols for news and market data.

This module defines the abstract interfaces (Protocols) that data
providers must implement. This allows swapping between providers (Brave,
Alpha Vantage, Finnhub, ...) without changing the scan pipeline.

Provider Types:
- NewsProvider: Free-text news search
- QuoteProvider: Technical snapshot (price, daily open, volume, RSI)
- CompanyInfoProvider: Company profile enrichment

All providers degrade failures (network, auth, rate limit, malformed
payload) to an empty or None result. They never raise past this boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from violeta.processing.models import Article, TechnicalSnapshot


@dataclass
class CompanyInfo:
    """Company profile returned by company info providers."""

    name: str
    isin: str | None = None
    sector: str | None = None
    industry: str | None = None
    country: str | None = None


@runtime_checkable
class NewsProvider(Protocol):
    """Protocol for news search."""

    async def search(self, query: str, count: int | None = None) -> list[Article]:
        """Search recent news articles.

        Args:
            query: Free-text query (e.g., "semiconductor stocks AI")
            count: Maximum number of articles (provider default if None)

        Returns:
            List of articles, empty on any failure
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...


@runtime_checkable
class QuoteProvider(Protocol):
    """Protocol for technical snapshots."""

    async def fetch_technical(self, symbol: str) -> TechnicalSnapshot | None:
        """Fetch current price, daily open, previous close, volume and RSI.

        Args:
            symbol: Stock ticker symbol (e.g., "NVDA")

        Returns:
            TechnicalSnapshot, or None on any fetch failure or missing data
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...


@runtime_checkable
class CompanyInfoProvider(Protocol):
    """Protocol for optional company enrichment."""

    async def fetch(self, symbol: str) -> CompanyInfo | None:
        """Fetch the company profile for a symbol.

        Args:
            symbol: Stock ticker symbol

        Returns:
            CompanyInfo, or None when unknown
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
