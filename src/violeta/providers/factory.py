"""Provider factory for creating news and market data providers.

This module builds providers from configuration settings, so the scanner
never touches credentials or concrete client classes.

Usage:
    from violeta.providers.factory import create_providers

    providers = create_providers(settings)
    try:
        articles = await providers.news.search("semiconductor stocks AI")
    finally:
        await providers.close()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import SecretStr

from violeta.core.exceptions import ConfigurationError
from violeta.core.logging import get_logger
from violeta.providers.base import CompanyInfoProvider, NewsProvider, QuoteProvider

if TYPE_CHECKING:
    from violeta.config import Settings

logger = get_logger(__name__)


def _secret(value: SecretStr | None) -> str | None:
    if value is None:
        return None
    return value.get_secret_value().strip() or None


def create_news_provider(settings: Settings) -> NewsProvider:
    """Create the news provider.

    Raises:
        ConfigurationError: If the Brave API key is missing
    """
    from violeta.providers.brave import BraveNewsProvider

    key = _secret(settings.brave_api_key)
    if not key:
        raise ConfigurationError("BRAVE_API_KEY is required for news search")

    logger.debug("Creating BraveNewsProvider")
    return BraveNewsProvider(
        api_key=key,
        base_url=settings.brave_api_url,
        default_count=settings.news_per_query,
    )


def create_quote_provider(settings: Settings) -> QuoteProvider:
    """Create the quote provider.

    Raises:
        ConfigurationError: If the Alpha Vantage API key is missing
    """
    from violeta.providers.alphavantage import AlphaVantageQuoteProvider

    key = _secret(settings.alpha_vantage_api_key)
    if not key:
        raise ConfigurationError("ALPHA_VANTAGE_API_KEY is required for technical data")

    logger.debug("Creating AlphaVantageQuoteProvider")
    return AlphaVantageQuoteProvider(api_key=key, base_url=settings.alpha_vantage_api_url)


def create_company_provider(settings: Settings) -> CompanyInfoProvider | None:
    """Create the company profile provider, or None when no Finnhub key is set."""
    from violeta.providers.finnhub import FinnhubCompanyProvider

    key = _secret(settings.finnhub_api_key)
    if not key:
        logger.info("FINNHUB_API_KEY not set, company profiles disabled")
        return None

    logger.debug("Creating FinnhubCompanyProvider")
    return FinnhubCompanyProvider(api_key=key, base_url=settings.finnhub_api_url)


@dataclass
class ProviderSet:
    """Providers consumed by one scan."""

    news: NewsProvider
    quotes: QuoteProvider
    companies: CompanyInfoProvider | None = None

    async def close(self) -> None:
        """Close every provider, even if one of them fails to close."""
        for provider in (self.news, self.quotes, self.companies):
            if provider is None:
                continue
            try:
                await provider.close()
            except Exception as e:
                logger.warning(
                    "Provider close failed", provider=type(provider).__name__, error=str(e)
                )


def create_providers(settings: Settings) -> ProviderSet:
    """Create all providers for a scan.

    Credentials are checked before any client is built, so a missing key
    fails fast without leaving open connections behind.

    Raises:
        ConfigurationError: If a required API key is missing
    """
    missing = [
        name
        for name, value in (
            ("BRAVE_API_KEY", settings.brave_api_key),
            ("ALPHA_VANTAGE_API_KEY", settings.alpha_vantage_api_key),
        )
        if not _secret(value)
    ]
    if missing:
        raise ConfigurationError(f"Missing required API keys: {', '.join(missing)}")

    return ProviderSet(
        news=create_news_provider(settings),
        quotes=create_quote_provider(settings),
        companies=create_company_provider(settings),
    )
