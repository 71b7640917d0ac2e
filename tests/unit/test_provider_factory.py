"""Tests for the settings-driven provider factory."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from violeta.config import Settings
from violeta.core.exceptions import ConfigurationError
from violeta.providers.alphavantage import AlphaVantageQuoteProvider
from violeta.providers.brave import BraveNewsProvider
from violeta.providers.factory import (
    ProviderSet,
    create_company_provider,
    create_providers,
    create_quote_provider,
)
from violeta.providers.finnhub import FinnhubCompanyProvider


def _settings(**kwargs: object) -> Settings:
    data: dict[str, object] = {
        "_env_file": None,
        "brave_api_key": None,
        "alpha_vantage_api_key": None,
        "finnhub_api_key": None,
    }
    data.update(kwargs)
    return Settings(**data)  # type: ignore[arg-type]


class TestCreateProviders:
    def test_required_providers(self) -> None:
        providers = create_providers(_settings(brave_api_key="b", alpha_vantage_api_key="a"))

        assert isinstance(providers.news, BraveNewsProvider)
        assert isinstance(providers.quotes, AlphaVantageQuoteProvider)
        assert providers.companies is None

    def test_with_finnhub(self) -> None:
        providers = create_providers(
            _settings(brave_api_key="b", alpha_vantage_api_key="a", finnhub_api_key="f")
        )
        assert isinstance(providers.companies, FinnhubCompanyProvider)

    def test_missing_keys_listed(self) -> None:
        with pytest.raises(ConfigurationError, match="BRAVE_API_KEY, ALPHA_VANTAGE_API_KEY"):
            create_providers(_settings())

    def test_blank_key_counts_as_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="ALPHA_VANTAGE_API_KEY"):
            create_providers(_settings(brave_api_key="b", alpha_vantage_api_key="  "))

    def test_quote_provider_requires_key(self) -> None:
        with pytest.raises(ConfigurationError):
            create_quote_provider(_settings())

    def test_company_provider_optional(self) -> None:
        assert create_company_provider(_settings()) is None


class TestProviderSetClose:
    async def test_closes_all(self) -> None:
        news, quotes, companies = AsyncMock(), AsyncMock(), AsyncMock()
        await ProviderSet(news=news, quotes=quotes, companies=companies).close()

        news.close.assert_awaited_once()
        quotes.close.assert_awaited_once()
        companies.close.assert_awaited_once()

    async def test_close_failure_does_not_stop_others(self) -> None:
        news, quotes = AsyncMock(), AsyncMock()
        news.close.side_effect = RuntimeError("boom")

        await ProviderSet(news=news, quotes=quotes).close()

        quotes.close.assert_awaited_once()
