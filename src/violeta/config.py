"""Application configuration via pydantic-settings."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from violeta.core.constants import (
    DEFAULT_ALPHA_VANTAGE_API_URL,
    DEFAULT_BRAVE_API_URL,
    DEFAULT_DISCOVERY_QUERIES,
    DEFAULT_DISCOVERY_TOP_N,
    DEFAULT_FINNHUB_API_URL,
    DEFAULT_MAX_TICKERS,
    DEFAULT_NEWS_PER_QUERY,
    DEFAULT_NEWS_PER_TICKER,
    DEFAULT_QUERY_DELAY_SECONDS,
    DEFAULT_TICKER_DELAY_SECONDS,
)
from violeta.processing.conviction import ConvictionThresholds


def _parse_list(v: str | list[str] | None) -> list[str]:
    """Accept a JSON array, a comma-separated string, or a list."""
    if v is None:
        return []
    if isinstance(v, str):
        v = v.strip()
        if v.startswith("["):
            v = json.loads(v)
        else:
            v = [item.strip() for item in v.split(",") if item.strip()]
    return list(v)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Core
    env: Literal["development", "staging", "production"] = Field(
        default="development", alias="VIOLETA_ENV"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="VIOLETA_LOG_LEVEL"
    )

    # API Keys
    brave_api_key: SecretStr | None = Field(
        default=None,
        description="Brave Search API key for news discovery and per-ticker news",
    )
    alpha_vantage_api_key: SecretStr | None = Field(
        default=None,
        description="Alpha Vantage API key for intraday quotes, daily bars and RSI",
    )
    finnhub_api_key: SecretStr | None = Field(
        default=None,
        description="Finnhub API key for company profiles (optional enrichment)",
    )

    # API URLs
    brave_api_url: str = Field(default=DEFAULT_BRAVE_API_URL)
    alpha_vantage_api_url: str = Field(default=DEFAULT_ALPHA_VANTAGE_API_URL)
    finnhub_api_url: str = Field(default=DEFAULT_FINNHUB_API_URL)

    # Conviction / trade plan thresholds
    min_conviction: int = Field(default=6, ge=1, le=10)
    rsi_oversold: float = Field(default=30.0, ge=0.0, le=100.0)
    rsi_bullish: float = Field(default=50.0, ge=0.0, le=100.0)
    fomo_threshold: float = Field(
        default=0.08,
        ge=0.0,
        description="Max run-up above the daily open before a setup counts as overextended",
    )
    volume_multiplier: float = Field(default=1.5, gt=0.0)
    sentiment_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Sentiment score above which conviction gets the full boost",
    )

    # Scan
    scan_strategy: Literal["discovery", "watchlist"] = Field(
        default="discovery",
        description="Ticker source: news discovery or the static watchlist",
    )
    watchlist: Annotated[list[str], NoDecode] = Field(default_factory=list)
    discovery_queries: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_DISCOVERY_QUERIES)
    )
    discovery_top_n: int = Field(default=DEFAULT_DISCOVERY_TOP_N, ge=1)
    max_tickers: int = Field(default=DEFAULT_MAX_TICKERS, ge=1)
    news_per_query: int = Field(default=DEFAULT_NEWS_PER_QUERY, ge=1, le=50)
    news_per_ticker: int = Field(default=DEFAULT_NEWS_PER_TICKER, ge=1, le=50)
    ticker_stop_words: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Extra tokens never treated as tickers (added to the built-in stop-list)",
    )
    ticker_delay_seconds: float = Field(
        default=DEFAULT_TICKER_DELAY_SECONDS,
        ge=0.0,
        description="Pause after each ticker's provider calls (shared rate budget)",
    )
    query_delay_seconds: float = Field(default=DEFAULT_QUERY_DELAY_SECONDS, ge=0.0)
    lexicon_path: Path | None = Field(
        default=None,
        description="JSON file overriding the built-in keyword and pattern tables",
    )

    @field_validator("watchlist", "ticker_stop_words", mode="before")
    @classmethod
    def parse_symbols(cls, v: str | list[str] | None) -> list[str]:
        return [s.lstrip("$").upper() for s in _parse_list(v)]

    @field_validator("discovery_queries", mode="before")
    @classmethod
    def parse_queries(cls, v: str | list[str] | None) -> list[str]:
        return _parse_list(v)

    def conviction_thresholds(self) -> ConvictionThresholds:
        """Build the threshold set injected into the conviction engine and plan generator."""
        return ConvictionThresholds(
            min_conviction=self.min_conviction,
            rsi_oversold=self.rsi_oversold,
            rsi_bullish=self.rsi_bullish,
            fomo_threshold=self.fomo_threshold,
            volume_multiplier=self.volume_multiplier,
            sentiment_threshold=self.sentiment_threshold,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
