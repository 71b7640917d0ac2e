"""Scan orchestrator.

Runs the pipeline for one scan, strictly sequentially:

    discovery news -> ticker extraction + mention index -> ranked tickers
    -> per ticker: technical snapshot, company profile, ticker news
       -> sentiment + catalysts -> conviction -> trade plan -> Signal

Provider calls share one rate budget (Alpha Vantage free tier), so the
scanner pauses after every ticker, whether it produced a signal or not.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from violeta.core.constants import (
    DEFAULT_DISCOVERY_QUERIES,
    DEFAULT_DISCOVERY_TOP_N,
    DEFAULT_MAX_TICKERS,
    DEFAULT_NEWS_PER_QUERY,
    DEFAULT_NEWS_PER_TICKER,
    DEFAULT_QUERY_DELAY_SECONDS,
    DEFAULT_TICKER_DELAY_SECONDS,
)
from violeta.core.exceptions import ConfigurationError
from violeta.core.logging import get_logger, scan_context
from violeta.processing.catalysts import CatalystExtractor
from violeta.processing.conviction import ConvictionEngine, ConvictionThresholds
from violeta.processing.lexicon import Lexicon
from violeta.processing.mentions import MentionIndex
from violeta.processing.models import Article, ScanResult, Signal, TickerMention
from violeta.processing.sentiment.analyzer import SentimentScorer
from violeta.processing.tickers import TickerExtractor
from violeta.processing.trade_plan import TradePlanGenerator

if TYPE_CHECKING:
    from violeta.config import Settings
    from violeta.providers.base import CompanyInfoProvider, NewsProvider, QuoteProvider

logger = get_logger(__name__)

Strategy = Literal["discovery", "watchlist"]


@dataclass
class ScanConfig:
    """Scan-level knobs, separate from the conviction thresholds."""

    strategy: Strategy = "discovery"
    watchlist: list[str] = field(default_factory=list)
    discovery_queries: list[str] = field(default_factory=lambda: list(DEFAULT_DISCOVERY_QUERIES))
    discovery_top_n: int = DEFAULT_DISCOVERY_TOP_N
    max_tickers: int = DEFAULT_MAX_TICKERS
    news_per_query: int = DEFAULT_NEWS_PER_QUERY
    news_per_ticker: int = DEFAULT_NEWS_PER_TICKER
    ticker_delay_seconds: float = DEFAULT_TICKER_DELAY_SECONDS
    query_delay_seconds: float = DEFAULT_QUERY_DELAY_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> ScanConfig:
        return cls(
            strategy=settings.scan_strategy,
            watchlist=list(settings.watchlist),
            discovery_queries=list(settings.discovery_queries),
            discovery_top_n=settings.discovery_top_n,
            max_tickers=settings.max_tickers,
            news_per_query=settings.news_per_query,
            news_per_ticker=settings.news_per_ticker,
            ticker_delay_seconds=settings.ticker_delay_seconds,
            query_delay_seconds=settings.query_delay_seconds,
        )


def _fallback_articles(mention: TickerMention | None) -> list[Article]:
    """Rebuild articles from the discovery references kept on a mention."""
    if mention is None:
        return []
    return [
        Article(title=ref.title, url=ref.url, published_at=ref.published_at)
        for ref in mention.articles
    ]


class Scanner:
    """Runs one scan against injected providers.

    Usage:
        scanner = Scanner(news=news, quotes=quotes, companies=companies)
        result = await scanner.run()
    """

    def __init__(
        self,
        news: NewsProvider,
        quotes: QuoteProvider,
        companies: CompanyInfoProvider | None = None,
        *,
        config: ScanConfig | None = None,
        thresholds: ConvictionThresholds | None = None,
        lexicon: Lexicon | None = None,
    ) -> None:
        self._news = news
        self._quotes = quotes
        self._companies = companies
        self._config = config if config is not None else ScanConfig()
        self._lexicon = lexicon if lexicon is not None else Lexicon.default()
        thresholds = thresholds if thresholds is not None else ConvictionThresholds()

        self._extractor = TickerExtractor(self._lexicon)
        self._scorer = SentimentScorer(self._lexicon)
        self._catalysts = CatalystExtractor(self._lexicon)
        self._engine = ConvictionEngine(thresholds)
        self._planner = TradePlanGenerator(thresholds)

    @property
    def config(self) -> ScanConfig:
        return self._config

    async def discover(self) -> MentionIndex:
        """Run every discovery query and index the tickers mentioned."""
        index = MentionIndex(self._lexicon)
        queries = self._config.discovery_queries

        for i, query in enumerate(queries):
            if i > 0:
                await asyncio.sleep(self._config.query_delay_seconds)
            articles = await self._news.search(query, count=self._config.news_per_query)
            index.ingest(articles, self._extractor)
            logger.debug("Discovery query done", query=query, articles=len(articles))

        logger.info(
            "Discovery complete",
            queries=len(queries),
            articles=index.articles_processed,
            tickers=len(index),
        )
        return index

    def select_tickers(self, index: MentionIndex) -> list[TickerMention]:
        """Top mentions, validated, capped at ``max_tickers``."""
        top = index.ranked(limit=self._config.discovery_top_n)
        valid = [m for m in top if self._extractor.is_valid(m.ticker)]
        return valid[: self._config.max_tickers]

    async def analyze_ticker(
        self,
        ticker: str,
        mentions: int | None = None,
        fallback_articles: Sequence[Article] = (),
    ) -> Signal | None:
        """Build the signal for one ticker.

        Args:
            ticker: Validated symbol.
            mentions: Discovery mention count, or None to use the number of
                ticker news articles found (watchlist scans).
            fallback_articles: Articles used when the ticker news search
                comes back empty.

        Returns:
            Signal, or None when no technical snapshot is available.
        """
        technical = await self._quotes.fetch_technical(ticker)
        if technical is None:
            logger.info("No technical data, skipping", ticker=ticker)
            return None

        company = await self._companies.fetch(ticker) if self._companies else None
        query = f"{ticker} {company.name} stock news" if company else f"{ticker} stock news"
        news = await self._news.search(query, count=self._config.news_per_ticker)

        if mentions is None:
            mentions = len(news)
        articles: Sequence[Article] = news or fallback_articles

        sentiment = self._scorer.analyze_ticker_sentiment(articles)
        catalysts = self._catalysts.extract(articles)
        conviction = self._engine.score(technical, sentiment, mentions)
        plan = self._planner.generate(conviction, technical, sentiment)

        logger.info(
            "Ticker analyzed",
            ticker=ticker,
            conviction=conviction,
            action=plan.action,
            sentiment=round(sentiment.score, 2),
            sentiment_label=sentiment.label,
            catalysts=len(catalysts),
        )
        return Signal(
            ticker=ticker,
            company=company,
            mentions=mentions,
            technical=technical,
            sentiment=sentiment,
            catalysts=catalysts,
            conviction=conviction,
            trade_plan=plan,
        )

    async def run(self) -> ScanResult:
        """Run a full scan with the configured strategy.

        Raises:
            ConfigurationError: If the watchlist strategy has no symbols
        """
        config = self._config
        started = datetime.now(UTC)
        skipped: list[str] = []

        # (ticker, mention count or None, fallback articles)
        candidates: list[tuple[str, int | None, list[Article]]] = []
        if config.strategy == "watchlist":
            if not config.watchlist:
                raise ConfigurationError("Watchlist strategy selected but WATCHLIST is empty")
            index = MentionIndex(self._lexicon)
            for ticker in dict.fromkeys(config.watchlist):
                if self._extractor.is_valid(ticker):
                    candidates.append((ticker, None, []))
                else:
                    logger.warning("Invalid watchlist symbol, skipping", ticker=ticker)
                    skipped.append(ticker)
        else:
            index = await self.discover()
            candidates = [
                (m.ticker, m.count, _fallback_articles(m)) for m in self.select_tickers(index)
            ]

        logger.info("Scan started", strategy=config.strategy, tickers=len(candidates))

        signals: list[Signal] = []
        for ticker, mentions, fallback in candidates:
            try:
                signal = await self.analyze_ticker(ticker, mentions, fallback)
            except Exception:
                logger.exception("Ticker analysis failed", ticker=ticker)
                signal = None

            if signal is None:
                skipped.append(ticker)
            else:
                signals.append(signal)

            await asyncio.sleep(config.ticker_delay_seconds)

        # Stable: equal convictions keep scan order
        signals.sort(key=lambda s: s.conviction, reverse=True)
        min_conviction = self._engine.thresholds.min_conviction

        result = ScanResult(
            timestamp=started,
            strategy=config.strategy,
            signals=signals,
            sectors=index.sectors,
            top_tickers=index.ranked(limit=config.discovery_top_n),
            articles_analyzed=index.articles_processed,
            tickers_discovered=len(index),
            tickers_analyzed=len(signals),
            tickers_skipped=skipped,
            high_conviction_count=sum(1 for s in signals if s.conviction >= min_conviction),
        )
        logger.info(
            "Scan complete",
            strategy=config.strategy,
            analyzed=result.tickers_analyzed,
            skipped=len(skipped),
            trades=len(result.trades),
            high_conviction=result.high_conviction_count,
        )
        return result


def load_lexicon(settings: Settings) -> Lexicon:
    """Build the lexicon from settings: optional JSON override plus extra stop words.

    Raises:
        ConfigurationError: If the lexicon file is missing or malformed
    """
    lexicon = Lexicon.default()
    if settings.lexicon_path is not None:
        try:
            lexicon = Lexicon.from_json_file(settings.lexicon_path)
            # Compile the rules now so bad patterns fail before any fetch
            CatalystExtractor(lexicon)
            MentionIndex(lexicon)
        except (OSError, ValueError, KeyError, TypeError, AttributeError, re.error) as e:
            raise ConfigurationError(
                f"Cannot load lexicon from {settings.lexicon_path}: {e}"
            ) from e
    return lexicon.with_stop_words(settings.ticker_stop_words)


async def run_scan(settings: Settings | None = None) -> ScanResult:
    """Run one scan with providers built from settings.

    Configuration is fully validated before any provider call, and every
    provider is closed when the scan ends.

    Raises:
        ConfigurationError: On missing credentials, an empty watchlist or a
            bad lexicon file
    """
    from violeta.config import get_settings
    from violeta.providers.factory import create_providers

    settings = settings if settings is not None else get_settings()
    if settings.scan_strategy == "watchlist" and not settings.watchlist:
        raise ConfigurationError("Watchlist strategy selected but WATCHLIST is empty")

    lexicon = load_lexicon(settings)
    providers = create_providers(settings)
    with scan_context(settings.scan_strategy):
        try:
            scanner = Scanner(
                news=providers.news,
                quotes=providers.quotes,
                companies=providers.companies,
                config=ScanConfig.from_settings(settings),
                thresholds=settings.conviction_thresholds(),
                lexicon=lexicon,
            )
            return await scanner.run()
        finally:
            await providers.close()
