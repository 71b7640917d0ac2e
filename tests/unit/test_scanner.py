"""Tests for the scan orchestrator."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest
import structlog
from structlog.testing import capture_logs

from violeta.config import Settings
from violeta.core.exceptions import ConfigurationError
from violeta.processing.models import Article, TechnicalSnapshot
from violeta.processing.scanner import ScanConfig, Scanner, load_lexicon, run_scan
from violeta.providers.base import CompanyInfo
from violeta.providers.factory import ProviderSet


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

DISCOVERY_NEWS = {
    "q1": [
        Article(title="$NVDA surges on record high", description="AI chip demand"),
        Article(title="$AMD and $NVDA gain"),
    ],
    "q2": [Article(title="Shares of $THE rally")],
}


def _news(results: dict[str, list[Article]]) -> AsyncMock:
    async def search(query: str, count: int | None = None) -> list[Article]:
        return results.get(query, [])

    news = AsyncMock()
    news.search = AsyncMock(side_effect=search)
    return news


def _quotes(snapshots: dict[str, TechnicalSnapshot | None]) -> AsyncMock:
    async def fetch_technical(symbol: str) -> TechnicalSnapshot | None:
        return snapshots.get(symbol)

    quotes = AsyncMock()
    quotes.fetch_technical = AsyncMock(side_effect=fetch_technical)
    return quotes


def _no_delay(**kwargs: object) -> ScanConfig:
    return ScanConfig(ticker_delay_seconds=0.0, query_delay_seconds=0.0, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    async def test_discover_and_select(self) -> None:
        scanner = Scanner(
            news=_news(DISCOVERY_NEWS),
            quotes=_quotes({}),
            config=_no_delay(discovery_queries=["q1", "q2"]),
        )

        index = await scanner.discover()
        selected = scanner.select_tickers(index)

        assert [m.ticker for m in index.ranked()] == ["NVDA", "AMD", "THE"]
        # THE is a stop word and never reaches quote lookup
        assert [m.ticker for m in selected] == ["NVDA", "AMD"]

    async def test_select_caps_max_tickers(self) -> None:
        scanner = Scanner(
            news=_news(DISCOVERY_NEWS),
            quotes=_quotes({}),
            config=_no_delay(discovery_queries=["q1"], max_tickers=1),
        )
        index = await scanner.discover()

        assert [m.ticker for m in scanner.select_tickers(index)] == ["NVDA"]

    async def test_discovery_scan(self, make_snapshot) -> None:
        news = _news(DISCOVERY_NEWS)
        quotes = _quotes(
            {
                "NVDA": make_snapshot(
                    price=100.0, daily_open=95.0, rsi=28.0, volume=1600, avg_volume=1000.0
                ),
                "AMD": None,
            }
        )
        scanner = Scanner(
            news=news,
            quotes=quotes,
            config=ScanConfig(
                discovery_queries=["q1", "q2"],
                query_delay_seconds=1.0,
                ticker_delay_seconds=12.0,
            ),
        )

        with patch("violeta.processing.scanner.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await scanner.run()

        # One pause between queries, one after every ticker including skipped ones
        assert sleep.await_args_list == [call(1.0), call(12.0), call(12.0)]

        assert result.strategy == "discovery"
        assert result.articles_analyzed == 3
        assert result.tickers_discovered == 3
        assert result.tickers_analyzed == 1
        assert result.tickers_skipped == ["AMD"]
        assert result.sectors == {"semiconductor": 1}
        assert [m.ticker for m in result.top_tickers] == ["NVDA", "AMD", "THE"]

        signal = result.signals[0]
        assert signal.ticker == "NVDA"
        assert signal.mentions == 2
        # Ticker news came back empty, so the discovery headlines were scored
        assert signal.sentiment.article_count == 2
        assert signal.sentiment.score == pytest.approx(0.3)
        # 5 + 2 (rsi oversold) + 1 (volume)
        assert signal.conviction == 8
        assert signal.trade_plan.action == "TRADE"
        assert signal.trade_plan.entry == 100.0
        assert result.high_conviction_count == 1

        news.search.assert_any_await("NVDA stock news", count=5)


# ---------------------------------------------------------------------------
# Watchlist
# ---------------------------------------------------------------------------


class TestWatchlist:
    async def test_watchlist_scan(self, make_snapshot) -> None:
        news = _news(
            {
                "NVDA NVIDIA Corp stock news": [
                    Article(title="Nvidia soars"),
                    Article(title="Nvidia soars on demand"),
                    Article(title="Nvidia demand growth"),
                ]
            }
        )
        quotes = _quotes({"NVDA": make_snapshot(price=50.0, daily_open=50.0, rsi=55.0)})
        companies = AsyncMock()
        companies.fetch = AsyncMock(return_value=CompanyInfo(name="NVIDIA Corp"))

        scanner = Scanner(
            news=news,
            quotes=quotes,
            companies=companies,
            config=_no_delay(strategy="watchlist", watchlist=["NVDA", "F", "NVDA"]),
        )
        result = await scanner.run()

        assert result.strategy == "watchlist"
        assert result.tickers_skipped == ["F"]
        assert result.tickers_discovered == 0
        assert quotes.fetch_technical.await_count == 1

        signal = result.signals[0]
        assert signal.company is not None
        assert signal.company.name == "NVIDIA Corp"
        # Watchlist mentions are the ticker news hits
        assert signal.mentions == 3
        assert signal.sentiment.confidence == "high"
        assert signal.sentiment.score == pytest.approx(0.35)
        # 5 + 1 (rsi momentum)
        assert signal.conviction == 6
        assert signal.trade_plan.action == "TRADE"
        assert signal.trade_plan.stop_loss == 48.5
        assert signal.trade_plan.take_profit == 53.5

    async def test_ticker_log_carries_sentiment_label(self, make_snapshot) -> None:
        news = _news({"NVDA stock news": [Article(title="Nvidia soars")]})
        scanner = Scanner(
            news=news,
            quotes=_quotes({"NVDA": make_snapshot()}),
            config=_no_delay(strategy="watchlist", watchlist=["NVDA"]),
        )

        with capture_logs() as logs:
            await scanner.run()

        analyzed = [e for e in logs if e["event"] == "Ticker analyzed"]
        assert len(analyzed) == 1
        assert analyzed[0]["ticker"] == "NVDA"
        assert analyzed[0]["sentiment_label"] == "bullish"

    async def test_signals_ranked_by_conviction(self, make_snapshot) -> None:
        quotes = _quotes(
            {
                "AAA": make_snapshot(symbol="AAA"),
                "BBB": make_snapshot(symbol="BBB", rsi=20.0),
            }
        )
        scanner = Scanner(
            news=_news({}),
            quotes=quotes,
            config=_no_delay(strategy="watchlist", watchlist=["AAA", "BBB"]),
        )
        result = await scanner.run()

        assert [s.ticker for s in result.signals] == ["BBB", "AAA"]
        assert [s.conviction for s in result.signals] == [7, 5]
        assert result.high_conviction_count == 1
        assert result.signals[1].trade_plan.action == "WATCH"
        assert result.signals[0].sentiment.confidence == "none"

    async def test_empty_watchlist_is_configuration_error(self) -> None:
        quotes = _quotes({})
        scanner = Scanner(
            news=_news({}), quotes=quotes, config=_no_delay(strategy="watchlist")
        )

        with pytest.raises(ConfigurationError):
            await scanner.run()
        quotes.fetch_technical.assert_not_awaited()


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_ticker_failure_is_skipped(self, make_snapshot) -> None:
        async def fetch_technical(symbol: str) -> TechnicalSnapshot | None:
            if symbol == "AAA":
                raise RuntimeError("unexpected")
            return make_snapshot(symbol=symbol)

        quotes = AsyncMock()
        quotes.fetch_technical = AsyncMock(side_effect=fetch_technical)
        scanner = Scanner(
            news=_news({}),
            quotes=quotes,
            config=ScanConfig(
                strategy="watchlist", watchlist=["AAA", "BBB"], ticker_delay_seconds=3.0
            ),
        )

        with patch("violeta.processing.scanner.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await scanner.run()

        assert result.tickers_skipped == ["AAA"]
        assert [s.ticker for s in result.signals] == ["BBB"]
        assert sleep.await_count == 2

    async def test_no_technical_skips_news(self) -> None:
        news = _news({})
        scanner = Scanner(news=news, quotes=_quotes({}), config=_no_delay())

        assert await scanner.analyze_ticker("NVDA", 3) is None
        news.search.assert_not_awaited()


# ---------------------------------------------------------------------------
# run_scan / load_lexicon
# ---------------------------------------------------------------------------


def _settings(**kwargs: object) -> Settings:
    data: dict[str, object] = {
        "_env_file": None,
        "brave_api_key": None,
        "alpha_vantage_api_key": None,
        "finnhub_api_key": None,
        "ticker_delay_seconds": 0.0,
        "query_delay_seconds": 0.0,
    }
    data.update(kwargs)
    return Settings(**data)  # type: ignore[arg-type]


class TestRunScan:
    async def test_missing_keys(self) -> None:
        with pytest.raises(ConfigurationError):
            await run_scan(_settings())

    async def test_empty_watchlist_fails_before_providers(self) -> None:
        with patch("violeta.providers.factory.create_providers") as create:
            with pytest.raises(ConfigurationError):
                await run_scan(_settings(scan_strategy="watchlist"))
        create.assert_not_called()

    async def test_providers_closed(self, make_snapshot) -> None:
        providers = ProviderSet(
            news=_news({}),
            quotes=_quotes({"NVDA": make_snapshot()}),
        )
        providers.close = AsyncMock()  # type: ignore[method-assign]

        with patch("violeta.providers.factory.create_providers", return_value=providers):
            result = await run_scan(_settings(scan_strategy="watchlist", watchlist="NVDA"))

        assert [s.ticker for s in result.signals] == ["NVDA"]
        providers.close.assert_awaited_once()

    async def test_scan_context_bound_during_scan(self, make_snapshot) -> None:
        seen: list[dict[str, object]] = []

        async def fetch_technical(symbol: str) -> TechnicalSnapshot:
            seen.append(structlog.contextvars.get_contextvars())
            return make_snapshot(symbol=symbol)

        quotes = AsyncMock()
        quotes.fetch_technical = AsyncMock(side_effect=fetch_technical)
        providers = ProviderSet(news=_news({}), quotes=quotes)
        providers.close = AsyncMock()  # type: ignore[method-assign]

        with patch("violeta.providers.factory.create_providers", return_value=providers):
            await run_scan(_settings(scan_strategy="watchlist", watchlist="NVDA,AMD"))

        assert len(seen) == 2
        assert seen[0]["strategy"] == "watchlist"
        assert len(seen[0]["scan_id"]) == 8  # type: ignore[arg-type]
        # One id for the whole scan
        assert seen[0]["scan_id"] == seen[1]["scan_id"]
        assert "scan_id" not in structlog.contextvars.get_contextvars()

    async def test_providers_closed_on_error(self) -> None:
        quotes = AsyncMock()
        quotes.fetch_technical = AsyncMock(side_effect=RuntimeError("boom"))
        providers = ProviderSet(news=_news({}), quotes=quotes)
        providers.close = AsyncMock()  # type: ignore[method-assign]

        with (
            patch("violeta.providers.factory.create_providers", return_value=providers),
            patch(
                "violeta.processing.scanner.Scanner.run",
                new_callable=AsyncMock,
                side_effect=RuntimeError("boom"),
            ),
        ):
            with pytest.raises(RuntimeError):
                await run_scan(_settings())

        providers.close.assert_awaited_once()


class TestLoadLexicon:
    def test_default_with_extra_stop_words(self) -> None:
        lexicon = load_lexicon(_settings(ticker_stop_words="acme"))
        assert "ACME" in lexicon.stop_words

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot load lexicon"):
            load_lexicon(_settings(lexicon_path=tmp_path / "missing.json"))

    def test_bad_catalyst_type(self, tmp_path: Path) -> None:
        path = tmp_path / "lexicon.json"
        path.write_text('{"catalyst_rules": [["foo", "Bogus"]]}')

        with pytest.raises(ConfigurationError):
            load_lexicon(_settings(lexicon_path=path))

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "lexicon.json"
        path.write_text('{"context_words": ["jumped"]}')

        assert load_lexicon(_settings(lexicon_path=path)).context_words == ("JUMPED",)
