"""Tests for mention aggregation and sector tallies."""

from __future__ import annotations

from violeta.processing.mentions import MentionIndex
from violeta.processing.models import Article
from violeta.processing.tickers import TickerExtractor


def _articles() -> list[Article]:
    return [
        Article(title="$NVDA and $AMD rally", description="Chip demand", url="https://a/1"),
        Article(title="$AMD wins contract", url="https://a/2"),
        Article(title="$NVDA $NVDA again", url="https://a/3"),
    ]


class TestMentionIndex:
    def test_counts_once_per_article(self) -> None:
        index = MentionIndex()
        index.ingest(_articles(), TickerExtractor())

        nvda = index.get("NVDA")
        assert nvda is not None
        assert nvda.count == 2
        assert [ref.url for ref in nvda.articles] == ["https://a/1", "https://a/3"]

    def test_count_never_exceeds_articles(self) -> None:
        index = MentionIndex()
        index.ingest(_articles(), TickerExtractor())

        assert index.articles_processed == 3
        assert all(m.count <= index.articles_processed for m in index.ranked())

    def test_ranking_ties_keep_first_seen_order(self) -> None:
        index = MentionIndex()
        index.ingest(_articles(), TickerExtractor())

        assert [m.ticker for m in index.ranked()] == ["NVDA", "AMD"]

    def test_ranked_by_count(self) -> None:
        index = MentionIndex()
        index.add_article(Article(title="one"), ["AAA"])
        index.add_article(Article(title="two"), ["BBB"])
        index.add_article(Article(title="three"), ["BBB"])

        assert [m.ticker for m in index.ranked()] == ["BBB", "AAA"]
        assert [m.ticker for m in index.ranked(limit=1)] == ["BBB"]

    def test_sectors_counted_per_article(self) -> None:
        index = MentionIndex()
        index.ingest(_articles(), TickerExtractor())

        assert index.sectors == {"semiconductor": 1}

    def test_sectors_without_tickers(self) -> None:
        index = MentionIndex()
        index.add_article(Article(title="Oil prices climb"), [])
        index.add_article(Article(title="Solar and oil names firm"), [])
        index.add_article(Article(title="Bank earnings ahead"), [])

        assert len(index) == 0
        assert index.top_sectors() == [("energy", 2), ("finance", 1)]

    def test_ai_needs_word_boundary(self) -> None:
        index = MentionIndex()
        index.add_article(Article(title="Retailers see gains again"), [])

        assert "semiconductor" not in index.sectors

    def test_contains(self) -> None:
        index = MentionIndex()
        index.add_article(Article(title="x"), ["NVDA"])

        assert "NVDA" in index
        assert "AMD" not in index
        assert index.get("AMD") is None

    def test_sectors_returns_copy(self) -> None:
        index = MentionIndex()
        index.add_article(Article(title="Oil"), [])
        index.sectors["energy"] = 99

        assert index.sectors == {"energy": 1}
