"""Mention aggregation and sector tallies across a news corpus."""

from __future__ import annotations

import re
from collections.abc import Iterable

from violeta.core.logging import get_logger
from violeta.processing.lexicon import Lexicon
from violeta.processing.models import Article, ArticleRef, TickerMention
from violeta.processing.tickers import TickerExtractor

logger = get_logger(__name__)


class MentionIndex:
    """Counts ticker mentions and sector hits for one scan.

    Mentions are kept in first-seen order, so ranking by count with a
    stable sort breaks ties by first sighting.
    """

    def __init__(self, lexicon: Lexicon | None = None) -> None:
        self._lexicon = lexicon if lexicon is not None else Lexicon.default()
        self._sector_rules = {
            sector: re.compile(pattern, re.IGNORECASE)
            for sector, pattern in self._lexicon.sector_patterns.items()
        }
        self._mentions: dict[str, TickerMention] = {}
        self._sectors: dict[str, int] = {}
        self._articles_processed = 0

    def add_article(self, article: Article, tickers: Iterable[str]) -> None:
        """Record one article and the tickers found in it."""
        self._articles_processed += 1
        ref = ArticleRef(title=article.title, url=article.url, published_at=article.published_at)

        # At most one increment per ticker per article
        for ticker in dict.fromkeys(tickers):
            mention = self._mentions.get(ticker)
            if mention is None:
                mention = TickerMention(ticker=ticker)
                self._mentions[ticker] = mention
            mention.count += 1
            mention.articles.append(ref)

        text = article.text
        for sector, rule in self._sector_rules.items():
            if rule.search(text):
                self._sectors[sector] = self._sectors.get(sector, 0) + 1

    def ingest(self, articles: Iterable[Article], extractor: TickerExtractor) -> None:
        """Extract tickers from each article and record them."""
        for article in articles:
            text = article.text.upper()
            # Order by first position in the text so first-seen ties are deterministic
            tickers = sorted(extractor.extract(text), key=lambda t: (text.find(t), t))
            self.add_article(article, tickers)

    def ranked(self, limit: int | None = None) -> list[TickerMention]:
        """Mentions sorted by count descending, ties in first-seen order."""
        ordered = sorted(self._mentions.values(), key=lambda m: m.count, reverse=True)
        return ordered if limit is None else ordered[:limit]

    def top_sectors(self, limit: int = 5) -> list[tuple[str, int]]:
        return sorted(self._sectors.items(), key=lambda kv: kv[1], reverse=True)[:limit]

    def get(self, ticker: str) -> TickerMention | None:
        return self._mentions.get(ticker)

    @property
    def sectors(self) -> dict[str, int]:
        return dict(self._sectors)

    @property
    def articles_processed(self) -> int:
        return self._articles_processed

    def __len__(self) -> int:
        return len(self._mentions)

    def __contains__(self, ticker: object) -> bool:
        return ticker in self._mentions
