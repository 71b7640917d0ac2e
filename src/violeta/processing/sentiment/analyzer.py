"""Keyword sentiment scorer for financial headlines.

Each keyword hit adds its tier weight to a running score, which is then
clamped to [-1, 1]. The score is additive and saturating: a headline with
many bullish keywords hits the ceiling quickly. Per-ticker sentiment is
the mean of the per-article scores.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from violeta.processing.lexicon import Lexicon
from violeta.processing.sentiment.models import MIXED_SUMMARY, Confidence, SentimentResult

if TYPE_CHECKING:
    from violeta.processing.models import Article

TEXT_SIGNAL_LIMIT = 5
TICKER_SUMMARY_LIMIT = 3


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _top_signals(signals: Sequence[str], limit: int) -> list[str]:
    """Most frequent signals, ties broken by first appearance."""
    # Counter keeps first-seen order and sorted() is stable
    counts = Counter(signals)
    ranked = sorted(counts, key=lambda s: counts[s], reverse=True)
    return ranked[:limit]


class SentimentScorer:
    """Scores text against tiered bullish/bearish keyword tables."""

    def __init__(self, lexicon: Lexicon | None = None) -> None:
        """Initialize scorer with lexicon.

        Args:
            lexicon: Custom lexicon or None for defaults.
        """
        self._lexicon = lexicon if lexicon is not None else Lexicon.default()
        # (keyword, signed weight, label) in evaluation order
        self._rules: list[tuple[str, float, str]] = []
        tables = ((1.0, "+", self._lexicon.bullish), (-1.0, "-", self._lexicon.bearish))
        for sign, prefix, table in tables:
            for tier, keywords in table.items():
                weight = sign * self._lexicon.tier_weights[tier]
                for keyword in keywords:
                    kw = keyword.lower()
                    self._rules.append((kw, weight, f"{prefix}{kw}"))

    def raw_score(self, text: str) -> tuple[float, list[str]]:
        """Unclamped score and every signal hit, in rule order."""
        lower = text.lower()
        score = 0.0
        signals: list[str] = []
        for keyword, weight, label in self._rules:
            if keyword in lower:
                score += weight
                signals.append(label)
        return score, signals

    def score_text(self, text: str) -> SentimentResult:
        """Score a single block of text.

        Args:
            text: Text to score.

        Returns:
            SentimentResult with the clamped score and first five signals.
        """
        score, signals = self.raw_score(text or "")
        top = signals[:TEXT_SIGNAL_LIMIT]
        return SentimentResult(
            score=_clamp(score),
            confidence="high" if signals else "low",
            summary=", ".join(top) or MIXED_SUMMARY,
            signals=tuple(top),
            article_count=1,
        )

    def analyze_ticker_sentiment(self, articles: Sequence[Article]) -> SentimentResult:
        """Aggregate sentiment across a ticker's articles.

        Args:
            articles: Articles about the ticker.

        Returns:
            SentimentResult whose score is the mean of the per-article scores.
        """
        if not articles:
            return SentimentResult.empty()

        total = 0.0
        all_signals: list[str] = []
        for article in articles:
            result = self.score_text(article.text)
            total += result.score
            all_signals.extend(result.signals)

        count = len(articles)
        confidence: Confidence
        if count >= 3:
            confidence = "high"
        elif count == 2:
            confidence = "medium"
        else:
            confidence = "low"

        top = _top_signals(all_signals, TICKER_SUMMARY_LIMIT)
        return SentimentResult(
            score=_clamp(total / count),
            confidence=confidence,
            summary=", ".join(top) or MIXED_SUMMARY,
            signals=tuple(top),
            article_count=count,
        )

    @property
    def lexicon(self) -> Lexicon:
        """Get the lexicon used by this scorer."""
        return self._lexicon


def calculate_sentiment(text: str) -> SentimentResult:
    """Score text using the default lexicon."""
    return SentimentScorer().score_text(text)


def analyze_ticker_sentiment(articles: Sequence[Article]) -> SentimentResult:
    """Aggregate a ticker's articles using the default lexicon."""
    return SentimentScorer().analyze_ticker_sentiment(articles)
