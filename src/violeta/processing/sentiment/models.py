"""Data models for keyword sentiment scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Confidence = Literal["none", "low", "medium", "high"]

NO_ARTICLES_SUMMARY = "No articles found"
MIXED_SUMMARY = "Mixed sentiment"


@dataclass(frozen=True, slots=True)
class SentimentResult:
    """Result of keyword sentiment scoring on one text or a ticker's articles.

    Attributes:
        score: Sentiment from -1.0 (most bearish) to 1.0 (most bullish).
        confidence: How much evidence backs the score.
        summary: Display string built from the top signal tokens.
        signals: Labelled keyword hits (``+keyword`` / ``-keyword``).
        article_count: Number of texts the score was derived from.
    """

    score: float
    confidence: Confidence
    summary: str
    signals: tuple[str, ...] = field(default_factory=tuple)
    article_count: int = 0

    def __post_init__(self) -> None:
        """Validate ranges."""
        if not -1.0 <= self.score <= 1.0:
            raise ValueError(f"score must be in [-1.0, 1.0], got {self.score}")
        if self.article_count < 0:
            raise ValueError(f"article_count must be >= 0, got {self.article_count}")

    @classmethod
    def empty(cls) -> SentimentResult:
        """Result for a ticker with no articles."""
        return cls(score=0.0, confidence="none", summary=NO_ARTICLES_SUMMARY)

    @property
    def is_bullish(self) -> bool:
        return self.score > 0

    @property
    def is_bearish(self) -> bool:
        return self.score < 0

    @property
    def label(self) -> Literal["bullish", "bearish", "neutral"]:
        if self.is_bullish:
            return "bullish"
        if self.is_bearish:
            return "bearish"
        return "neutral"
