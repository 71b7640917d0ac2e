"""Keyword sentiment scoring.

This module contains:
- Tiered bullish/bearish keyword scorer (per text)
- Per-ticker aggregation (mean of article scores)
"""

from violeta.processing.sentiment.analyzer import (
    SentimentScorer,
    analyze_ticker_sentiment,
    calculate_sentiment,
)
from violeta.processing.sentiment.models import SentimentResult

__all__ = [
    "SentimentResult",
    "SentimentScorer",
    "analyze_ticker_sentiment",
    "calculate_sentiment",
]
