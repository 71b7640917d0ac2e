"""Conviction scoring: fuses technicals, sentiment and mention volume.

Starts from a base of 5, applies additive adjustments and clamps the
result to [1, 10]. Every threshold comes from an injected
``ConvictionThresholds`` so behaviour can be tuned without code changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from violeta.core.constants import CONVICTION_BASE, CONVICTION_MAX, CONVICTION_MIN
from violeta.processing.models import TechnicalSnapshot
from violeta.processing.sentiment.models import SentimentResult


class ConvictionThresholds(BaseModel):
    """Threshold set shared by the conviction engine and the trade plan generator."""

    model_config = ConfigDict(frozen=True)

    min_conviction: int = Field(default=6, ge=CONVICTION_MIN, le=CONVICTION_MAX)

    # RSI
    rsi_oversold: float = 30.0
    rsi_bullish: float = 50.0
    rsi_momentum_cap: float = 70.0
    rsi_overbought: float = 75.0

    # Price / volume
    fomo_threshold: float = Field(default=0.08, ge=0.0)
    volume_multiplier: float = Field(default=1.5, gt=0.0)

    # Sentiment
    sentiment_threshold: float = 0.7
    sentiment_moderate: float = 0.4
    sentiment_negative: float = -0.4

    # Mentions
    mentions_high: int = Field(default=10, ge=1)
    mentions_medium: int = Field(default=5, ge=1)


def is_overextended(technical: TechnicalSnapshot, fomo_threshold: float) -> bool:
    """True when price has run more than ``fomo_threshold`` above the daily open."""
    if technical.daily_open is None:
        return False
    return technical.price > technical.daily_open * (1 + fomo_threshold)


@dataclass(frozen=True, slots=True)
class Adjustment:
    """One applied conviction rule."""

    rule: str
    delta: int


class ConvictionEngine:
    """Deterministic (technical, sentiment, mentions) -> conviction in [1, 10]."""

    def __init__(self, thresholds: ConvictionThresholds | None = None) -> None:
        self._t = thresholds if thresholds is not None else ConvictionThresholds()

    @property
    def thresholds(self) -> ConvictionThresholds:
        return self._t

    def explain(
        self,
        technical: TechnicalSnapshot | None,
        sentiment: SentimentResult,
        mentions: int,
    ) -> list[Adjustment]:
        """List the adjustments that apply, in evaluation order.

        Rules that depend on missing data (no snapshot, no RSI, no average
        volume, no daily open) are skipped rather than treated as failures.
        """
        t = self._t
        adjustments: list[Adjustment] = []

        if mentions >= t.mentions_high:
            adjustments.append(Adjustment("high mention volume", 2))
        elif mentions >= t.mentions_medium:
            adjustments.append(Adjustment("elevated mention volume", 1))

        if sentiment.score > t.sentiment_threshold:
            adjustments.append(Adjustment("strong positive sentiment", 2))
        elif sentiment.score > t.sentiment_moderate:
            adjustments.append(Adjustment("positive sentiment", 1))
        elif sentiment.score < t.sentiment_negative:
            adjustments.append(Adjustment("negative sentiment", -1))

        if technical is None:
            return adjustments

        rsi = technical.rsi
        if rsi is not None:
            if rsi < t.rsi_oversold:
                adjustments.append(Adjustment("rsi oversold", 2))
            elif t.rsi_bullish < rsi < t.rsi_momentum_cap:
                adjustments.append(Adjustment("rsi bullish momentum", 1))
            elif rsi > t.rsi_overbought:
                adjustments.append(Adjustment("rsi overbought", -1))

        ratio = technical.volume_ratio
        if ratio is not None and ratio > t.volume_multiplier:
            adjustments.append(Adjustment("volume confirmation", 1))

        if is_overextended(technical, t.fomo_threshold):
            adjustments.append(Adjustment("fomo guard", -2))

        return adjustments

    def score(
        self,
        technical: TechnicalSnapshot | None,
        sentiment: SentimentResult,
        mentions: int,
    ) -> int:
        """Compute the clamped conviction score.

        Args:
            technical: Quote snapshot, or None when unavailable.
            sentiment: Aggregated ticker sentiment.
            mentions: Number of news mentions for the ticker.

        Returns:
            Integer conviction in [1, 10].
        """
        raw = CONVICTION_BASE + sum(a.delta for a in self.explain(technical, sentiment, mentions))
        return max(CONVICTION_MIN, min(CONVICTION_MAX, raw))
