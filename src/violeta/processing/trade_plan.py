"""Trade plan generation: ordered guards mapping conviction to WATCH or TRADE.

Guards are checked in a fixed order and the first match wins:

1. conviction below the minimum
2. price overextended above the daily open (FOMO guard)
3. negative sentiment
4. otherwise a TRADE with a 3% stop and a 7% target
"""

from __future__ import annotations

from violeta.core.constants import (
    LOW_CONVICTION_WATCH_DISCOUNT,
    NEGATIVE_SENTIMENT_WATCH_DISCOUNT,
    OVEREXTENDED_WATCH_PREMIUM,
    STOP_LOSS_PCT,
    TAKE_PROFIT_PCT,
)
from violeta.processing.conviction import ConvictionThresholds, is_overextended
from violeta.processing.models import TechnicalSnapshot, TradeSetup, WatchSetup
from violeta.processing.sentiment.models import SentimentResult


def _cents(value: float) -> float:
    return round(value, 2)


def _pct(value: float) -> str:
    return f"{value:g}%"


class TradePlanGenerator:
    """Maps (conviction, technical, sentiment) to a concrete plan."""

    def __init__(self, thresholds: ConvictionThresholds | None = None) -> None:
        self._t = thresholds if thresholds is not None else ConvictionThresholds()

    def generate(
        self,
        conviction: int,
        technical: TechnicalSnapshot,
        sentiment: SentimentResult,
    ) -> TradeSetup | WatchSetup:
        price = technical.price

        if conviction < self._t.min_conviction:
            return WatchSetup(
                reason="conviction below threshold",
                watch_price=_cents(price * LOW_CONVICTION_WATCH_DISCOUNT),
                detail=f"Conviction {conviction}/10 below minimum {self._t.min_conviction}/10",
            )

        daily_open = technical.daily_open
        if daily_open is not None and is_overextended(technical, self._t.fomo_threshold):
            run_up = (price / daily_open - 1) * 100
            return WatchSetup(
                reason="overextended",
                watch_price=_cents(daily_open * OVEREXTENDED_WATCH_PREMIUM),
                detail=(
                    f"Price {run_up:.1f}% above daily open "
                    f"(limit {self._t.fomo_threshold * 100:g}%)"
                ),
            )

        if sentiment.score < 0:
            return WatchSetup(
                reason="negative sentiment",
                watch_price=_cents(price * NEGATIVE_SENTIMENT_WATCH_DISCOUNT),
                detail=f"News sentiment {sentiment.score:+.2f}",
            )

        return TradeSetup(
            entry=_cents(price),
            stop_loss=_cents(price * (1 - STOP_LOSS_PCT / 100)),
            take_profit=_cents(price * (1 + TAKE_PROFIT_PCT / 100)),
            risk_percent=_pct(STOP_LOSS_PCT),
            reward_percent=_pct(TAKE_PROFIT_PCT),
        )
