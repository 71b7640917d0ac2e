"""Data models for the scan pipeline.

These models define the data structures passed between pipeline stages:
- Articles and per-ticker mention records (discovery)
- Catalysts and technical snapshots (per-ticker analysis)
- Trade plans, signals and the scan result (output)
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from violeta.processing.sentiment.models import SentimentResult
from violeta.providers.base import CompanyInfo


# =============================================================================
# Articles & Mentions
# =============================================================================


class Article(BaseModel):
    """A news article returned by a news provider."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    url: str = ""
    published_at: str | None = None

    @property
    def text(self) -> str:
        """Title and description joined, the text every rule is matched against."""
        return f"{self.title} {self.description}"


class ArticleRef(BaseModel):
    """Reference to an article kept on a ticker mention."""

    title: str
    url: str = ""
    published_at: str | None = None


class TickerMention(BaseModel):
    """Mention count and supporting articles for one ticker within a scan."""

    ticker: str
    count: int = Field(default=0, ge=0)
    articles: list[ArticleRef] = Field(default_factory=list)


# =============================================================================
# Catalysts
# =============================================================================


class CatalystType(str, Enum):
    """Corporate event kinds recognised in headlines."""

    partnership = "Partnership"
    acquisition = "Acquisition"
    earnings = "Earnings"
    product_launch = "Product Launch"
    analyst_upgrade = "Analyst Upgrade"
    contract_win = "Contract Win"
    regulatory_approval = "Regulatory Approval"
    demand_increase = "Demand Increase"


class Catalyst(BaseModel):
    """A classified event with the headline that triggered it."""

    type: CatalystType
    headline: str
    url: str = ""


# =============================================================================
# Technical Snapshot
# =============================================================================


class TechnicalSnapshot(BaseModel):
    """Quote and indicator data for one symbol."""

    symbol: str
    price: float = Field(gt=0.0)
    daily_open: float | None = None
    prev_close: float | None = None
    volume: int = Field(default=0, ge=0)
    avg_volume: float | None = None
    rsi: float | None = None
    timestamp: str | None = None

    @property
    def volume_ratio(self) -> float | None:
        """Current volume over average volume, or None when no average is known."""
        if not self.avg_volume:
            return None
        return self.volume / self.avg_volume


# =============================================================================
# Trade Plan
# =============================================================================


WatchReason = Literal["conviction below threshold", "overextended", "negative sentiment"]


class TradeSetup(BaseModel):
    """Actionable entry with stop and target."""

    action: Literal["TRADE"] = "TRADE"
    entry: float
    stop_loss: float
    take_profit: float
    risk_percent: str
    reward_percent: str


class WatchSetup(BaseModel):
    """No entry yet; the level to watch and why."""

    action: Literal["WATCH"] = "WATCH"
    reason: WatchReason
    watch_price: float
    detail: str = ""


TradePlan = Annotated[TradeSetup | WatchSetup, Field(discriminator="action")]


# =============================================================================
# Signal & Scan Result
# =============================================================================


class Signal(BaseModel):
    """Terminal record for one analyzed ticker."""

    ticker: str
    company: CompanyInfo | None = None
    mentions: int = Field(default=0, ge=0)
    technical: TechnicalSnapshot
    sentiment: SentimentResult
    catalysts: list[Catalyst] = Field(default_factory=list)
    conviction: int = Field(ge=1, le=10)
    trade_plan: TradePlan
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_trade(self) -> bool:
        return self.trade_plan.action == "TRADE"


class ScanResult(BaseModel):
    """Output of one scan: ranked signals plus corpus-level aggregates."""

    timestamp: datetime
    strategy: Literal["discovery", "watchlist"]
    signals: list[Signal] = Field(default_factory=list)
    sectors: dict[str, int] = Field(default_factory=dict)
    top_tickers: list[TickerMention] = Field(default_factory=list)
    articles_analyzed: int = 0
    tickers_discovered: int = 0
    tickers_analyzed: int = 0
    tickers_skipped: list[str] = Field(default_factory=list)
    high_conviction_count: int = 0

    @property
    def trades(self) -> list[Signal]:
        return [s for s in self.signals if s.is_trade]
