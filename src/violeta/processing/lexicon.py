"""Keyword and pattern tables used by the rule engines.

The tables are plain data. ``Lexicon`` bundles them so every component
can be given a custom vocabulary (from a JSON file or built in a test)
instead of reading module globals.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import orjson

# =============================================================================
# Sentiment keywords (substring match on lower-cased text)
# =============================================================================

TIERS = ("strong", "medium", "weak")

TIER_WEIGHTS: dict[str, float] = {
    "strong": 0.30,
    "medium": 0.15,
    "weak": 0.05,
}

BULLISH_SIGNALS: dict[str, list[str]] = {
    "strong": [
        "breakthrough",
        "surges",
        "soars",
        "record high",
        "beats estimates",
        "exceeds",
        "partnership",
        "acquisition",
        "expansion",
        "approved",
    ],
    "medium": [
        "gains",
        "rises",
        "growth",
        "increase",
        "positive",
        "upgrade",
        "buy rating",
        "demand",
        "revenue",
    ],
    "weak": ["stable", "maintains", "holds", "steady"],
}

BEARISH_SIGNALS: dict[str, list[str]] = {
    "strong": [
        "plunges",
        "crashes",
        "scandal",
        "fraud",
        "bankruptcy",
        "lawsuit",
        "recall",
        "investigation",
        "suspended",
    ],
    "medium": ["falls", "drops", "declines", "miss", "downgrade", "sell rating", "loss", "cuts"],
    "weak": ["weakness", "concerns", "uncertainty", "cautious"],
}

# =============================================================================
# Catalyst rules (case-insensitive regex → event type), evaluated in order
# =============================================================================

CATALYST_RULES: list[tuple[str, str]] = [
    (r"partnership|collaboration|deal", "Partnership"),
    (r"acquisition|acquires|bought", "Acquisition"),
    (r"earnings|revenue|profit", "Earnings"),
    (r"product|launch|release", "Product Launch"),
    (r"upgrade|rating", "Analyst Upgrade"),
    (r"contract|wins|awarded", "Contract Win"),
    (r"regulation|approval|cleared", "Regulatory Approval"),
    (r"demand|orders|sales", "Demand Increase"),
]

# =============================================================================
# Sector patterns (case-insensitive regex), independent of ticker attribution
# =============================================================================

SECTOR_PATTERNS: dict[str, str] = {
    "semiconductor": r"semiconductor|chip|\bAI\b|artificial intelligence|GPU|processor",
    "energy": r"energy|oil|gas|renewable|solar|wind",
    "biotech": r"biotech|pharma|drug|medical|healthcare",
    "defense": r"defense|military|weapon|aerospace",
    "finance": r"bank|financial|fintech|payment",
    "retail": r"retail|consumer|ecommerce",
}

# =============================================================================
# Ticker extraction
# =============================================================================

# Words that, following a bare uppercase token, suggest the token is a symbol
MARKET_CONTEXT_WORDS: tuple[str, ...] = ("STOCK", "SHARES", "ROSE", "FELL", "GAINED", "DROPPED")

# Uppercase tokens of ticker length that are ordinary words or jargon
TICKER_STOP_WORDS: frozenset[str] = frozenset(
    {
        # Articles, pronouns, conjunctions, prepositions
        "THE", "AND", "FOR", "BUT", "NOT", "NOR", "YET", "ARE", "WAS", "WERE",
        "YOU", "HER", "HIM", "HIS", "SHE", "ITS", "OUR", "WHO", "WHY", "HOW",
        "THEY", "THEM", "THIS", "THAT", "THESE", "THOSE", "THEIR", "THERE",
        "WITH", "FROM", "INTO", "ONTO", "OVER", "UNDER", "ABOUT", "AFTER",
        "WHAT", "WHEN", "WHERE", "WHICH", "WHILE", "THAN", "THEN", "ALSO",
        "HAVE", "HAS", "HAD", "WILL", "WOULD", "COULD", "SHALL", "SHOULD",
        "CAN", "MAY", "MIGHT", "MUST", "DID", "DOES", "ALL", "ANY", "ONE",
        "TWO", "NEW", "NOW", "OLD", "OUT", "OFF", "GET", "GOT", "SAY", "SAYS",
        "SAID", "SEE", "SET", "USE", "WAY", "YOUR", "JUST", "SOME", "MORE",
        "MOST", "MUCH", "VERY", "ONLY", "EVEN", "BACK", "DOWN", "HERE", "BEEN",
        "BEING", "AMID", "AMONG", "AHEAD", "AGAIN",
        # Market-context words and common headline verbs
        "STOCK", "STOCKS", "SHARE", "ROSE", "FELL", "GAINS", "DROPS", "JUMP",
        "JUMPS", "SURGE", "RALLY", "HIGH", "LOW", "LOWER", "HIGHER", "TODAY",
        "WEEK", "YEAR", "DAY", "DAILY", "NEWS", "LIVE", "CLOSE", "OPEN",
        "TOP", "BEST", "BIG", "WALL", "DEAL", "DEALS", "SALES", "WINS",
        # Finance jargon and institutions
        "ETF", "ETFS", "CEO", "CFO", "COO", "CTO", "IPO", "SEC", "FED", "FDA",
        "FTC", "DOJ", "IRS", "IMF", "GDP", "CPI", "PPI", "PCE", "EPS", "ROI",
        "ROE", "ESG", "NYSE", "AMEX", "OTC", "DOW", "SPX", "YTD", "YOY",
        "QOQ", "ATH", "LLC", "INC", "CORP", "LTD", "PLC", "BUY", "SELL",
        "HOLD", "LONG", "SHORT", "CALL", "CALLS", "PUTS", "BULL", "BEAR",
        # Currencies and units
        "USD", "EUR", "GBP", "JPY", "CNY", "CAD", "AUD", "CHF", "BPS", "PCT",
        "MLN", "BLN", "BILLION", "KWH",
        # Places and organisations
        "USA", "NYC", "NATO", "OPEC", "CHINA", "JAPAN", "INDIA", "EUROPE",
        # Tech abbreviations
        "API", "APP", "GPU", "CPU", "EVS",
    }
)  # fmt: skip


@dataclass(frozen=True)
class Lexicon:
    """Vocabulary for ticker, sentiment, catalyst and sector rules."""

    bullish: Mapping[str, list[str]] = field(default_factory=lambda: dict(BULLISH_SIGNALS))
    bearish: Mapping[str, list[str]] = field(default_factory=lambda: dict(BEARISH_SIGNALS))
    tier_weights: Mapping[str, float] = field(default_factory=lambda: dict(TIER_WEIGHTS))
    catalyst_rules: tuple[tuple[str, str], ...] = tuple(CATALYST_RULES)
    sector_patterns: Mapping[str, str] = field(default_factory=lambda: dict(SECTOR_PATTERNS))
    stop_words: frozenset[str] = TICKER_STOP_WORDS
    context_words: tuple[str, ...] = MARKET_CONTEXT_WORDS

    def __post_init__(self) -> None:
        for name, table in (("bullish", self.bullish), ("bearish", self.bearish)):
            unknown = set(table) - set(self.tier_weights)
            if unknown:
                raise ValueError(f"{name} tiers without a weight: {sorted(unknown)}")

    @classmethod
    def default(cls) -> Lexicon:
        return cls()

    def with_stop_words(self, extra: Iterable[str]) -> Lexicon:
        """Return a copy whose stop-list also contains ``extra`` (upper-cased)."""
        words = {w.upper() for w in extra}
        if not words:
            return self
        return dataclasses.replace(self, stop_words=self.stop_words | words)

    @classmethod
    def from_json_file(cls, path: Path) -> Lexicon:
        """Load a lexicon from a JSON file, keeping defaults for missing keys.

        Recognised keys: ``bullish``, ``bearish``, ``tier_weights``,
        ``catalyst_rules`` (list of ``[pattern, type]`` pairs or
        ``{"pattern": ..., "type": ...}`` objects), ``sector_patterns``,
        ``stop_words`` and ``context_words``.

        Args:
            path: Path to the JSON document.

        Returns:
            Lexicon instance.
        """
        data: dict[str, Any] = orjson.loads(path.read_bytes())
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Lexicon:
        kwargs: dict[str, Any] = {}

        for key in ("bullish", "bearish"):
            if key in data:
                kwargs[key] = {tier: list(words) for tier, words in data[key].items()}
        if "tier_weights" in data:
            kwargs["tier_weights"] = {k: float(v) for k, v in data["tier_weights"].items()}
        if "catalyst_rules" in data:
            rules: list[tuple[str, str]] = []
            for rule in data["catalyst_rules"]:
                if isinstance(rule, Mapping):
                    rules.append((rule["pattern"], rule["type"]))
                else:
                    pattern, kind = rule
                    rules.append((pattern, kind))
            kwargs["catalyst_rules"] = tuple(rules)
        if "sector_patterns" in data:
            kwargs["sector_patterns"] = dict(data["sector_patterns"])
        if "stop_words" in data:
            kwargs["stop_words"] = frozenset(w.upper() for w in data["stop_words"])
        if "context_words" in data:
            kwargs["context_words"] = tuple(w.upper() for w in data["context_words"])

        return cls(**kwargs)
