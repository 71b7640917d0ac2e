"""Ticker extraction from free text.

Layers cheap, noisy rules (bare word before a market verb) with
high-precision ones (cashtag, parenthesised, exchange-prefixed). Extraction
never validates: callers must run ``is_valid_ticker`` before any quote
lookup, because the bare-word rule picks up ordinary English.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from violeta.processing.lexicon import Lexicon

_VALID_SHAPE = re.compile(r"[A-Z]{3,5}")


def build_ticker_rules(context_words: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile the extraction rules; group 1 of every rule is the bare symbol."""
    context = "|".join(re.escape(w.upper()) for w in context_words)
    return [
        # NVDA shares / NVDA rose; no boundary after the context word, so STOCKS counts
        re.compile(rf"\b([A-Z]{{1,5}})\b(?=\s+(?:{context}))"),
        # $NVDA
        re.compile(r"\$([A-Z]{1,5})\b"),
        # (NVDA)
        re.compile(r"\(([A-Z]{1,5})\)"),
        # NYSE: XOM / NASDAQ: NVDA
        re.compile(r"\b(?:NYSE|NASDAQ):\s*([A-Z]{1,5})\b"),
    ]


class TickerExtractor:
    """Pulls candidate ticker symbols out of article text."""

    def __init__(self, lexicon: Lexicon | None = None) -> None:
        self._lexicon = lexicon if lexicon is not None else Lexicon.default()
        self._rules = build_ticker_rules(self._lexicon.context_words)

    def extract(self, text: str) -> set[str]:
        """Return every candidate symbol matched by any rule.

        Args:
            text: Raw text; it is upper-cased before matching.

        Returns:
            Set of unvalidated candidates (may include ordinary words).
        """
        if not text:
            return set()

        upper = text.upper()
        tickers: set[str] = set()
        for rule in self._rules:
            for match in rule.finditer(upper):
                tickers.add(match.group(1).strip())
        return tickers

    def is_valid(self, ticker: str) -> bool:
        return is_valid_ticker(ticker, self._lexicon.stop_words)


def is_valid_ticker(ticker: str, stop_words: frozenset[str] | None = None) -> bool:
    """Check whether a candidate is eligible for a quote lookup.

    True iff the symbol is 3-5 uppercase ASCII letters and is not a
    stop-listed word.
    """
    if stop_words is None:
        stop_words = Lexicon.default().stop_words
    if not _VALID_SHAPE.fullmatch(ticker):
        return False
    return ticker not in stop_words


def extract_tickers(text: str) -> set[str]:
    """Extract candidates using the default vocabulary."""
    return TickerExtractor().extract(text)
