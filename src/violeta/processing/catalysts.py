"""Catalyst classification: maps headlines onto a fixed set of event types."""

from __future__ import annotations

import re
from collections.abc import Sequence

from violeta.processing.lexicon import Lexicon
from violeta.processing.models import Article, Catalyst, CatalystType


class CatalystExtractor:
    """Classifies a ticker's articles into corporate-event catalysts.

    Rules are evaluated in order against title and description. Only the
    first catalyst of each type is kept, even if a later article matches
    the same type, so the output holds at most one entry per type in
    first-seen order.
    """

    def __init__(self, lexicon: Lexicon | None = None) -> None:
        self._lexicon = lexicon if lexicon is not None else Lexicon.default()
        self._rules: list[tuple[re.Pattern[str], CatalystType]] = [
            (re.compile(pattern, re.IGNORECASE), CatalystType(kind))
            for pattern, kind in self._lexicon.catalyst_rules
        ]

    def classify(self, text: str) -> list[CatalystType]:
        """Every catalyst type whose rule matches ``text``."""
        return [kind for rule, kind in self._rules if rule.search(text)]

    def extract(self, articles: Sequence[Article]) -> list[Catalyst]:
        """Extract deduplicated catalysts from a ticker's articles.

        Args:
            articles: Articles about the ticker, in ranked order.

        Returns:
            At most one Catalyst per type, in first-seen order.
        """
        found: dict[CatalystType, Catalyst] = {}
        for article in articles:
            for kind in self.classify(article.text):
                if kind not in found:
                    found[kind] = Catalyst(type=kind, headline=article.title, url=article.url)
        return list(found.values())


def extract_catalysts(articles: Sequence[Article]) -> list[Catalyst]:
    """Extract catalysts using the default rules."""
    return CatalystExtractor().extract(articles)
