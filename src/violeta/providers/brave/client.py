"""Brave News Search provider.

API docs: https://api.search.brave.com/app/documentation/news-search
- News search: GET /news/search?q=...&count=...&freshness=pd
"""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from violeta.core.constants import (
    DEFAULT_BRAVE_API_URL,
    DEFAULT_NEWS_PER_QUERY,
    PROVIDER_TIMEOUT_SECONDS,
)
from violeta.core.exceptions import NewsProviderError
from violeta.core.logging import get_logger
from violeta.processing.models import Article

logger = get_logger(__name__)

# Brave freshness: pd (past day), pw (past week), pm (past month), py (past year)
DEFAULT_FRESHNESS = "pd"


class BraveNewsProvider:
    """News provider backed by the Brave News Search API.

    Usage:
        provider = BraveNewsProvider(api_key="your_key")
        articles = await provider.search("semiconductor stocks AI")
        await provider.close()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BRAVE_API_URL,
        default_count: int = DEFAULT_NEWS_PER_QUERY,
        freshness: str = DEFAULT_FRESHNESS,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._default_count = default_count
        self._freshness = freshness
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=PROVIDER_TIMEOUT_SECONDS,
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": self._api_key,
                },
            )
        return self._http_client

    async def search(self, query: str, count: int | None = None) -> list[Article]:
        """Search news from the past day.

        Args:
            query: Free-text query
            count: Maximum number of articles (defaults to the provider setting)

        Returns:
            List of articles, empty on any failure
        """
        params: dict[str, str | int] = {
            "q": query,
            "count": count or self._default_count,
            "freshness": self._freshness,
        }

        client = self._get_http_client()
        try:
            response = await client.get(f"{self._base_url}/news/search", params=params)
            response.raise_for_status()
            data = orjson.loads(response.content)
            articles = _parse_results(data)
        except httpx.HTTPStatusError as e:
            logger.warning("Brave API error", query=query, status=e.response.status_code)
            return []
        except Exception as e:
            logger.warning("Brave news search failed", query=query, error=str(e))
            return []

        logger.debug("Brave news search", query=query, results=len(articles))
        return articles

    async def close(self) -> None:
        """Clean up resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("BraveNewsProvider closed")


def _parse_results(data: Any) -> list[Article]:
    """Convert a Brave news payload into articles, skipping untitled entries."""
    if not isinstance(data, dict):
        raise NewsProviderError(f"Unexpected Brave payload type: {type(data).__name__}")

    articles: list[Article] = []
    for r in data.get("results") or []:
        title = (r.get("title") or "").strip()
        if not title:
            continue
        articles.append(
            Article(
                title=title,
                description=r.get("description") or "",
                url=r.get("url") or "",
                published_at=r.get("page_age") or r.get("age"),
            )
        )
    return articles
