"""Finnhub company profile provider.

Endpoint used:
    /stock/profile2 -> fetch() (name, ISIN, industry, country)

Rate limiting: free tier = 60 calls/min across all endpoints, well above
the scanner's pacing.
"""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from violeta.core.constants import DEFAULT_FINNHUB_API_URL, PROVIDER_TIMEOUT_SECONDS
from violeta.core.logging import get_logger
from violeta.providers.base import CompanyInfo

logger = get_logger(__name__)


class FinnhubCompanyProvider:
    """Implements CompanyInfoProvider using Finnhub's profile endpoint."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_FINNHUB_API_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http_client: httpx.AsyncClient | None = None
        # Profiles don't change within a scan
        self._cache: dict[str, CompanyInfo | None] = {}

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=PROVIDER_TIMEOUT_SECONDS, follow_redirects=True
            )
        return self._http_client

    async def _fetch(self, endpoint: str, params: dict[str, str | int]) -> Any:
        client = self._get_http_client()
        url = f"{self._base_url}{endpoint}"
        params["token"] = self._api_key

        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return orjson.loads(response.content)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Finnhub API error",
                endpoint=endpoint,
                status=e.response.status_code,
            )
            return None
        except Exception as e:
            logger.warning("Finnhub API request failed", endpoint=endpoint, error=str(e))
            return None

    async def fetch(self, symbol: str) -> CompanyInfo | None:
        """Fetch the company profile; None if Finnhub doesn't know the symbol."""
        symbol = symbol.upper()
        if symbol in self._cache:
            return self._cache[symbol]

        data = await self._fetch("/stock/profile2", {"symbol": symbol})
        info: CompanyInfo | None = None
        # Finnhub answers unknown symbols with an empty object
        if isinstance(data, dict) and data.get("name"):
            info = CompanyInfo(
                name=data["name"],
                isin=data.get("isin") or None,
                sector=data.get("gsector") or None,
                industry=data.get("finnhubIndustry") or None,
                country=data.get("country") or None,
            )
        else:
            logger.debug("No company profile", symbol=symbol)

        self._cache[symbol] = info
        return info

    async def close(self) -> None:
        """Clean up resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("FinnhubCompanyProvider closed")
