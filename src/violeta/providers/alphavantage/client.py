"""Alpha Vantage quote provider.

Builds a technical snapshot from three endpoints:
- TIME_SERIES_INTRADAY (15min): latest price, volume and timestamp
- RSI (15min, 14 periods): latest RSI (optional)
- TIME_SERIES_DAILY: today's open, previous close, average daily volume (optional)

Rate limiting: free tier = 5 calls/min. The scanner paces tickers; this
client makes no retries.
"""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from violeta.core.constants import (
    AVG_VOLUME_LOOKBACK_DAYS,
    DEFAULT_ALPHA_VANTAGE_API_URL,
    PROVIDER_TIMEOUT_SECONDS,
    RSI_TIME_PERIOD,
)
from violeta.core.exceptions import QuoteProviderError
from violeta.core.logging import get_logger
from violeta.processing.models import TechnicalSnapshot

logger = get_logger(__name__)

INTRADAY_INTERVAL = "15min"

# Payload keys Alpha Vantage uses instead of HTTP errors
_ERROR_KEYS = ("Error Message", "Note", "Information")


class AlphaVantageQuoteProvider:
    """Quote provider backed by the Alpha Vantage REST API.

    Usage:
        provider = AlphaVantageQuoteProvider(api_key="your_key")
        snapshot = await provider.fetch_technical("NVDA")
        await provider.close()
    """

    def __init__(self, api_key: str, base_url: str = DEFAULT_ALPHA_VANTAGE_API_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=PROVIDER_TIMEOUT_SECONDS)
        return self._http_client

    async def _query(self, params: dict[str, str | int]) -> dict[str, Any]:
        """Call the query endpoint and reject Alpha Vantage error payloads."""
        client = self._get_http_client()
        response = await client.get(self._base_url, params={**params, "apikey": self._api_key})
        response.raise_for_status()
        data = orjson.loads(response.content)

        if not isinstance(data, dict):
            raise QuoteProviderError(f"Unexpected payload type: {type(data).__name__}")
        for key in _ERROR_KEYS:
            if key in data:
                raise QuoteProviderError(f"{key}: {data[key]}")
        return data

    async def fetch_technical(self, symbol: str) -> TechnicalSnapshot | None:
        """Fetch a technical snapshot for ``symbol``.

        Intraday data is required; RSI and daily data are best-effort and
        left as None when unavailable.

        Returns:
            TechnicalSnapshot, or None on any failure of the intraday call
        """
        symbol = symbol.upper()
        try:
            intraday = await self._query(
                {
                    "function": "TIME_SERIES_INTRADAY",
                    "symbol": symbol,
                    "interval": INTRADAY_INTERVAL,
                }
            )
            series = intraday.get(f"Time Series ({INTRADAY_INTERVAL})")
            if not series:
                logger.warning("No intraday data", symbol=symbol)
                return None

            latest_time = max(series)
            latest = series[latest_time]
            price = float(latest["4. close"])
            volume = int(float(latest["5. volume"]))
        except httpx.HTTPStatusError as e:
            logger.warning("Alpha Vantage API error", symbol=symbol, status=e.response.status_code)
            return None
        except Exception as e:
            logger.warning("Alpha Vantage intraday fetch failed", symbol=symbol, error=str(e))
            return None

        rsi = await self._fetch_rsi(symbol)
        daily_open, prev_close, avg_volume = await self._fetch_daily(symbol)

        try:
            return TechnicalSnapshot(
                symbol=symbol,
                price=price,
                daily_open=daily_open,
                prev_close=prev_close,
                volume=volume,
                avg_volume=avg_volume,
                rsi=rsi,
                timestamp=latest_time,
            )
        except ValueError as e:
            logger.warning("Invalid technical snapshot", symbol=symbol, error=str(e))
            return None

    async def _fetch_rsi(self, symbol: str) -> float | None:
        try:
            data = await self._query(
                {
                    "function": "RSI",
                    "symbol": symbol,
                    "interval": INTRADAY_INTERVAL,
                    "time_period": RSI_TIME_PERIOD,
                    "series_type": "close",
                }
            )
            series = data.get("Technical Analysis: RSI")
            if not series:
                return None
            return float(series[max(series)]["RSI"])
        except Exception as e:
            logger.debug("RSI unavailable", symbol=symbol, error=str(e))
            return None

    async def _fetch_daily(self, symbol: str) -> tuple[float | None, float | None, float | None]:
        """Return (today's open, previous close, average daily volume)."""
        try:
            data = await self._query({"function": "TIME_SERIES_DAILY", "symbol": symbol})
            series = data.get("Time Series (Daily)")
            if not series:
                return None, None, None
            days = sorted(series, reverse=True)
            daily_open = float(series[days[0]]["1. open"])
            prev_close = float(series[days[1]]["4. close"]) if len(days) > 1 else None
            recent = [float(series[d]["5. volume"]) for d in days[:AVG_VOLUME_LOOKBACK_DAYS]]
            avg_volume = sum(recent) / len(recent)
            return daily_open, prev_close, avg_volume
        except Exception as e:
            logger.debug("Daily series unavailable", symbol=symbol, error=str(e))
            return None, None, None

    async def close(self) -> None:
        """Clean up resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("AlphaVantageQuoteProvider closed")
