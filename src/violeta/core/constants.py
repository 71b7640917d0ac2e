"""Application-wide constants.

These are fixed values that don't change between environments.
For configurable values, see config.py Settings.
"""

# ─────────────────────────────────────────────────────────────
# API Rate Limits (external constraints)
# ─────────────────────────────────────────────────────────────
ALPHA_VANTAGE_CALLS_PER_MINUTE = 5  # Free tier limit
ALPHA_VANTAGE_CALLS_PER_SNAPSHOT = 3  # intraday, RSI, daily
# One ticker per pause keeps the snapshot calls inside the per-minute budget
DEFAULT_TICKER_DELAY_SECONDS = (
    60 * ALPHA_VANTAGE_CALLS_PER_SNAPSHOT / ALPHA_VANTAGE_CALLS_PER_MINUTE
)
DEFAULT_QUERY_DELAY_SECONDS = 1.0

# ─────────────────────────────────────────────────────────────
# API URL Defaults (used as defaults in Settings)
# ─────────────────────────────────────────────────────────────
DEFAULT_BRAVE_API_URL = "https://api.search.brave.com/res/v1"
DEFAULT_ALPHA_VANTAGE_API_URL = "https://www.alphavantage.co/query"
DEFAULT_FINNHUB_API_URL = "https://finnhub.io/api/v1"

PROVIDER_TIMEOUT_SECONDS = 10.0

# ─────────────────────────────────────────────────────────────
# Scan Limits
# ─────────────────────────────────────────────────────────────
DEFAULT_DISCOVERY_TOP_N = 30
DEFAULT_MAX_TICKERS = 15
DEFAULT_NEWS_PER_QUERY = 10
DEFAULT_NEWS_PER_TICKER = 5
AVG_VOLUME_LOOKBACK_DAYS = 5
RSI_TIME_PERIOD = 14

# ─────────────────────────────────────────────────────────────
# Conviction Scale
# ─────────────────────────────────────────────────────────────
CONVICTION_BASE = 5
CONVICTION_MIN = 1
CONVICTION_MAX = 10

# ─────────────────────────────────────────────────────────────
# Trade Plan Levels
# ─────────────────────────────────────────────────────────────
STOP_LOSS_PCT = 3.0
TAKE_PROFIT_PCT = 7.0
LOW_CONVICTION_WATCH_DISCOUNT = 0.97
OVEREXTENDED_WATCH_PREMIUM = 1.02
NEGATIVE_SENTIMENT_WATCH_DISCOUNT = 0.95

# ─────────────────────────────────────────────────────────────
# Discovery
# ─────────────────────────────────────────────────────────────
DEFAULT_DISCOVERY_QUERIES = [
    # Market movers
    "stock surge today",
    "stocks rally sector",
    "shares jump after",
    "stock gains demand",
    # Sector trends
    "semiconductor stocks AI",
    "energy stocks demand",
    "biotech breakthrough",
    "defense stocks geopolitical",
    # Geopolitical
    "sanctions impact stocks",
    "trade deal stocks benefit",
    "war stocks affected",
    # Corporate events
    "earnings beat stocks",
    "partnership announced stocks",
    "acquisition target stocks",
]
