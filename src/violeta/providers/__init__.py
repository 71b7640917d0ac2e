"""News and market data provider abstractions.

## Provider Types

- **NewsProvider**: Free-text news search (Brave)
- **QuoteProvider**: Technical snapshots (Alpha Vantage)
- **CompanyInfoProvider**: Company profiles (Finnhub, optional)

## Usage

```python
from violeta.providers.factory import create_providers

providers = create_providers(settings)
snapshot = await providers.quotes.fetch_technical("NVDA")
await providers.close()
```

Concrete clients live in their own subpackages
(`violeta.providers.brave`, `violeta.providers.alphavantage`,
`violeta.providers.finnhub`) and are imported on demand.
"""

from violeta.providers.base import (
    CompanyInfo,
    CompanyInfoProvider,
    NewsProvider,
    QuoteProvider,
)

__all__ = [
    "CompanyInfo",
    "CompanyInfoProvider",
    "NewsProvider",
    "QuoteProvider",
]
