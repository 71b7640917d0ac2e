"""Finnhub provider for company profiles."""

from violeta.providers.finnhub.company import FinnhubCompanyProvider

__all__ = ["FinnhubCompanyProvider"]
