"""Custom exceptions for Violeta."""


class VioletaError(Exception):
    """Base exception for all Violeta errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


# Configuration errors (fatal, abort the scan before any fetch)
class ConfigurationError(VioletaError):
    """Required credentials or thresholds are missing or invalid."""


# Provider errors (always degraded to empty results at the provider boundary)
class ProviderError(VioletaError):
    """Base error for data provider layer."""


class NewsProviderError(ProviderError):
    """News search returned an unusable response."""


class QuoteProviderError(ProviderError):
    """Quote or indicator endpoint returned an unusable response."""
