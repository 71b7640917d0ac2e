"""Brave provider for news search."""

from violeta.providers.brave.client import BraveNewsProvider

__all__ = ["BraveNewsProvider"]
