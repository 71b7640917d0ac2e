"""Violeta: news-driven conviction scanner."""

__version__ = "0.1.0"
