"""Core utilities: logging, exceptions, constants."""

from violeta.core.exceptions import ConfigurationError, VioletaError
from violeta.core.logging import get_logger, scan_context, setup_logging

__all__ = [
    "ConfigurationError",
    "VioletaError",
    "get_logger",
    "scan_context",
    "setup_logging",
]
