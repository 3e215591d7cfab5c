"""
Utility modules for invariant-text.
"""

from .error_handler import ErrorHandler
from .logging import configure_default_logging, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "configure_default_logging",
    "ErrorHandler",
]
