"""Centralized error containment utilities"""
from typing import Callable, TypeVar
from contextlib import contextmanager
import time
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class ErrorHandler:
    """Centralized error handling with logging and fallbacks"""

    @staticmethod
    def handle_with_fallback(
        operation: Callable[[], T],
        fallback: T,
        error_msg: str,
        log_level: str = "error"
    ) -> T:
        """
        Execute operation with fallback on error.

        Args:
            operation: Function to execute
            fallback: Value to return on error
            error_msg: Error message prefix
            log_level: Log level for errors

        Returns:
            Operation result or fallback value

        Example:
            text = ErrorHandler.handle_with_fallback(
                lambda: converter.convert_to_string(value),
                fallback="",
                error_msg="Converter failed",
                log_level="debug",
            )
        """
        try:
            return operation()
        except Exception as e:
            getattr(logger, log_level)(f"{error_msg}: {e}")
            return fallback

    @staticmethod
    @contextmanager
    def log_duration(operation_name: str, log_level: str = "info"):
        """
        Context manager to log operation duration.

        Example:
            with ErrorHandler.log_duration("Render large payload"):
                text = format_value(payload)
        """
        start = time.perf_counter()
        try:
            getattr(logger, log_level)(f"Starting {operation_name}")
            yield
        finally:
            duration = time.perf_counter() - start
            getattr(logger, log_level)(
                f"{operation_name} completed in {duration:.3f}s"
            )
