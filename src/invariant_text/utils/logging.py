"""
Structured logging for invariant-text.

The engine logs contained failures (converter errors, parse fallbacks)
at debug level. Importing the package installs a quiet default so
library users see nothing unless they configure logging; the CLI calls
``setup_logging`` with the active settings.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ..models.enums import LogLevel

if TYPE_CHECKING:
    from ..core.config import EngineSettings


def setup_file_logging(
    log_file: Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5  # 10MB
) -> RotatingFileHandler:
    """
    Configure rotating file handler for logs.

    Args:
        log_file: Path to the log file
        max_bytes: Maximum log file size before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Returns:
        Configured RotatingFileHandler instance
    """
    file_handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)

    return file_handler


def configure_default_logging() -> None:
    """
    Install a warning-level structlog configuration unless the host
    application has already configured structlog.
    """
    if structlog.is_configured():
        return

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        cache_logger_on_first_use=False,
    )


def setup_logging(settings: "EngineSettings | None" = None) -> None:
    """
    Configure structured logging with appropriate processors.

    Sets up structlog with timestamping, log level filtering, console
    rendering and optional JSON file logging with rotation.

    Args:
        settings: Settings to apply (default: global settings)
    """
    if settings is None:
        from ..core.config import get_settings

        settings = get_settings()

    level = getattr(logging, settings.log_level.value, logging.WARNING)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.log_file is not None:
        settings.ensure_log_directory()
        file_handler = setup_file_logging(
            log_file=settings.log_file,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
        )

        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(),
                ],
            )
        )

        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
        root_logger.setLevel(level)

        # Handlers do the rendering
        logger_factory = structlog.stdlib.LoggerFactory()
        processors = shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        # Console-only mode; stderr keeps rendered values on stdout clean
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)  # type: ignore[assignment]
        processors = shared_processors + [
            (
                structlog.processors.JSONRenderer()
                if settings.log_level == LogLevel.DEBUG
                else structlog.dev.ConsoleRenderer()
            ),
        ]

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
