"""Exception classes with structured context"""

from typing import Any
from datetime import datetime


class InvariantTextError(Exception):
    """Base exception with context and metadata"""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = False,
        user_message: str | None = None,
    ):
        """
        Initialize exception with context.

        Args:
            message: Technical error message for logs
            details: Additional context (dict for structured logging)
            recoverable: Whether the engine degrades gracefully from this error
            user_message: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.user_message = user_message or message
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        parts = [self.message]

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({details_str})")

        if self.recoverable:
            parts.append("[recoverable]")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "user_message": self.user_message,
            "timestamp": self.timestamp.isoformat(),
        }


class ArgumentNullError(InvariantTextError):
    """A required argument was None"""

    def __init__(self, argument: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["argument"] = argument

        super().__init__(
            message=f"Argument '{argument}' must not be None",
            details=details,
            recoverable=False,
            user_message=f"Missing required value for '{argument}'.",
        )
        self.argument = argument


class ConversionError(InvariantTextError):
    """A converter or custom string representation failed"""

    def __init__(
        self,
        message: str,
        value_type: str,
        strategy: str,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        details.update({"value_type": value_type, "strategy": strategy})

        super().__init__(
            message=message,
            details=details,
            recoverable=True,  # Rendered as empty text
            user_message=f"Could not convert {value_type} to text.",
        )
        self.value_type = value_type
        self.strategy = strategy


class ParseError(InvariantTextError):
    """Text could not be interpreted as the requested scalar type"""

    def __init__(self, message: str, target_type: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["target_type"] = target_type

        super().__init__(
            message=message,
            details=details,
            recoverable=True,  # Falls back to the type's default value
            user_message=f"Could not parse text as {target_type}. Using default value.",
        )
        self.target_type = target_type


class ConfigurationError(InvariantTextError):
    """Settings or options file validation errors"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            recoverable=False,  # Config errors require fix
            user_message=f"Configuration error: {message}",
        )
        self.field = field
        self.value = value
