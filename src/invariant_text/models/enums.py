"""Enums for value classification and settings.

This module provides the closed tag sets the engine dispatches on,
plus the enum types used by configuration.
"""

from enum import Enum


class Kind(str, Enum):
    """Rendering branch assigned to a value by the classifier.

    Attributes:
        NULL: None or a masked value
        SCALAR: A member of the closed primitive kind set
        ENUM: An enumeration member, rendered by name
        SEQUENCE: Any non-string iterable of elements
        MAP: Key/value pair containers (mappings, pydantic models)
        MULTI_ARRAY: numpy arrays of rank 2 or more
        CONVERTIBLE: Everything else, handed to the conversion bridge
    """
    NULL = "null"
    SCALAR = "scalar"
    ENUM = "enum"
    SEQUENCE = "sequence"
    MAP = "map"
    MULTI_ARRAY = "multi_array"
    CONVERTIBLE = "convertible"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class ScalarKind(str, Enum):
    """Closed set of primitive kinds with invariant text forms.

    Attributes:
        BOOLEAN: bool, numpy.bool_
        INTEGER: int and every numpy integer width
        FLOAT: float, numpy.float32, numpy.float64
        HALF: numpy.float16
        DECIMAL: decimal.Decimal
        CHARACTER: single-character str
        STRING: any other str
        GUID: uuid.UUID
        DATE: datetime.date
        TIME: datetime.time
        DATE_TIME: naive datetime.datetime
        DATE_TIME_OFFSET: timezone-aware datetime.datetime
        DURATION: datetime.timedelta, numpy.timedelta64
    """
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    HALF = "half"
    DECIMAL = "decimal"
    CHARACTER = "character"
    STRING = "string"
    GUID = "guid"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    DATE_TIME_OFFSET = "date_time_offset"
    DURATION = "duration"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class TimeSpanStyle(str, Enum):
    """Named duration formats.

    Attributes:
        CONSTANT: [-][d.]hh:mm:ss[.fffffff]
        GENERAL_SHORT: [-][d:]h:mm:ss[.FFFFFFF]
        GENERAL_LONG: [-]d:hh:mm:ss.fffffff
    """
    CONSTANT = "c"
    GENERAL_SHORT = "g"
    GENERAL_LONG = "G"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class LogLevel(str, Enum):
    """Standard logging levels.

    Attributes:
        DEBUG: Detailed diagnostic information
        INFO: General informational messages
        WARNING: Warning messages for potentially problematic situations
        ERROR: Error messages for serious problems
        CRITICAL: Critical messages for severe errors
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


# Export all enums
__all__ = [
    "Kind",
    "ScalarKind",
    "TimeSpanStyle",
    "LogLevel",
]
