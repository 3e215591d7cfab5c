"""
Data models for the invariant string-conversion engine.
"""

from .classification import Classification
from .enums import (
    Kind,
    LogLevel,
    ScalarKind,
    TimeSpanStyle,
)
from .options import (
    DEFAULT_OPTIONS,
    MAX_DEPTH_PLACEHOLDER,
    TRUNCATION_MARKER,
    RenderOptions,
)
from .result import Result

__all__ = [
    "Classification",
    "Kind",
    "ScalarKind",
    "TimeSpanStyle",
    "LogLevel",
    "RenderOptions",
    "DEFAULT_OPTIONS",
    "MAX_DEPTH_PLACEHOLDER",
    "TRUNCATION_MARKER",
    "Result",
]
