"""
invariant-text - Culture-Invariant Structural String Conversion
Deterministic diagnostic text for arbitrary Python values, and the
matching scalar parser.
"""

# Quiet structlog default for library use; the CLI reconfigures it
from .utils.logging import configure_default_logging
configure_default_logging()

from .core.bridge import ConverterRegistry, StringConverter, default_registry, string_converter
from .core.classifier import classify
from .core.parser import can_parse, parse_scalar, parse_value
from .core.renderer import format_value
from .exceptions import (
    ArgumentNullError,
    ConfigurationError,
    ConversionError,
    InvariantTextError,
    ParseError,
)
from .models.enums import Kind, ScalarKind, TimeSpanStyle
from .models.options import DEFAULT_OPTIONS, RenderOptions

__version__ = "0.1.0"

__all__ = [
    "format_value",
    "parse_scalar",
    "parse_value",
    "can_parse",
    "classify",
    "RenderOptions",
    "DEFAULT_OPTIONS",
    "ConverterRegistry",
    "StringConverter",
    "default_registry",
    "string_converter",
    "Kind",
    "ScalarKind",
    "TimeSpanStyle",
    "InvariantTextError",
    "ArgumentNullError",
    "ConversionError",
    "ParseError",
    "ConfigurationError",
]
