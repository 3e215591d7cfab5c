"""
Core components of the invariant-text engine.
"""

from .bridge import (
    ConversionBridge,
    ConverterRegistry,
    StringConverter,
    default_registry,
    string_converter,
)
from .classifier import classify, scalar_kind_of
from .config import EngineSettings, get_settings, reset_settings
from .parser import can_parse, default_value, parse_duration, parse_scalar, parse_value
from .renderer import Renderer, format_value
from .scalars import format_duration, format_enum, format_scalar

__all__ = [
    "ConversionBridge",
    "ConverterRegistry",
    "StringConverter",
    "default_registry",
    "string_converter",
    "classify",
    "scalar_kind_of",
    "EngineSettings",
    "get_settings",
    "reset_settings",
    "can_parse",
    "default_value",
    "parse_duration",
    "parse_scalar",
    "parse_value",
    "Renderer",
    "format_value",
    "format_duration",
    "format_enum",
    "format_scalar",
]
