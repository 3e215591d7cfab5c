"""
Scalar Formatter - invariant text for the closed set of primitive kinds.

Every rule here is locale-independent: numbers go through ``str`` or
``format`` (never the ``n`` locale spec), temporal values through
``isoformat`` or ``strftime`` with the C-locale directives.
"""

import enum
import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable

import numpy as np

from ..models.classification import Classification
from ..models.enums import Kind, ScalarKind, TimeSpanStyle
from ..models.options import RenderOptions

DEFAULT_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATE_TIME_OFFSET_FORMAT = "%Y-%m-%d %H:%M:%S %:z"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M:%S"

# 100ns ticks per microsecond; fractions are printed with 7 digits
TICKS_PER_MICROSECOND = 10


def _format_boolean(value: Any, options: RenderOptions) -> str:
    return "True" if value else "False"


def _format_integer(value: Any, options: RenderOptions) -> str:
    # str(int) is capped by sys.get_int_max_str_digits(); Decimal is not
    return f"{Decimal(int(value)):f}"


def _format_non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "-Infinity" if value < 0 else "Infinity"


def _format_binary_float(value: Any, spec: str | None) -> str:
    if not math.isfinite(float(value)):
        return _format_non_finite(float(value))
    if spec:
        return format(value, spec)
    # numpy scalars print the shortest text that round-trips at their own precision
    return str(value)


def _format_float(value: Any, options: RenderOptions) -> str:
    spec = options.float_format if isinstance(value, np.float32) else options.double_format
    return _format_binary_float(value, spec)


def _format_half(value: Any, options: RenderOptions) -> str:
    return _format_binary_float(value, options.float_format)


def _format_decimal(value: Decimal, options: RenderOptions) -> str:
    if value.is_nan():
        return "NaN"
    if value.is_infinite():
        return "-Infinity" if value.is_signed() else "Infinity"
    if options.decimal_format:
        return format(value, options.decimal_format)
    return str(value)


def _format_text(value: str, options: RenderOptions) -> str:
    return str(value)


def _format_guid(value: Any, options: RenderOptions) -> str:
    return str(value)


def format_utc_offset(offset: timedelta) -> str:
    """``±HH:mm`` for a UTC offset"""
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    hours, minutes = divmod(minutes, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _format_date_time(value: datetime, options: RenderOptions) -> str:
    fmt = options.date_time_format
    naive = value.replace(tzinfo=None)
    if not fmt or fmt == DEFAULT_DATE_TIME_FORMAT:
        # isoformat zero-pads years below 1000, strftime("%Y") does not everywhere
        return naive.isoformat(sep=" ", timespec="seconds")
    return naive.strftime(fmt)


def _format_date_time_offset(value: datetime, options: RenderOptions) -> str:
    fmt = options.date_time_offset_format
    offset = format_utc_offset(value.utcoffset())
    if not fmt or fmt == DEFAULT_DATE_TIME_OFFSET_FORMAT:
        naive = value.replace(tzinfo=None)
        return f"{naive.isoformat(sep=' ', timespec='seconds')} {offset}"
    # %:z only exists in strftime from Python 3.12
    return value.strftime(fmt.replace("%:z", offset))


def _format_date(value: date, options: RenderOptions) -> str:
    fmt = options.date_format
    if not fmt or fmt == DEFAULT_DATE_FORMAT:
        return value.isoformat()
    return value.strftime(fmt)


def _format_time(value: time, options: RenderOptions) -> str:
    fmt = options.time_format
    naive = value.replace(tzinfo=None)
    if not fmt or fmt == DEFAULT_TIME_FORMAT:
        return naive.isoformat(timespec="seconds")
    return naive.strftime(fmt)


def format_duration(value: timedelta, style: str | None = None) -> str:
    """
    Render a duration in one of the named styles.

    Args:
        value: Duration to render
        style: ``"c"`` (default), ``"g"`` or ``"G"``; anything else is ``"c"``

    Returns:
        Text such as ``1.02:03:04`` (c), ``1:2:03:04`` (g) or
        ``1:02:03:04.0000000`` (G)
    """
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    ticks = value.microseconds * TICKS_PER_MICROSECOND

    if style == TimeSpanStyle.GENERAL_SHORT.value:
        text = f"{value.days}:" if value.days else ""
        text += f"{hours}:{minutes:02d}:{seconds:02d}"
        if ticks:
            text += "." + f"{ticks:07d}".rstrip("0")
    elif style == TimeSpanStyle.GENERAL_LONG.value:
        text = f"{value.days}:{hours:02d}:{minutes:02d}:{seconds:02d}.{ticks:07d}"
    else:
        text = f"{value.days}." if value.days else ""
        text += f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        if ticks:
            text += f".{ticks:07d}"

    return sign + text


def _format_duration(value: timedelta, options: RenderOptions) -> str:
    return format_duration(value, options.time_span_format)


def format_enum(value: enum.Enum) -> str:
    """Declared member name; composite flags as ``A|B``"""
    if value.name is not None:
        return value.name
    if isinstance(value, enum.Flag):
        names = [
            member.name
            for member in type(value)
            if member.name and member.value and (member & value) == member
        ]
        if names:
            return "|".join(names)
    return str(value.value)


_FORMATTERS: dict[ScalarKind, Callable[[Any, RenderOptions], str]] = {
    ScalarKind.BOOLEAN: _format_boolean,
    ScalarKind.INTEGER: _format_integer,
    ScalarKind.FLOAT: _format_float,
    ScalarKind.HALF: _format_half,
    ScalarKind.DECIMAL: _format_decimal,
    ScalarKind.CHARACTER: _format_text,
    ScalarKind.STRING: _format_text,
    ScalarKind.GUID: _format_guid,
    ScalarKind.DATE: _format_date,
    ScalarKind.TIME: _format_time,
    ScalarKind.DATE_TIME: _format_date_time,
    ScalarKind.DATE_TIME_OFFSET: _format_date_time_offset,
    ScalarKind.DURATION: _format_duration,
}


def format_scalar(classification: Classification, options: RenderOptions) -> str:
    """
    Render a NULL, SCALAR or ENUM classification.

    Args:
        classification: Outcome of ``classify`` with a terminal kind
        options: Render options

    Returns:
        Invariant text for the value

    Raises:
        ValueError: If the classification is not a terminal kind
    """
    if classification.kind == Kind.NULL:
        return options.null_string
    if classification.kind == Kind.ENUM:
        return format_enum(classification.value)
    if classification.kind == Kind.SCALAR:
        formatter = _FORMATTERS[classification.scalar_kind]
        return formatter(classification.value, options)
    raise ValueError(f"Not a scalar classification: {classification.kind}")
