"""
Scalar Parser - the inverse of the scalar formatter.

Type-directed, invariant, fail-soft: text that cannot be interpreted
as the target type yields that type's default value instead of an
error. Only ``None`` arguments raise. Composite kinds are never parsed.
"""

import enum
import functools
import operator
import re
import types
import typing
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, TypeVar

import numpy as np

from ..exceptions import ArgumentNullError, ParseError
from ..utils.error_handler import ErrorHandler
from ..utils.logging import get_logger
from .bridge import ConverterRegistry, StringConverter, default_registry
from .scalars import TICKS_PER_MICROSECOND

logger = get_logger(__name__)

T = TypeVar("T")

_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

# [-][d.]hh:mm[:ss[.fffffff]] and [-][d:]h:mm:ss[.fffffff]
_DURATION_RE = re.compile(
    r"""
    \s*(?P<sign>-)?
    (?:(?P<days>\d+)[.:](?=\d+:\d+:\d+))?
    (?P<hours>\d+):(?P<minutes>\d+)
    (?::(?P<seconds>\d+)(?:\.(?P<fraction>\d{1,7}))?)?
    \s*
    """,
    re.VERBOSE,
)
_DAYS_ONLY_RE = re.compile(r"\s*(?P<sign>-)?(?P<days>\d+)\s*")

_DATE_TIME_PATTERNS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def _parse_bool(text: str) -> bool:
    normalized = text.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ParseError(f"Not a boolean: {text!r}", target_type="bool")


def _parse_int(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise ParseError(f"Not an integer: {text!r}", target_type="int")
    return int(Decimal(text))


def _parse_float(text: str) -> float:
    if "_" in text:
        raise ParseError(f"Digit separators are not invariant: {text!r}", target_type="float")
    try:
        return float(text)
    except ValueError as e:
        raise ParseError(f"Not a number: {text!r}", target_type="float") from e


def _parse_decimal(text: str) -> Decimal:
    if "_" in text:
        raise ParseError(f"Digit separators are not invariant: {text!r}", target_type="Decimal")
    try:
        return Decimal(text.strip())
    except InvalidOperation as e:
        raise ParseError(f"Not a decimal: {text!r}", target_type="Decimal") from e


def _parse_str(text: str) -> str:
    return text


def _parse_uuid(text: str) -> uuid.UUID:
    return uuid.UUID(text.strip())


def _parse_datetime(text: str) -> datetime:
    stripped = text.strip()
    for pattern in _DATE_TIME_PATTERNS:
        try:
            return datetime.strptime(stripped, pattern)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(stripped)
    except ValueError as e:
        raise ParseError(f"Not a date/time: {text!r}", target_type="datetime") from e


def _parse_date(text: str) -> date:
    return date.fromisoformat(text.strip())


def _parse_time(text: str) -> time:
    return time.fromisoformat(text.strip())


def parse_duration(text: str) -> timedelta:
    """
    Parse the constant (``1.02:03:04``), general (``1:2:03:04``) and
    short (``02:03``, ``5`` days) duration forms.

    Raises:
        ParseError: If the text is not a duration or a component is out of range
    """
    match = _DURATION_RE.fullmatch(text)
    if match is None:
        days_only = _DAYS_ONLY_RE.fullmatch(text)
        if days_only is None:
            raise ParseError(f"Not a duration: {text!r}", target_type="timedelta")
        value = timedelta(days=int(days_only["days"]))
        return -value if days_only["sign"] else value

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"] or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ParseError(f"Duration component out of range: {text!r}", target_type="timedelta")

    ticks = int((match["fraction"] or "0").ljust(7, "0"))
    value = timedelta(
        days=int(match["days"] or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=ticks // TICKS_PER_MICROSECOND,
    )
    return -value if match["sign"] else value


def _parse_enum(enum_type: type[enum.Enum], text: str) -> enum.Enum:
    name = text.strip()
    members = enum_type.__members__

    if issubclass(enum_type, enum.Flag) and "|" in name:
        parts = [_parse_enum(enum_type, part) for part in name.split("|")]
        return functools.reduce(operator.or_, parts)

    if name in members:
        return members[name]

    folded = name.casefold()
    for member_name, member in members.items():
        if member_name.casefold() == folded:
            return member

    if _INTEGER_RE.fullmatch(name):
        try:
            return enum_type(int(name))
        except ValueError:
            pass

    raise ParseError(f"Unknown {enum_type.__name__} member: {text!r}", target_type=enum_type.__name__)


def _numpy_parser(target: type) -> Callable[[str], Any] | None:
    if issubclass(target, np.bool_):
        return lambda text: target(_parse_bool(text))
    if issubclass(target, np.integer):
        info = np.iinfo(target)

        def parse_bounded(text: str) -> Any:
            value = _parse_int(text)
            if not info.min <= value <= info.max:
                raise ParseError(
                    f"{value} overflows {target.__name__}", target_type=target.__name__
                )
            return target(value)

        return parse_bounded
    if issubclass(target, np.floating):
        return lambda text: target(_parse_float(text))
    if issubclass(target, np.str_):
        return lambda text: target(text)
    return None


SCALAR_PARSERS: dict[type, Callable[[str], Any]] = {
    str: _parse_str,
    bool: _parse_bool,
    int: _parse_int,
    float: _parse_float,
    Decimal: _parse_decimal,
    uuid.UUID: _parse_uuid,
    datetime: _parse_datetime,
    date: _parse_date,
    time: _parse_time,
    timedelta: parse_duration,
}

_DEFAULTS: dict[type, Any] = {
    str: "",
    bool: False,
    int: 0,
    float: 0.0,
    Decimal: Decimal(0),
    uuid.UUID: uuid.UUID(int=0),
    datetime: datetime.min,
    date: date.min,
    time: time.min,
    timedelta: timedelta(0),
}


def _is_class(target: Any) -> bool:
    # list[int] passes isinstance(..., type) but is not a class
    return isinstance(target, type) and typing.get_origin(target) is None


def resolve_target_type(target_type: Any) -> Any:
    """
    Strip ``Optional``/``X | None`` and ``Annotated`` wrappers.

    Returns:
        The underlying type, or ``target_type`` unchanged
    """
    origin = typing.get_origin(target_type)
    if origin is typing.Annotated:
        return resolve_target_type(typing.get_args(target_type)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return resolve_target_type(args[0])
    return target_type


def default_value(target_type: Any) -> Any:
    """
    The value a failed parse yields for ``target_type``.

    Zero for numbers, False, the nil UUID, the minimum date/time, a zero
    duration, the zero-valued (else first) enum member, and None for
    anything else.
    """
    target = resolve_target_type(target_type)
    if target in _DEFAULTS:
        return _DEFAULTS[target]
    if _is_class(target):
        if issubclass(target, enum.Enum):
            members = list(target.__members__.values())
            for member in members:
                if member.value == 0:
                    return member
            return members[0] if members else None
        if issubclass(target, np.generic) and _numpy_parser(target) is not None:
            return target(0) if not issubclass(target, np.str_) else target("")
    return None


def _reads_from_string(converter: StringConverter) -> bool:
    return ErrorHandler.handle_with_fallback(
        lambda: bool(converter.can_convert_from_string()),
        fallback=False,
        error_msg=f"{type(converter).__name__} capability check failed",
        log_level="debug",
    )


def _parser_for(target: Any, registry: ConverterRegistry) -> Callable[[str], Any] | None:
    if target in SCALAR_PARSERS:
        return SCALAR_PARSERS[target]
    if not _is_class(target):
        return None

    converter = registry.lookup(target)
    if converter is not None and _reads_from_string(converter):
        return converter.convert_from_string
    if issubclass(target, enum.Enum):
        return functools.partial(_parse_enum, target)
    if issubclass(target, np.generic):
        return _numpy_parser(target)
    return None


def parse_value(
    text: str,
    target_type: Any,
    *,
    registry: ConverterRegistry | None = None,
) -> Any:
    """
    Parse invariant text as ``target_type``.

    Args:
        text: Text to parse
        target_type: Scalar type, enum, numpy scalar type, a type with a
            registered converter, or an ``Optional`` of any of these
        registry: Converters for user types (default: ``default_registry``)

    Returns:
        The parsed value, or ``default_value(target_type)`` when the text
        cannot be interpreted or the type is not parseable

    Raises:
        ArgumentNullError: If text or target_type is None
    """
    if text is None:
        raise ArgumentNullError("text")
    if target_type is None:
        raise ArgumentNullError("target_type")

    target = resolve_target_type(target_type)
    fallback = default_value(target)
    parser = _parser_for(target, registry if registry is not None else default_registry)

    if parser is None:
        logger.debug("parse_unsupported_type", target_type=repr(target))
        return fallback

    return ErrorHandler.handle_with_fallback(
        lambda: parser(text),
        fallback=fallback,
        error_msg=f"Could not parse {text!r} as {getattr(target, '__name__', target)}",
        log_level="debug",
    )


def parse_scalar(
    text: str,
    target_type: type[T],
    *,
    registry: ConverterRegistry | None = None,
) -> T:
    """
    Typed form of ``parse_value``.

    Example:
        >>> parse_scalar("42", int)
        42
        >>> parse_scalar("invalid", int)
        0

    Raises:
        ArgumentNullError: If text or target_type is None
    """
    return parse_value(text, target_type, registry=registry)


def can_parse(
    text: str | None,
    target_type: Any,
    *,
    registry: ConverterRegistry | None = None,
) -> bool:
    """
    Whether ``text`` is valid invariant text for ``target_type``.

    None and empty text are never valid (except as ``str``, where empty
    text is a valid value).

    Raises:
        ArgumentNullError: If target_type is None
    """
    if target_type is None:
        raise ArgumentNullError("target_type")
    if text is None:
        return False

    target = resolve_target_type(target_type)
    if target is str:
        return True
    if not text.strip():
        return False

    parser = _parser_for(target, registry if registry is not None else default_registry)
    if parser is None:
        return False
    try:
        parser(text)
    except Exception:
        return False
    return True
