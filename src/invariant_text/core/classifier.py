"""
Value Classifier - decides which rendering branch a value takes.

Classification is a pure, total function: every value maps to exactly
one ``Classification`` and nothing raised while probing a value escapes
(such values are handed to the conversion bridge instead).
"""

import enum
import uuid
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

import numpy as np
from pydantic import BaseModel

from ..models.classification import Classification
from ..models.enums import ScalarKind


def scalar_kind_of(value: Any) -> ScalarKind | None:
    """
    Match a value against the closed set of primitive kinds.

    Order matters: bool before int, datetime before date, and every
    numpy scalar before the Python type it may subclass.

    Returns:
        The matching ScalarKind, or None for non-scalars
    """
    if isinstance(value, (bool, np.bool_)):
        return ScalarKind.BOOLEAN
    if isinstance(value, (int, np.integer)):
        return ScalarKind.INTEGER
    if isinstance(value, np.float16):
        return ScalarKind.HALF
    if isinstance(value, (float, np.floating)):
        return ScalarKind.FLOAT
    if isinstance(value, Decimal):
        return ScalarKind.DECIMAL
    if isinstance(value, str):
        return ScalarKind.CHARACTER if len(value) == 1 else ScalarKind.STRING
    if isinstance(value, uuid.UUID):
        return ScalarKind.GUID
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return ScalarKind.DATE_TIME_OFFSET
        return ScalarKind.DATE_TIME
    if isinstance(value, date):
        return ScalarKind.DATE
    if isinstance(value, time):
        return ScalarKind.TIME
    if isinstance(value, timedelta):
        return ScalarKind.DURATION
    return None


def _unwrap_numpy_temporal(value: np.generic) -> Any:
    """numpy datetime64/timedelta64 as datetime/timedelta, NaT as None"""
    if np.isnat(value):
        return None
    if isinstance(value, np.timedelta64):
        return value.astype("timedelta64[us]").item()
    return value.astype("datetime64[us]").item()


def _classify(value: Any) -> Classification:
    if value is None or value is np.ma.masked:
        return Classification.null()

    # Mixin enums (str, Enum) must not fall through to the scalar branch
    if isinstance(value, enum.Enum):
        return Classification.enum(value)

    if isinstance(value, (np.datetime64, np.timedelta64)):
        return _classify(_unwrap_numpy_temporal(value))

    scalar_kind = scalar_kind_of(value)
    if scalar_kind is not None:
        return Classification.scalar(scalar_kind, value)

    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return _classify(value[()])
        if value.ndim > 1:
            return Classification.multi_array(value)
        return Classification.sequence(tuple(value))

    if isinstance(value, Mapping):
        return Classification.map(tuple(value.items()))

    # Iterating a pydantic model yields (field_name, value) pairs
    if isinstance(value, BaseModel):
        return Classification.map(tuple(value))

    if isinstance(value, Iterable):
        return Classification.sequence(tuple(value))

    return Classification.convertible(value)


def classify(value: Any) -> Classification:
    """
    Determine the rendering branch for ``value`` without producing output.

    Args:
        value: Any runtime value

    Returns:
        Classification carrying the Kind and its payload
    """
    try:
        return _classify(value)
    except Exception:
        # Broken __iter__/items() or exotic numpy objects
        return Classification.convertible(value)
