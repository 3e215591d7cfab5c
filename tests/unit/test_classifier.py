"""
Unit tests for the value classifier.

Tests cover:
- Scalar kind matching and its ordering rules
- Composite kinds (sequence, map, multi-array)
- numpy values and pydantic models
- Containment of values that fail while being probed
"""

import uuid
from collections import OrderedDict, deque
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import numpy as np
import pytest
from pydantic import BaseModel

from invariant_text.core.classifier import classify, scalar_kind_of
from invariant_text.models.enums import Kind, ScalarKind
from tests.support import Color, Permission, Person


class TestScalarKinds:
    """Tests for scalar_kind_of."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, ScalarKind.BOOLEAN),
            (np.bool_(False), ScalarKind.BOOLEAN),
            (42, ScalarKind.INTEGER),
            (np.int8(-3), ScalarKind.INTEGER),
            (np.uint64(7), ScalarKind.INTEGER),
            (np.float16(1.5), ScalarKind.HALF),
            (np.float32(1.5), ScalarKind.FLOAT),
            (np.float64(1.5), ScalarKind.FLOAT),
            (1.5, ScalarKind.FLOAT),
            (Decimal("1.5"), ScalarKind.DECIMAL),
            ("x", ScalarKind.CHARACTER),
            ("text", ScalarKind.STRING),
            ("", ScalarKind.STRING),
            (uuid.UUID(int=1), ScalarKind.GUID),
            (datetime(2025, 1, 15), ScalarKind.DATE_TIME),
            (datetime(2025, 1, 15, tzinfo=timezone.utc), ScalarKind.DATE_TIME_OFFSET),
            (date(2025, 1, 15), ScalarKind.DATE),
            (time(14, 30), ScalarKind.TIME),
            (timedelta(hours=1), ScalarKind.DURATION),
        ],
    )
    def test_scalar_kinds(self, value, expected):
        assert scalar_kind_of(value) is expected

    def test_bool_is_not_integer(self):
        """Test bool matches before int."""
        assert scalar_kind_of(True) is ScalarKind.BOOLEAN

    def test_non_scalars(self):
        assert scalar_kind_of([1]) is None
        assert scalar_kind_of(object()) is None
        assert scalar_kind_of(b"bytes") is None


class TestClassify:
    """Tests for classify."""

    def test_none_is_null(self):
        assert classify(None).kind is Kind.NULL

    def test_masked_is_null(self):
        assert classify(np.ma.masked).kind is Kind.NULL

    def test_enum(self):
        result = classify(Color.RED)

        assert result.kind is Kind.ENUM
        assert result.value is Color.RED

    def test_composite_flag_is_enum(self):
        assert classify(Permission.READ | Permission.WRITE).kind is Kind.ENUM

    def test_str_enum_is_enum_not_string(self):
        """Test mixin enums are not treated as plain strings."""
        assert classify(Kind.MAP).kind is Kind.ENUM

    def test_scalar_carries_kind(self):
        result = classify(3.5)

        assert result.kind is Kind.SCALAR
        assert result.scalar_kind is ScalarKind.FLOAT
        assert result.value == 3.5
        assert result.is_terminal

    def test_string_is_never_a_sequence(self):
        assert classify("abc").kind is Kind.SCALAR

    @pytest.mark.parametrize(
        "value",
        [[1, 2], (1, 2), {1, 2}, frozenset({1, 2}), deque([1, 2]), range(2), b"\x01\x02"],
    )
    def test_sequences(self, value):
        result = classify(value)

        assert result.kind is Kind.SEQUENCE
        assert result.total_items == 2

    def test_generator_is_materialised(self):
        result = classify(x for x in range(3))

        assert result.kind is Kind.SEQUENCE
        assert result.elements == (0, 1, 2)

    def test_mapping(self):
        result = classify(OrderedDict([("b", 2), ("a", 1)]))

        assert result.kind is Kind.MAP
        assert result.pairs == (("b", 2), ("a", 1))

    def test_pydantic_model_is_map(self):
        class Point(BaseModel):
            x: int
            y: int

        result = classify(Point(x=1, y=2))

        assert result.kind is Kind.MAP
        assert result.pairs == (("x", 1), ("y", 2))

    def test_one_dimensional_array_is_sequence(self):
        result = classify(np.array([1, 2, 3]))

        assert result.kind is Kind.SEQUENCE
        assert len(result.elements) == 3

    def test_multi_dimensional_array(self):
        result = classify(np.zeros((2, 3, 4)))

        assert result.kind is Kind.MULTI_ARRAY
        assert result.rank == 3
        assert result.shape == (2, 3, 4)
        assert result.total_items == 24

    def test_zero_dimensional_array_unwraps(self):
        result = classify(np.array(5))

        assert result.kind is Kind.SCALAR
        assert result.scalar_kind is ScalarKind.INTEGER

    def test_numpy_datetime(self):
        result = classify(np.datetime64("2025-01-15T14:30:45"))

        assert result.scalar_kind is ScalarKind.DATE_TIME
        assert result.value == datetime(2025, 1, 15, 14, 30, 45)

    def test_numpy_timedelta(self):
        result = classify(np.timedelta64(90, "s"))

        assert result.scalar_kind is ScalarKind.DURATION
        assert result.value == timedelta(seconds=90)

    def test_numpy_nat_is_null(self):
        assert classify(np.datetime64("NaT")).kind is Kind.NULL

    def test_plain_object_is_convertible(self):
        person = Person("Ada", 36)
        result = classify(person)

        assert result.kind is Kind.CONVERTIBLE
        assert result.value is person
        assert result.total_items == 0

    def test_broken_iterable_is_convertible(self):
        """Test failures while probing a value do not escape."""
        class Broken:
            def __iter__(self):
                raise RuntimeError("cannot iterate")

        assert classify(Broken()).kind is Kind.CONVERTIBLE
