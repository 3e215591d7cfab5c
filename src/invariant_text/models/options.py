"""
Render options for the invariant string-conversion engine.

An immutable snapshot recognized by every render call. Instances are
frozen pydantic models, so one instance can be shared between threads
and calls; derive variants with ``model_copy(update={...})``.
"""

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import TimeSpanStyle

logger = logging.getLogger(__name__)

MAX_DEPTH_PLACEHOLDER = "<max nesting depth reached>"
TRUNCATION_MARKER = "..."


class RenderOptions(BaseModel):
    """
    Configuration for ``format_value``.

    Numeric formats are Python format specs (``".2f"``, ``",.3f"``),
    temporal formats are ``strftime`` patterns. ``None`` or an empty
    string selects the kind's default invariant representation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    null_string: str = Field(default="<null>", description="Text rendered for None")
    max_nesting_depth: int = Field(
        default=10, ge=0, description="Depth budget before the placeholder is rendered"
    )
    max_collection_items: int | None = Field(
        default=100,
        ge=0,
        description="Items rendered per collection level (None = unlimited)",
    )
    show_collection_count: bool = Field(
        default=True, description="Append ' (N items)' to non-empty sequences and maps"
    )
    collection_separator: str = Field(default=", ", description="Separator between items")
    dictionary_key_value_separator: str = Field(
        default=": ", description="Separator between a map key and its value"
    )
    show_array_dimensions: bool = Field(
        default=False, description="Prefix multi-dimensional arrays with their shape"
    )

    decimal_format: str | None = Field(default=None, description="Format spec for Decimal")
    double_format: str | None = Field(
        default=None, description="Format spec for float and numpy.float64"
    )
    float_format: str | None = Field(
        default=None, description="Format spec for numpy.float32 and numpy.float16"
    )
    time_span_format: str | None = Field(
        default=TimeSpanStyle.CONSTANT.value, description="Duration style: c, g or G"
    )
    date_time_format: str | None = Field(
        default="%Y-%m-%d %H:%M:%S", description="strftime pattern for datetimes"
    )
    date_time_offset_format: str | None = Field(
        default="%Y-%m-%d %H:%M:%S %:z",
        description="strftime pattern for aware datetimes; %:z is the ±HH:mm offset",
    )
    date_format: str | None = Field(default="%Y-%m-%d", description="strftime pattern for dates")
    time_format: str | None = Field(default="%H:%M:%S", description="strftime pattern for times")

    @field_validator("double_format", "float_format")
    @classmethod
    def validate_float_spec(cls, v: str | None) -> str | None:
        """Reject format specs that cannot format a float"""
        if v:
            try:
                format(0.0, v)
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid float format spec {v!r}: {e}") from e
        return v

    @field_validator("decimal_format")
    @classmethod
    def validate_decimal_spec(cls, v: str | None) -> str | None:
        """Reject format specs that cannot format a Decimal"""
        if v:
            try:
                format(Decimal(0), v)
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid decimal format spec {v!r}: {e}") from e
        return v

    @field_validator("time_span_format")
    @classmethod
    def validate_time_span_format(cls, v: str | None) -> str | None:
        """Unknown duration styles are allowed and render in the constant style"""
        known = {style.value for style in TimeSpanStyle}
        if v and v not in known:
            logger.warning(
                f"Unknown time_span_format {v!r}; durations will use the constant style"
            )
        return v

    @property
    def is_truncating(self) -> bool:
        """Whether collections are cut after ``max_collection_items``"""
        return self.max_collection_items is not None


DEFAULT_OPTIONS = RenderOptions()
