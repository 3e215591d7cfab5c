"""
Recursive Renderer - turns any runtime value into deterministic,
culture-invariant diagnostic text.

Termination is guaranteed by two bounds only: ``max_nesting_depth``
(checked on every recursive call, scalars included) and
``max_collection_items`` (per level breadth). There is no identity
tracking, so a self-containing list renders until the depth budget runs
out.

Example:
    >>> format_value([1, 2, 3])
    '[1, 2, 3] (3 items)'
    >>> format_value({"a": 1}, RenderOptions(show_collection_count=False))
    '{a: 1}'
"""

from typing import Any

from ..models.classification import Classification
from ..models.enums import Kind
from ..models.options import (
    DEFAULT_OPTIONS,
    MAX_DEPTH_PLACEHOLDER,
    TRUNCATION_MARKER,
    RenderOptions,
)
from ..utils.error_handler import ErrorHandler
from .bridge import ConversionBridge, ConverterRegistry
from .classifier import classify
from .scalars import format_scalar


class Renderer:
    """
    Orchestrates classifier, scalar formatter and conversion bridge
    under a depth counter and an item-count bound.

    A Renderer holds only read-only collaborators and can be reused
    across calls and threads.
    """

    def __init__(
        self,
        options: RenderOptions | None = None,
        registry: ConverterRegistry | None = None,
    ):
        self.options = options or DEFAULT_OPTIONS
        self.bridge = ConversionBridge(registry)

    def render(self, value: Any, depth: int = 0) -> str:
        """
        Render ``value`` at nesting level ``depth``.

        Args:
            value: Any runtime value
            depth: Levels already consumed by enclosing containers

        Returns:
            Text for the value; never raises
        """
        if depth >= self.options.max_nesting_depth:
            return MAX_DEPTH_PLACEHOLDER

        classification = classify(value)
        kind = classification.kind

        if classification.is_terminal:
            return self._render_terminal(classification)
        if kind == Kind.SEQUENCE:
            return self._render_sequence(classification, depth)
        if kind == Kind.MAP:
            return self._render_map(classification, depth)
        if kind == Kind.MULTI_ARRAY:
            return self._render_multi_array(classification, depth)
        return self.bridge.convert(classification.value)

    def _render_terminal(self, classification: Classification) -> str:
        return ErrorHandler.handle_with_fallback(
            lambda: format_scalar(classification, self.options),
            fallback="",
            error_msg=f"Formatting {classification.scalar_kind or classification.kind} failed",
            log_level="debug",
        )

    def _visible_count(self, total: int) -> int:
        if not self.options.is_truncating:
            return total
        return min(total, self.options.max_collection_items)

    def _join(self, parts: list[str], total: int, opening: str, closing: str) -> str:
        if len(parts) < total:
            parts.append(TRUNCATION_MARKER)
        return opening + self.options.collection_separator.join(parts) + closing

    def _with_count(self, text: str, total: int) -> str:
        if self.options.show_collection_count:
            return f"{text} ({total} items)"
        return text

    def _render_sequence(self, classification: Classification, depth: int) -> str:
        elements = classification.elements
        total = len(elements)
        if total == 0:
            return "[]"

        parts = [
            self.render(element, depth + 1)
            for element in elements[: self._visible_count(total)]
        ]
        return self._with_count(self._join(parts, total, "[", "]"), total)

    def _render_map(self, classification: Classification, depth: int) -> str:
        pairs = classification.pairs
        total = len(pairs)
        if total == 0:
            return "{}"

        separator = self.options.dictionary_key_value_separator
        parts = [
            f"{self.render(key, depth + 1)}{separator}{self.render(value, depth + 1)}"
            for key, value in pairs[: self._visible_count(total)]
        ]
        return self._with_count(self._join(parts, total, "{", "}"), total)

    def _render_multi_array(self, classification: Classification, depth: int) -> str:
        body = self._render_array_level(classification.value, depth)
        if not self.options.show_array_dimensions:
            return body

        dimensions = "×".join(str(length) for length in classification.shape)
        header = f"{classification.rank}D {dimensions}, {classification.total_items} items"
        return f"{header}: {body}"

    def _render_array_level(self, array: Any, depth: int) -> str:
        """
        One dimension of a numpy array: dimension 0 at ``depth``, each
        further dimension one level deeper. Leaf elements share the depth
        of the innermost dimension, so a rank-R array fits a budget of R.
        """
        if depth >= self.options.max_nesting_depth:
            return MAX_DEPTH_PLACEHOLDER

        length = int(array.shape[0])
        if length == 0:
            return "[]"

        visible = self._visible_count(length)
        if array.ndim == 1:
            parts = [self.render(array[index], depth) for index in range(visible)]
        else:
            parts = [self._render_array_level(array[index], depth + 1) for index in range(visible)]
        return self._join(parts, length, "[", "]")


def format_value(
    value: Any,
    options: RenderOptions | None = None,
    *,
    registry: ConverterRegistry | None = None,
    current_depth: int = 0,
) -> str:
    """
    Convert any value into culture-invariant diagnostic text.

    Args:
        value: Value to render
        options: Render options (default: ``DEFAULT_OPTIONS``)
        registry: Converters for user types (default: ``default_registry``)
        current_depth: Depth already consumed, for resuming inside a
            larger render

    Returns:
        Rendered text. This function never raises.
    """
    return Renderer(options, registry).render(value, current_depth)
