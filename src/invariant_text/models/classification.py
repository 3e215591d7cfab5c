"""Classification outcome: a tagged union over the engine's Kinds."""

from dataclasses import dataclass
from typing import Any

from .enums import Kind, ScalarKind


@dataclass(frozen=True)
class Classification:
    """
    The branch a value takes through the renderer, plus its payload.

    Only the fields belonging to ``kind`` are populated. Build instances
    through the classmethods rather than the constructor.
    """

    kind: Kind
    value: Any = None
    scalar_kind: ScalarKind | None = None
    elements: tuple[Any, ...] = ()
    pairs: tuple[tuple[Any, Any], ...] = ()
    rank: int = 0
    shape: tuple[int, ...] = ()

    @classmethod
    def null(cls) -> "Classification":
        return cls(kind=Kind.NULL)

    @classmethod
    def scalar(cls, scalar_kind: ScalarKind, value: Any) -> "Classification":
        return cls(kind=Kind.SCALAR, scalar_kind=scalar_kind, value=value)

    @classmethod
    def enum(cls, value: Any) -> "Classification":
        return cls(kind=Kind.ENUM, value=value)

    @classmethod
    def sequence(cls, elements: tuple[Any, ...]) -> "Classification":
        return cls(kind=Kind.SEQUENCE, elements=elements)

    @classmethod
    def map(cls, pairs: tuple[tuple[Any, Any], ...]) -> "Classification":
        return cls(kind=Kind.MAP, pairs=pairs)

    @classmethod
    def multi_array(cls, array: Any) -> "Classification":
        """``array`` is a numpy ndarray with ndim > 1"""
        return cls(
            kind=Kind.MULTI_ARRAY,
            value=array,
            rank=int(array.ndim),
            shape=tuple(int(d) for d in array.shape),
        )

    @classmethod
    def convertible(cls, value: Any) -> "Classification":
        return cls(kind=Kind.CONVERTIBLE, value=value)

    @property
    def is_terminal(self) -> bool:
        """True for kinds rendered by the scalar formatter"""
        return self.kind in (Kind.NULL, Kind.SCALAR, Kind.ENUM)

    @property
    def total_items(self) -> int:
        """Pre-truncation element count for composite kinds"""
        if self.kind == Kind.SEQUENCE:
            return len(self.elements)
        if self.kind == Kind.MAP:
            return len(self.pairs)
        if self.kind == Kind.MULTI_ARRAY:
            total = 1
            for length in self.shape:
                total *= length
            return total
        return 0
