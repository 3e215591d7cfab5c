"""Result type for explicit fallback chains (Rust-style)"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Optional, Callable

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    Result wrapper implementing "error as value" for fallback strategies.

    A conversion strategy returns ``Result.ok(text)`` when it produced
    the final text (possibly empty) and ``Result.err(reason)`` when it
    does not apply to the value, so the next strategy is tried.

    Examples:
        result = Result.ok("[TypeConverter] Max (42)")
        result = Result.err("no converter registered for Person")

        text = result.unwrap_or("")
        text = first_strategy(v).or_else(lambda _: second_strategy(v)).unwrap()
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    def __post_init__(self):
        """Validate invariants after initialization"""
        if self.success and self.data is None:
            raise ValueError("Successful result must have data")
        if not self.success and self.error is None:
            raise ValueError("Failed result must have error")

    def unwrap(self) -> T:
        """
        Unwrap the result, raising exception if failed.

        Raises:
            ValueError: If result is not successful
        """
        if not self.success:
            raise ValueError(f"Unwrap called on failed result: {self.error}")
        return self.data

    def unwrap_or(self, default: T) -> T:
        """Return the wrapped data, or ``default`` if failed"""
        return self.data if self.success else default

    def or_else(self, func: Callable[[str], 'Result[T]']) -> 'Result[T]':
        """
        Provide fallback if failed.

        If failed, calls func with error and returns its Result.
        If successful, returns original result.
        """
        if not self.success:
            return func(self.error)
        return self

    def is_ok(self) -> bool:
        """Check if result is successful"""
        return self.success

    def is_err(self) -> bool:
        """Check if result is failed"""
        return not self.success

    @classmethod
    def ok(cls, data: T) -> 'Result[T]':
        """Create successful result."""
        return cls(success=True, data=data)

    @classmethod
    def err(cls, error: str) -> 'Result[T]':
        """Create failed result."""
        return cls(success=False, error=error)

    def __repr__(self) -> str:
        if self.success:
            return f"Result.ok({self.data!r})"
        return f"Result.err({self.error!r})"

    def __bool__(self) -> bool:
        """Allow using Result in boolean context (checks success)"""
        return self.success
