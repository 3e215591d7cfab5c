"""
Conversion Bridge - text for values outside the closed scalar and
collection kinds.

Fallback chain, evaluated left to right with short-circuit:

1. A converter registered for the value's type (or a base class) that
   reports it can produce a string.
2. The value's own string form, ``format(value, "")``, which honours a
   custom ``__format__`` and otherwise calls ``__str__``.

Failures inside either step are contained here and become ``""``.
"""

from typing import Any, Callable, TypeVar

from ..exceptions import ConversionError
from ..models.result import Result
from ..utils.logging import get_logger

logger = get_logger(__name__)

C = TypeVar("C", bound=type)


class StringConverter:
    """
    Bidirectional text converter for a user type.

    Subclass and override the capability checks together with the
    matching conversion method. The base class converts nothing.
    """

    def can_convert_to_string(self) -> bool:
        return False

    def convert_to_string(self, value: Any) -> str | None:
        raise NotImplementedError(f"{type(self).__name__} cannot convert to string")

    def can_convert_from_string(self) -> bool:
        return False

    def convert_from_string(self, text: str) -> Any:
        raise NotImplementedError(f"{type(self).__name__} cannot convert from string")


class ConverterRegistry:
    """
    Type-to-converter map resolved along the method resolution order,
    so a converter registered for a base class serves its subclasses
    unless a more specific one is registered.
    """

    def __init__(self, converters: dict[type, StringConverter] | None = None):
        self._converters: dict[type, StringConverter] = dict(converters or {})

    def register(self, target_type: type, converter: StringConverter) -> None:
        """
        Register ``converter`` for ``target_type``, replacing any previous one.

        Raises:
            TypeError: If target_type is not a class
        """
        if not isinstance(target_type, type):
            raise TypeError(f"Converters are registered per class, got {target_type!r}")
        self._converters[target_type] = converter
        logger.debug(
            "converter_registered",
            target_type=target_type.__qualname__,
            converter=type(converter).__name__,
        )

    def unregister(self, target_type: type) -> bool:
        """Remove the converter for ``target_type``; True if one was registered"""
        return self._converters.pop(target_type, None) is not None

    def lookup(self, target_type: type) -> StringConverter | None:
        """Most specific converter for ``target_type``, or None"""
        for klass in getattr(target_type, "__mro__", (target_type,)):
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        return None

    def copy(self) -> "ConverterRegistry":
        return ConverterRegistry(self._converters)

    def __contains__(self, target_type: object) -> bool:
        return target_type in self._converters

    def __len__(self) -> int:
        return len(self._converters)


default_registry = ConverterRegistry()


def string_converter(
    converter: StringConverter | type[StringConverter],
    registry: ConverterRegistry | None = None,
) -> Callable[[C], C]:
    """
    Class decorator registering a converter for the decorated class.

    Example:
        @string_converter(PersonConverter)
        class Person:
            ...
    """
    instance = converter() if isinstance(converter, type) else converter

    def decorator(cls: C) -> C:
        (registry if registry is not None else default_registry).register(cls, instance)
        return cls

    return decorator


class ConversionBridge:
    """
    Produces text for CONVERTIBLE values. Never raises.
    """

    def __init__(self, registry: ConverterRegistry | None = None):
        """
        Args:
            registry: Converters to consult (default: ``default_registry``)
        """
        self.registry = registry if registry is not None else default_registry
        self.strategies: tuple[Callable[[Any], Result[str]], ...] = (
            self._from_registered_converter,
            self._from_own_string_form,
        )

    def convert(self, value: Any) -> str:
        """
        Run the fallback chain and return the first applicable result.

        Args:
            value: Any object

        Returns:
            Text for the value; ``""`` when the applicable step failed
        """
        for strategy in self.strategies:
            result = strategy(value)
            if result.is_ok():
                return result.unwrap()
        return ""

    def _contained(self, operation: Callable[[], Any], value: Any, strategy: str) -> str:
        try:
            text = operation()
            if text is None:
                return ""
            return text if isinstance(text, str) else str(text)
        except Exception as e:
            error = ConversionError(
                f"{type(e).__name__}: {e}",
                value_type=type(value).__qualname__,
                strategy=strategy,
            )
            logger.debug("conversion_contained", **error.to_dict())
            return ""

    def _from_registered_converter(self, value: Any) -> Result[str]:
        converter = self.registry.lookup(type(value))
        if converter is None:
            return Result.err("no converter registered")

        try:
            capable = bool(converter.can_convert_to_string())
        except Exception as e:
            logger.debug(
                "converter_capability_check_failed",
                value_type=type(value).__qualname__,
                error=str(e),
            )
            capable = False

        if not capable:
            return Result.err("converter cannot produce a string")

        return Result.ok(
            self._contained(lambda: converter.convert_to_string(value), value, "converter")
        )

    def _from_own_string_form(self, value: Any) -> Result[str]:
        return Result.ok(self._contained(lambda: format(value, ""), value, "string_form"))
