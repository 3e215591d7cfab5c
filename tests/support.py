"""
Sample user types shared by the test suite.
"""

import enum

from invariant_text.core.bridge import StringConverter


class Person:
    """User type with a registered converter."""

    def __init__(self, name: str, age: int):
        self.name = name
        self.age = age


class PersonConverter(StringConverter):
    def can_convert_to_string(self) -> bool:
        return True

    def convert_to_string(self, value: Person) -> str:
        return f"[TypeConverter] {value.name} ({value.age})"

    def can_convert_from_string(self) -> bool:
        return True

    def convert_from_string(self, text: str) -> Person:
        name, _, age = text.rpartition(" ")
        return Person(name, int(age))


class SimpleProduct:
    """User type that only defines __str__."""

    def __init__(self, name: str, price: float):
        self.name = name
        self.price = price

    def __str__(self) -> str:
        return f"SimpleProduct: {self.name} - {self.price}"


class Color(enum.Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


class Permission(enum.Flag):
    NONE = 0
    READ = 1
    WRITE = 2
    EXECUTE = 4
