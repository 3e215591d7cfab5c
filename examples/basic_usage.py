"""
Basic usage example for invariant-text.

Demonstrates formatting nested values, tuning render options, plugging
in a custom converter, and parsing text back into typed scalars.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import numpy as np

from invariant_text import (
    ConverterRegistry,
    RenderOptions,
    StringConverter,
    can_parse,
    format_value,
    parse_scalar,
)


class Money:
    def __init__(self, amount: Decimal, currency: str):
        self.amount = amount
        self.currency = currency


class MoneyConverter(StringConverter):
    def can_convert_to_string(self) -> bool:
        return True

    def convert_to_string(self, value: Money) -> str:
        return f"{value.amount} {value.currency}"

    def can_convert_from_string(self) -> bool:
        return True

    def convert_from_string(self, text: str) -> Money:
        amount, currency = text.split()
        return Money(Decimal(amount), currency)


def main():
    print("🚀 invariant-text - Structural String Conversion Demo\n")

    # ========================================================================
    # Step 1: FORMAT - Nested values with default options
    # ========================================================================
    print("📋 Step 1: FORMAT (default options)")
    print("-" * 50)

    order = {
        "placed": datetime(2025, 1, 15, 14, 30, 45, tzinfo=timezone.utc),
        "lines": [("lamp", 2), ("desk", 1)],
        "discount": None,
        "weights": np.array([[0.25, 0.75], [1.0, 0.0]]),
        "eta": timedelta(days=2, hours=6),
    }
    print(format_value(order))

    # ========================================================================
    # Step 2: OPTIONS - Bounds, separators and numeric formats
    # ========================================================================
    print("\n🔧 Step 2: OPTIONS (custom render options)")
    print("-" * 50)

    options = RenderOptions(
        null_string="NULL",
        max_collection_items=3,
        show_array_dimensions=True,
        collection_separator=" | ",
        double_format=".1f",
        time_span_format="g",
    )
    print(format_value(order, options))
    print(format_value(list(range(1000)), options))

    # ========================================================================
    # Step 3: CONVERTERS - Text for user types
    # ========================================================================
    print("\n🔌 Step 3: CONVERTERS (user types)")
    print("-" * 50)

    registry = ConverterRegistry()
    registry.register(Money, MoneyConverter())

    invoice = {"net": Money(Decimal("99.90"), "EUR"), "tax": Money(Decimal("18.98"), "EUR")}
    print(format_value(invoice, registry=registry))

    # ========================================================================
    # Step 4: PARSE - Text back to typed values
    # ========================================================================
    print("\n📝 Step 4: PARSE (typed scalars)")
    print("-" * 50)

    for text, target in [
        ("42", int),
        ("3.5", float),
        ("1.02:03:04", timedelta),
        ("2025-01-15 14:30:45 +00:00", datetime),
        ("not a number", int),
    ]:
        parsed = parse_scalar(text, target)
        status = "✓" if can_parse(text, target) else "✗ (default)"
        print(f"{status} {text!r} as {target.__name__}: {parsed!r}")

    money = parse_scalar("12.50 USD", Money, registry=registry)
    print(f"✓ '12.50 USD' as Money: {format_value(money, registry=registry)}")

    print("\n✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
