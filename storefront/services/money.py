"""
Money utilities - Decimal arithmetic for prices and discounts.

Prices coming from the hosted catalog arrive as JSON floats; everything
is converted through ``str`` into ``Decimal`` and rounded HALF_UP to cents.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Amount = Union[str, int, float, Decimal]

MONEY_PRECISION = Decimal("0.01")
HUNDRED = Decimal("100")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "CA$",
    "AUD": "A$",
}


def to_decimal(value: Union[Amount, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns Decimal("0") for None or unparseable input.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Amount) -> Decimal:
    """Round a monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def add(a: Amount, b: Amount) -> Decimal:
    return to_decimal(a) + to_decimal(b)


def subtract(a: Amount, b: Amount) -> Decimal:
    return to_decimal(a) - to_decimal(b)


def multiply(value: Amount, factor: Amount) -> Decimal:
    return to_decimal(value) * to_decimal(factor)


def divide(value: Amount, divisor: Amount) -> Decimal:
    """Division that yields 0 instead of raising on a zero divisor."""
    d = to_decimal(divisor)
    if d == 0:
        return Decimal("0")
    return to_decimal(value) / d


def apply_discount(value: Amount, discount_percent: Amount) -> Decimal:
    """Price after taking ``discount_percent`` off, rounded to cents."""
    multiplier = subtract(Decimal("1"), divide(discount_percent, HUNDRED))
    return round_money(multiply(value, multiplier))


def to_float(value: Amount) -> float:
    """
    Convert to float for JSON payloads.

    Use only at API boundaries, not for internal calculations.
    """
    return float(round_money(value))


def format_money(value: Amount, currency: str = "USD") -> str:
    """Format a value with its currency symbol, e.g. ``$1,234.50``."""
    symbol = CURRENCY_SYMBOLS.get(currency)
    formatted = f"{round_money(value):,.2f}"
    if symbol is None:
        return f"{formatted} {currency}"
    return f"{symbol}{formatted}"
