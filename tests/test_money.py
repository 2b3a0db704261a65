"""Tests for money helpers"""
from decimal import Decimal

import pytest

from storefront.services.money import apply_discount, divide, format_money, round_money, to_decimal, to_float


@pytest.mark.parametrize("value, expected", [
    (None, Decimal("0")),
    (0.1, Decimal("0.1")),
    ("19.99", Decimal("19.99")),
    (5, Decimal("5")),
    ("not a number", Decimal("0")),
])
def test_to_decimal(value, expected):
    assert to_decimal(value) == expected


def test_round_money_half_up():
    assert round_money("2.345") == Decimal("2.35")
    assert round_money(Decimal("2.344")) == Decimal("2.34")


def test_apply_discount():
    assert apply_discount(300, 15) == Decimal("255.00")
    assert apply_discount("99.99", 0) == Decimal("99.99")
    assert apply_discount(50, 100) == Decimal("0.00")


def test_divide_by_zero():
    assert divide(10, 0) == Decimal("0")


def test_to_float():
    assert to_float(Decimal("409.990")) == 409.99


def test_format_money():
    assert format_money(1234.5) == "$1,234.50"
    assert format_money("10", "EUR") == "€10.00"
    assert format_money(3, "XYZ") == "3.00 XYZ"
