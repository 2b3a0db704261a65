"""Tests for environment-driven settings"""
from decimal import Decimal

import pytest

from storefront.config import CartSettings, DEFAULT_LOOKUP_TIMEOUT_SECONDS


def test_defaults(monkeypatch):
    for name in ("CART_LOOKUP_TIMEOUT_SECONDS", "CART_SHIPPING_FEE", "CART_CURRENCY"):
        monkeypatch.delenv(name, raising=False)

    settings = CartSettings.from_env()

    assert settings.lookup_timeout_seconds == DEFAULT_LOOKUP_TIMEOUT_SECONDS
    assert settings.shipping_fee == Decimal("4.99")
    assert settings.currency == "USD"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CART_LOOKUP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("CART_SHIPPING_FEE", "0")
    monkeypatch.setenv("CART_CURRENCY", "eur")

    settings = CartSettings.from_env()

    assert settings.lookup_timeout_seconds == 2.5
    assert settings.shipping_fee == Decimal("0")
    assert settings.currency == "EUR"


def test_zero_timeout_disables(monkeypatch):
    monkeypatch.setenv("CART_LOOKUP_TIMEOUT_SECONDS", "0")

    assert CartSettings.from_env().lookup_timeout_seconds is None


def test_negative_timeout_rejected(monkeypatch):
    monkeypatch.setenv("CART_LOOKUP_TIMEOUT_SECONDS", "-1")

    with pytest.raises(ValueError):
        CartSettings.from_env()
