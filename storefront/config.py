"""Runtime settings read from the environment (.env supported)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

from storefront.services.money import to_decimal

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 10.0
DEFAULT_SHIPPING_FEE = "4.99"
DEFAULT_CURRENCY = "USD"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class CartSettings:
    # None disables the timeout; a hung lookup then keeps its key reserved
    lookup_timeout_seconds: float | None = DEFAULT_LOOKUP_TIMEOUT_SECONDS
    shipping_fee: Decimal = Decimal(DEFAULT_SHIPPING_FEE)
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_env(cls) -> "CartSettings":
        timeout = _get_float("CART_LOOKUP_TIMEOUT_SECONDS", default=DEFAULT_LOOKUP_TIMEOUT_SECONDS)
        fee = to_decimal(_get_env("CART_SHIPPING_FEE", default=DEFAULT_SHIPPING_FEE))
        if timeout < 0:
            raise ValueError("CART_LOOKUP_TIMEOUT_SECONDS must be >= 0")
        if fee < 0:
            raise ValueError("CART_SHIPPING_FEE must be >= 0")
        return cls(
            lookup_timeout_seconds=timeout or None,
            shipping_fee=fee,
            currency=(_get_env("CART_CURRENCY", default=DEFAULT_CURRENCY) or DEFAULT_CURRENCY).upper(),
        )
