"""Pytest configuration and fixtures"""
import asyncio
import os
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")

from storefront.cart import BundleCartManager, StaticProductLookup
from storefront.config import CartSettings


@pytest.fixture
def settings():
    """Cart settings independent of the host environment"""
    return CartSettings(
        lookup_timeout_seconds=1.0,
        shipping_fee=Decimal("4.99"),
        currency="USD",
    )


@pytest.fixture
def catalog():
    """Product id -> (name, unit price)"""
    return {
        "p1": ("Nike Air Max 270", 150),
        "p2": ("Wireless Earbuds", "49.99"),
        "p3": ("Desk Lamp", 100),
    }


@pytest.fixture
def lookup(catalog):
    return StaticProductLookup(catalog)


@pytest.fixture
def cart(lookup, settings):
    """Cart with default single/double/triple tiers"""
    return BundleCartManager(lookup=lookup, settings=settings)


class SlowLookup:
    """Async lookup that yields to the event loop before answering."""

    def __init__(self, catalog, delay: float = 0.01):
        self.inner = StaticProductLookup(catalog)
        self.delay = delay
        self.calls = 0

    async def get_snapshot(self, product_id):
        self.calls += 1
        await asyncio.sleep(self.delay)
        return self.inner.get_snapshot(product_id)


@pytest.fixture
def slow_lookup(catalog):
    return SlowLookup(catalog)


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client: query builders chain, execute() is awaited"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock
    return client


@pytest.fixture
def sample_product():
    """Sample product row"""
    return {
        "id": "p1",
        "name": "Nike Air Max 270",
        "price": 150.0,
        "original_price": 180.0,
        "image": "https://example.com/airmax.jpg",
        "in_stock": True,
        "affiliate_link": "https://amzn.to/xyz",
        "retailer": "amazon",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_deals():
    """Sample bundle_deals rows"""
    return [
        {
            "id": "deal-3",
            "product_id": "p1",
            "bundle_type": "get3",
            "discount_percentage": 20,
            "is_active": True,
        },
        {
            "id": "deal-2",
            "product_id": "p1",
            "bundle_type": "get2",
            "discount_percentage": 10.5,
            "is_active": True,
        },
        {
            "id": "deal-5",
            "product_id": "p1",
            "bundle_type": "get5",
            "discount_percentage": 30,
            "is_active": False,
        },
    ]
