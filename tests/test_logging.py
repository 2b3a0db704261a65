"""Tests for logging setup and sanitizers"""
import logging

import pytest

from storefront.cart import ProductSnapshot
from storefront.logging import configure_logging, get_logger, sanitize_id_for_logging, sanitize_string_for_logging


def test_get_logger_is_cached():
    assert get_logger("storefront.cart") is get_logger("storefront.cart")


def test_configure_logging_respects_existing_handlers():
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        assert configure_logging() is False
    finally:
        root.removeHandler(handler)


def test_sanitize_id():
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("p1") == "p1"
    assert sanitize_id_for_logging("0123456789abcdef") == "01234567"
    assert sanitize_id_for_logging("a\nb") == "a\\nb"
    assert sanitize_id_for_logging("a\x00b") == "ab"


def test_sanitize_string_truncates():
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."
    assert sanitize_string_for_logging("fake\r\nentry") == "fake\\r\\nentry"
    assert sanitize_string_for_logging("") == "N/A"


@pytest.mark.asyncio
async def test_add_log_escapes_product_name(cart, caplog):
    """Product names come from the catalog/browser and must not forge log lines"""
    snapshot = ProductSnapshot("p1", "Lamp\nCRITICAL - forged entry", 10)

    with caplog.at_level(logging.INFO, logger="storefront.cart.service"):
        await cart.add_to_cart("p1", "double", snapshot)

    added = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Added")]
    assert len(added) == 1
    assert "\n" not in added[0]
    assert "Lamp\\nCRITICAL" in added[0]
