#!/usr/bin/env python3
"""
Print bundle pricing for products in the hosted catalog.

Loads a product and its active bundle deals from Supabase and shows what
each tier costs in the cart. Falls back to the default single/double/triple
tiers when the product has no deals.

Usage:
    python scripts/check_bundle_deals.py <product_id>
    python scripts/check_bundle_deals.py <product_id> --defaults  # ignore bundle_deals
"""
import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from storefront.cart import BundleCartManager, default_tiers, tiers_from_deals
from storefront.db import get_supabase
from storefront.services.money import format_money
from storefront.services.repositories import BundleDealRepository, ProductRepository


async def check(product_id: str, use_defaults: bool) -> int:
    client = await get_supabase()
    product = await ProductRepository(client).get_by_id(product_id)
    if product is None:
        print(f"Product not found: {product_id}")
        return 1

    tiers = default_tiers()
    if not use_defaults:
        deals = await BundleDealRepository(client).get_for_product(product_id)
        if deals:
            tiers = tiers_from_deals(deals)
        else:
            print("No active bundle deals, showing default tiers")

    cart = BundleCartManager(tiers=tiers)
    currency = cart.settings.currency
    print(f"{product.name} ({format_money(product.price, currency)})")
    for option in cart.bundle_options(product.price):
        print(
            f"  {option['identifier'].upper():8s} x{option['quantity']}: "
            f"{format_money(option['original_price'], currency)} - {option['discount_percent']:g}% = "
            f"{format_money(option['discounted_price'], currency)} (save {format_money(option['savings'], currency)})"
        )
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Show bundle pricing for a product")
    parser.add_argument("product_id")
    parser.add_argument("--defaults", action="store_true", help="ignore bundle_deals and use default tiers")
    args = parser.parse_args()

    try:
        return asyncio.run(check(args.product_id, args.defaults))
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
