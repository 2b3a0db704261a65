"""Bundle tier catalogs: the storefront defaults and tiers built from hosted deals."""
from decimal import Decimal
from typing import Dict, Iterable

from storefront.services.models import BundleDeal
from .models import BundleTier

SINGLE = "single"
DOUBLE = "double"
TRIPLE = "triple"


def default_tiers() -> Dict[str, BundleTier]:
    """Single/double/triple tiers shown on every product page."""
    tiers = [
        BundleTier(SINGLE, 1, Decimal("0"), ""),
        BundleTier(DOUBLE, 2, Decimal("15"), "SAVE 15%"),
        BundleTier(TRIPLE, 3, Decimal("20"), "SAVE 20%"),
    ]
    return {tier.identifier: tier for tier in tiers}


def tier_from_deal(deal: BundleDeal) -> BundleTier:
    """Tier for a ``bundle_deals`` row; identifier is the row's bundle_type."""
    quantity = deal.required_quantity
    discount = deal.discount_percentage
    return BundleTier(
        identifier=deal.bundle_type.lower(),
        quantity=quantity,
        discount_percent=discount,
        display_label=f"BUY {quantity}, SAVE {discount.normalize():f}%",
    )


def tiers_from_deals(deals: Iterable[BundleDeal]) -> Dict[str, BundleTier]:
    """Active deals as a tier catalog, ordered by bundle size."""
    tiers = [tier_from_deal(deal) for deal in deals if deal.is_active]
    tiers.sort(key=lambda tier: tier.quantity)
    return {tier.identifier: tier for tier in tiers}
