"""Cart package: bundle tiers, line items, in-flight guard, and the manager."""
from .models import BundleTier, CartError, CartLineItem, CartOutcome, CompositeKey
from .guard import InFlightGuard
from .lookup import CatalogProductLookup, ProductLookup, ProductSnapshot, StaticProductLookup
from .tiers import default_tiers, tier_from_deal, tiers_from_deals
from .service import BundleCartManager

__all__ = [
    "BundleTier",
    "CartError",
    "CartLineItem",
    "CartOutcome",
    "CompositeKey",
    "InFlightGuard",
    "ProductLookup",
    "ProductSnapshot",
    "StaticProductLookup",
    "CatalogProductLookup",
    "default_tiers",
    "tier_from_deal",
    "tiers_from_deals",
    "BundleCartManager",
]
