"""Bundle cart manager: in-memory line items with a duplicate/race guard."""
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from storefront.config import CartSettings
from storefront.errors import ERROR_PRODUCT_LOOKUP_UNAVAILABLE, ERROR_UNKNOWN_BUNDLE, ProductLookupError
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.services.money import add, round_money, subtract, to_float, multiply
from .guard import InFlightGuard
from .lookup import ProductLookup, ProductSnapshot, resolve_snapshot
from .models import BundleTier, CartError, CartLineItem, CartOutcome, CompositeKey
from .tiers import default_tiers

logger = get_logger(__name__)


class BundleCartManager:
    """
    Shopping cart whose line items may carry a bundle tier.

    Features:
    - (product_id, bundle identifier) is the uniqueness key, so single,
      double and triple bundles of one product coexist as separate lines
    - Concurrent adds of the same key are rejected while one is in flight
    - Duplicate and invalid-quantity outcomes are returned, not raised

    One instance per shopper session; create it explicitly and pass it to
    whatever needs the cart.

    Usage:
        cart = BundleCartManager(lookup=CatalogProductLookup(repo))
        outcome = await cart.add_to_cart("p1", "double")
        if not outcome.ok:
            ...  # disable the button
    """

    def __init__(
        self,
        tiers: Optional[Dict[str, BundleTier]] = None,
        lookup: Optional[ProductLookup] = None,
        settings: Optional[CartSettings] = None,
    ):
        self._tiers: Dict[str, BundleTier] = dict(tiers) if tiers is not None else default_tiers()
        self._lookup = lookup
        self._settings = settings or CartSettings.from_env()
        self._items: List[CartLineItem] = []
        self._guard = InFlightGuard()

    @property
    def tiers(self) -> Dict[str, BundleTier]:
        return dict(self._tiers)

    @property
    def settings(self) -> CartSettings:
        return self._settings

    @property
    def line_items(self) -> Tuple[CartLineItem, ...]:
        """Line items in insertion order."""
        return tuple(self._items)

    @property
    def pending_keys(self):
        return self._guard.pending_keys

    def __len__(self) -> int:
        return len(self._items)

    def resolve_tier(self, bundle_identifier: Optional[str]) -> Optional[BundleTier]:
        """Tier for an identifier; None means an un-bundled single unit."""
        if bundle_identifier is None:
            return None
        tier = self._tiers.get(bundle_identifier)
        if tier is None:
            raise ValueError(f"{ERROR_UNKNOWN_BUNDLE}: {bundle_identifier}")
        return tier

    def get_line_item(self, line_id: str) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.line_id == line_id), None)

    def find_line_item(self, product_id: str, bundle_identifier: Optional[str] = None) -> Optional[CartLineItem]:
        key = (product_id, bundle_identifier)
        return next((item for item in self._items if item.composite_key == key), None)

    async def add_to_cart(
        self,
        product_id: str,
        bundle_identifier: Optional[str] = None,
        product_snapshot: Optional[ProductSnapshot] = None,
    ) -> CartOutcome:
        """
        Add a product, optionally as a bundle tier.

        Args:
            product_id: Product to add
            bundle_identifier: Configured tier identifier, or None for a single unit
            product_snapshot: Name/price resolved by the caller; when omitted the
                configured product lookup is awaited

        Returns:
            CartOutcome with the new line item, or DUPLICATE_IN_FLIGHT /
            DUPLICATE_LINE_ITEM with the cart unchanged

        Raises:
            ValueError: empty product_id or unknown bundle identifier
            ProductLookupError: the product could not be resolved
        """
        if not product_id or not isinstance(product_id, str):
            raise ValueError("product_id must be a non-empty string")
        if product_snapshot is not None and product_snapshot.product_id != product_id:
            raise ValueError(f"product_snapshot is for {product_snapshot.product_id!r}, not {product_id!r}")
        tier = self.resolve_tier(bundle_identifier)
        key: CompositeKey = (product_id, bundle_identifier)
        safe_id = sanitize_id_for_logging(product_id)
        safe_bundle = sanitize_string_for_logging(bundle_identifier or "no bundle", max_length=20)

        # Everything up to reserve() runs without yielding to the event loop
        if self._guard.is_pending(key):
            logger.debug(f"Add blocked, already in flight: {safe_id}/{safe_bundle}")
            return CartOutcome.failure(CartError.DUPLICATE_IN_FLIGHT)
        if self.find_line_item(product_id, bundle_identifier) is not None:
            logger.debug(f"Add blocked, line exists: {safe_id}/{safe_bundle}")
            return CartOutcome.failure(CartError.DUPLICATE_LINE_ITEM)

        with self._guard.reserve(key):
            snapshot = product_snapshot or await self._lookup_snapshot(product_id)
            # restore() may have loaded this key while the lookup was pending
            if self.find_line_item(product_id, bundle_identifier) is not None:
                logger.debug(f"Add dropped, line appeared during lookup: {safe_id}/{safe_bundle}")
                return CartOutcome.failure(CartError.DUPLICATE_LINE_ITEM)
            item = CartLineItem.priced(
                product_id=product_id,
                product_name=snapshot.name,
                unit_price=snapshot.unit_price,
                bundle_tier=tier,
            )
            self._items.append(item)

        logger.info(
            f"Added {safe_id} '{sanitize_string_for_logging(item.product_name)}' ({safe_bundle}) x{item.quantity}: "
            f"{item.computed_discounted_price} (was {item.computed_original_price})"
        )
        return CartOutcome.success(item)

    async def _lookup_snapshot(self, product_id: str) -> ProductSnapshot:
        if self._lookup is None:
            raise ProductLookupError(product_id, ERROR_PRODUCT_LOOKUP_UNAVAILABLE)
        return await resolve_snapshot(
            self._lookup,
            product_id,
            timeout=self._settings.lookup_timeout_seconds,
        )

    def remove_line_item(self, line_id: str) -> bool:
        """Remove a line item; unknown ids are a no-op. Returns True if removed."""
        item = self.get_line_item(line_id)
        if item is None:
            return False
        self._items.remove(item)
        logger.info(f"Removed line {line_id} ({sanitize_id_for_logging(item.product_id)})")
        return True

    def update_quantity(self, line_id: str, new_quantity: int) -> CartOutcome:
        """
        Change the quantity of an un-bundled line item.

        Bundle-tiered lines have a fixed quantity; remove and re-add to change tier.
        """
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int) or new_quantity <= 0:
            return CartOutcome.failure(CartError.INVALID_QUANTITY)

        item = self.get_line_item(line_id)
        if item is None:
            return CartOutcome.failure(CartError.LINE_ITEM_NOT_FOUND)
        if item.bundle_tier is not None:
            return CartOutcome.failure(CartError.BUNDLE_QUANTITY_FIXED)

        price = round_money(multiply(item.unit_price, new_quantity))
        item.quantity = new_quantity
        item.computed_original_price = price
        item.computed_discounted_price = price
        return CartOutcome.success(item)

    def clear(self) -> None:
        """Empty the cart. In-flight adds keep their reservations."""
        self._items.clear()
        logger.info("Cart cleared")

    @property
    def total_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total_original_price(self) -> Decimal:
        return sum((item.computed_original_price for item in self._items), Decimal("0"))

    @property
    def total_discounted_price(self) -> Decimal:
        return sum((item.computed_discounted_price for item in self._items), Decimal("0"))

    @property
    def total_savings(self) -> Decimal:
        return sum((item.savings for item in self._items), Decimal("0"))

    def bundle_options(self, unit_price) -> List[dict]:
        """Pricing of every configured tier for one unit price, smallest first."""
        options = []
        for tier in sorted(self._tiers.values(), key=lambda t: t.quantity):
            original = tier.original_price(unit_price)
            discounted = tier.discounted_price(unit_price)
            options.append({
                "identifier": tier.identifier,
                "quantity": tier.quantity,
                "discount_percent": float(tier.discount_percent),
                "display_label": tier.display_label,
                "original_price": to_float(original),
                "discounted_price": to_float(discounted),
                "savings": to_float(subtract(original, discounted)),
            })
        return options

    def summary(self) -> dict:
        """Cart summary for checkout hand-off; floats at the boundary."""
        if not self._items:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "original_total": 0.0,
                "subtotal": 0.0,
                "total_savings": 0.0,
                "shipping_fee": 0.0,
                "final_total": 0.0,
                "currency": self._settings.currency,
            }

        shipping = self._settings.shipping_fee
        return {
            "is_empty": False,
            "total_items": self.total_item_count,
            "items": [
                {
                    "line_id": item.line_id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "bundle": item.bundle_identifier,
                    "label": item.bundle_tier.display_label if item.bundle_tier else "",
                    "quantity": item.quantity,
                    "unit_price": to_float(item.unit_price),
                    "original_price": to_float(item.computed_original_price),
                    "discounted_price": to_float(item.computed_discounted_price),
                }
                for item in self._items
            ],
            "original_total": to_float(self.total_original_price),
            "subtotal": to_float(self.total_discounted_price),
            "total_savings": to_float(self.total_savings),
            "shipping_fee": to_float(shipping),
            "final_total": to_float(add(self.total_discounted_price, shipping)),
            "currency": self._settings.currency,
        }

    def snapshot(self) -> List[dict]:
        """Serializable copy of the line items, e.g. for a guest-cart store."""
        return [item.to_dict() for item in self._items]

    def restore(self, items: Iterable[dict]) -> int:
        """
        Replace the cart contents with previously snapshotted line items.

        Entries repeating a composite key, or whose key has an add in flight,
        are skipped. Returns the number loaded.
        """
        restored: List[CartLineItem] = []
        seen = set()
        for data in items:
            item = CartLineItem.from_dict(data)
            if item.composite_key in seen or self._guard.is_pending(item.composite_key):
                logger.warning(
                    f"Skipping duplicate line on restore: "
                    f"{sanitize_id_for_logging(item.product_id)}/"
                    f"{sanitize_string_for_logging(item.bundle_identifier or 'no bundle', max_length=20)}"
                )
                continue
            seen.add(item.composite_key)
            restored.append(item)

        self._items = restored
        logger.info(f"Restored {len(restored)} cart line(s)")
        return len(restored)
