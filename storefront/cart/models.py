"""Cart models with Decimal-based bundle pricing."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from storefront.services.money import to_decimal, round_money, multiply, apply_discount, subtract

# (product_id, bundle identifier); None marks an un-bundled add
CompositeKey = Tuple[str, Optional[str]]


class CartError(str, Enum):
    """Expected, recoverable cart failures returned to the caller."""
    DUPLICATE_IN_FLIGHT = "duplicate_in_flight"
    DUPLICATE_LINE_ITEM = "duplicate_line_item"
    INVALID_QUANTITY = "invalid_quantity"
    LINE_ITEM_NOT_FOUND = "line_item_not_found"
    BUNDLE_QUANTITY_FIXED = "bundle_quantity_fixed"


@dataclass(frozen=True)
class BundleTier:
    """Quantity tier with a volume discount, e.g. buy 3 at 20% off."""
    identifier: str
    quantity: int
    discount_percent: Decimal = Decimal("0")
    display_label: str = ""

    def __post_init__(self):
        if not self.identifier:
            raise ValueError("identifier must be a non-empty string")
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("quantity must be a positive integer")
        # frozen: normalize through object.__setattr__
        discount = to_decimal(self.discount_percent)
        if discount < 0 or discount > 100:
            raise ValueError("discount_percent must be between 0 and 100")
        object.__setattr__(self, "discount_percent", discount)

    def original_price(self, unit_price) -> Decimal:
        """List price of every unit in the tier."""
        return round_money(multiply(unit_price, self.quantity))

    def discounted_price(self, unit_price) -> Decimal:
        """Tier price after the volume discount."""
        return apply_discount(self.original_price(unit_price), self.discount_percent)

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "quantity": self.quantity,
            "discount_percent": str(self.discount_percent),
            "display_label": self.display_label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BundleTier":
        return cls(
            identifier=data["identifier"],
            quantity=int(data["quantity"]),
            discount_percent=to_decimal(data.get("discount_percent", 0)),
            display_label=data.get("display_label", ""),
        )


def new_line_id() -> str:
    return f"line_{uuid.uuid4().hex[:12]}"


@dataclass
class CartLineItem:
    """Single line in the cart; name and price are snapshotted at add time."""
    product_id: str
    product_name: str
    unit_price: Decimal
    quantity: int
    computed_original_price: Decimal
    computed_discounted_price: Decimal
    bundle_tier: Optional[BundleTier] = None
    line_id: str = field(default_factory=new_line_id)
    added_at: str = ""

    def __post_init__(self):
        if not self.added_at:
            self.added_at = datetime.now(timezone.utc).isoformat()
        self.unit_price = to_decimal(self.unit_price)
        self.computed_original_price = to_decimal(self.computed_original_price)
        self.computed_discounted_price = to_decimal(self.computed_discounted_price)

    @classmethod
    def priced(
        cls,
        product_id: str,
        product_name: str,
        unit_price,
        bundle_tier: Optional[BundleTier] = None,
    ) -> "CartLineItem":
        """Build a line item with prices computed from the tier (or a single unit)."""
        unit_price = to_decimal(unit_price)
        if bundle_tier is None:
            original = round_money(unit_price)
            return cls(
                product_id=product_id,
                product_name=product_name,
                unit_price=unit_price,
                quantity=1,
                computed_original_price=original,
                computed_discounted_price=original,
            )
        return cls(
            product_id=product_id,
            product_name=product_name,
            unit_price=unit_price,
            quantity=bundle_tier.quantity,
            computed_original_price=bundle_tier.original_price(unit_price),
            computed_discounted_price=bundle_tier.discounted_price(unit_price),
            bundle_tier=bundle_tier,
        )

    @property
    def bundle_identifier(self) -> Optional[str]:
        return self.bundle_tier.identifier if self.bundle_tier else None

    @property
    def composite_key(self) -> CompositeKey:
        return (self.product_id, self.bundle_identifier)

    @property
    def savings(self) -> Decimal:
        """Amount saved by the bundle discount."""
        return subtract(self.computed_original_price, self.computed_discounted_price)

    def to_dict(self) -> dict:
        """JSON-safe snapshot (Decimals as strings)."""
        return {
            "line_id": self.line_id,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "bundle_tier": self.bundle_tier.to_dict() if self.bundle_tier else None,
            "computed_original_price": str(self.computed_original_price),
            "computed_discounted_price": str(self.computed_discounted_price),
            "added_at": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        tier_data = data.get("bundle_tier")
        return cls(
            line_id=data["line_id"],
            product_id=data["product_id"],
            product_name=data["product_name"],
            unit_price=to_decimal(data["unit_price"]),
            quantity=int(data["quantity"]),
            bundle_tier=BundleTier.from_dict(tier_data) if tier_data else None,
            computed_original_price=to_decimal(data["computed_original_price"]),
            computed_discounted_price=to_decimal(data["computed_discounted_price"]),
            added_at=data.get("added_at", ""),
        )


@dataclass(frozen=True)
class CartOutcome:
    """Result of a cart mutation: the affected line item or a CartError tag."""
    item: Optional[CartLineItem] = None
    error: Optional[CartError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, item: CartLineItem) -> "CartOutcome":
        return cls(item=item)

    @classmethod
    def failure(cls, error: CartError) -> "CartOutcome":
        return cls(error=error)
