"""Pydantic models for hosted catalog rows."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.services.money import to_decimal as _to_decimal


class Product(BaseModel):
    """Row of the ``products`` table (affiliate catalog)."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    price: Decimal
    original_price: Optional[Decimal] = None
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    in_stock: bool = True
    affiliate_link: Optional[str] = None
    external_url: Optional[str] = None
    retailer: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("original_price", mode="before")
    @classmethod
    def convert_original_price(cls, v):
        return None if v is None else _to_decimal(v)


class BundleDeal(BaseModel):
    """Row of the ``bundle_deals`` table: buy N of a product, save X%."""
    model_config = ConfigDict(extra="ignore")

    id: str
    product_id: str
    bundle_type: str  # get2, get3, get4, get5
    discount_percentage: Decimal
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("discount_percentage", mode="before")
    @classmethod
    def convert_discount(cls, v):
        return _to_decimal(v)

    @property
    def required_quantity(self) -> int:
        """Units in the bundle, parsed from ``bundle_type`` (``get3`` -> 3)."""
        suffix = self.bundle_type.lower().removeprefix("get")
        if not suffix.isdigit() or int(suffix) < 1:
            raise ValueError(f"Invalid bundle_type: {self.bundle_type}")
        return int(suffix)
