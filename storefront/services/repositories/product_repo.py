"""Product Repository - affiliate catalog reads."""
from typing import Optional

from .base import BaseRepository
from storefront.services.models import Product

PRODUCT_COLUMNS = "id,name,price,original_price,description,image,category,in_stock,affiliate_link,external_url,retailer"


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None when it does not exist."""
        result = (
            await self.client.table("products")
            .select(PRODUCT_COLUMNS)
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return Product(**result.data[0])
