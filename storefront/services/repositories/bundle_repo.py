"""Bundle Deal Repository - volume discounts configured by admins."""
from typing import List

from .base import BaseRepository
from storefront.services.models import BundleDeal


class BundleDealRepository(BaseRepository):
    """``bundle_deals`` table operations."""

    async def get_for_product(self, product_id: str, active_only: bool = True) -> List[BundleDeal]:
        """Bundle deals for one product, ordered by bundle size."""
        query = self.client.table("bundle_deals").select("*").eq("product_id", product_id)
        if active_only:
            query = query.eq("is_active", True)
        result = await query.order("bundle_type").execute()
        return [BundleDeal(**row) for row in result.data or []]
