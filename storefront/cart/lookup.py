"""Product lookup collaborators: resolve a product id to a name/price snapshot."""
import asyncio
import inspect
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Mapping, Optional, Protocol, Union

from storefront.errors import (
    ERROR_PRODUCT_LOOKUP_FAILED,
    ERROR_PRODUCT_LOOKUP_TIMEOUT,
    ERROR_PRODUCT_NOT_FOUND,
    ProductLookupError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.repositories import ProductRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductSnapshot:
    """Name and unit price of a product at the moment it is added."""
    product_id: str
    name: str
    unit_price: Decimal

    def __post_init__(self):
        price = self.unit_price
        if not isinstance(price, Decimal):
            try:
                price = Decimal(str(price))
            except InvalidOperation as e:
                raise ValueError(f"unit_price is not a number: {self.unit_price!r}") from e
        if not price.is_finite() or price < 0:
            raise ValueError("unit_price must be a non-negative number")
        object.__setattr__(self, "unit_price", price)


SnapshotResult = Union[Optional[ProductSnapshot], Awaitable[Optional[ProductSnapshot]]]


class ProductLookup(Protocol):
    """Anything that maps a product id to a snapshot, sync or async."""

    def get_snapshot(self, product_id: str) -> SnapshotResult:
        ...


class StaticProductLookup:
    """In-memory lookup over a ``{product_id: (name, price)}`` mapping."""

    def __init__(self, products: Mapping[str, tuple]) -> None:
        self._products = dict(products)

    def get_snapshot(self, product_id: str) -> Optional[ProductSnapshot]:
        entry = self._products.get(product_id)
        if entry is None:
            return None
        name, price = entry
        return ProductSnapshot(product_id=product_id, name=name, unit_price=price)


class CatalogProductLookup:
    """Lookup backed by the hosted ``products`` table."""

    def __init__(self, repo: ProductRepository) -> None:
        self.repo = repo

    async def get_snapshot(self, product_id: str) -> Optional[ProductSnapshot]:
        product = await self.repo.get_by_id(product_id)
        if product is None:
            return None
        return ProductSnapshot(product_id=product.id, name=product.name, unit_price=product.price)


async def resolve_snapshot(
    lookup: ProductLookup,
    product_id: str,
    timeout: Optional[float] = None,
) -> ProductSnapshot:
    """
    Resolve a snapshot through ``lookup``, bounded by ``timeout`` seconds.

    Raises:
        ProductLookupError: product missing, lookup raised, or timed out
    """
    safe_id = sanitize_id_for_logging(product_id)
    try:
        result = lookup.get_snapshot(product_id)
        if inspect.isawaitable(result):
            if timeout:
                result = await asyncio.wait_for(result, timeout=timeout)
            else:
                result = await result
    except asyncio.TimeoutError as e:
        logger.warning(f"Product lookup timed out after {timeout}s for {safe_id}")
        raise ProductLookupError(product_id, ERROR_PRODUCT_LOOKUP_TIMEOUT) from e
    except ProductLookupError:
        raise
    except Exception as e:
        logger.error(f"Product lookup failed for {safe_id}: {e}")
        raise ProductLookupError(product_id, ERROR_PRODUCT_LOOKUP_FAILED) from e

    if result is None:
        raise ProductLookupError(product_id, ERROR_PRODUCT_NOT_FOUND)
    return result
