"""Supabase repositories."""
from .base import BaseRepository
from .product_repo import ProductRepository
from .bundle_repo import BundleDealRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "BundleDealRepository",
]
