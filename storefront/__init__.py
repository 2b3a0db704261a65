"""Affiliate storefront: bundle-aware shopping cart and catalog access."""

__version__ = "0.1.0"
