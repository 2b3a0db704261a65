"""Catalog access and money helpers backing the cart."""
