"""
Common error constants and exception types.

Expected outcomes of shopper interaction (duplicate adds, bad quantities)
are returned as ``CartOutcome`` values by the cart; the exceptions here
cover collaborator failures and misuse.
"""

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_LOOKUP_FAILED = "Product lookup failed"
ERROR_PRODUCT_LOOKUP_TIMEOUT = "Product lookup timed out"
ERROR_PRODUCT_LOOKUP_UNAVAILABLE = "No product snapshot given and no product lookup configured"

# Cart errors
ERROR_UNKNOWN_BUNDLE = "Unknown bundle tier"
ERROR_KEY_RESERVED = "Cart key is already reserved"

# Configuration errors
ERROR_SUPABASE_NOT_CONFIGURED = "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set"


class StorefrontError(Exception):
    """Base error for the storefront package."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ProductLookupError(StorefrontError):
    """The product lookup collaborator could not produce a snapshot."""

    def __init__(self, product_id: str, message: str = ERROR_PRODUCT_LOOKUP_FAILED) -> None:
        super().__init__(f"{message}: {product_id}", code="PRODUCT_LOOKUP")
        self.product_id = product_id


class KeyAlreadyReserved(StorefrontError):
    """An in-flight reservation already exists for the key."""

    def __init__(self, key: tuple) -> None:
        super().__init__(f"{ERROR_KEY_RESERVED}: {key!r}", code="KEY_RESERVED")
        self.key = key
