"""
Database Module - Supabase clients

Provides lazily created singletons of:
- Async Supabase client (preferred)
- Sync Supabase client for scripts and non-async contexts
"""

import os
from typing import Optional

from supabase import create_client, Client
from supabase._async.client import AsyncClient, create_client as acreate_client

from storefront.errors import ERROR_SUPABASE_NOT_CONFIGURED


_supabase_client: Optional[Client] = None
_async_supabase_client: Optional[AsyncClient] = None


def _credentials() -> tuple[str, str]:
    url = os.environ.get("SUPABASE_URL", "")
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
    if not url or not key:
        raise ValueError(ERROR_SUPABASE_NOT_CONFIGURED)
    return url, key


def get_supabase_sync() -> Client:
    """
    Get synchronous Supabase client (singleton).
    Use for sync contexts only.
    """
    global _supabase_client

    if _supabase_client is None:
        url, key = _credentials()
        _supabase_client = create_client(url, key)

    return _supabase_client


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).
    Preferred for all async operations.
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        url, key = _credentials()
        _async_supabase_client = await acreate_client(url, key)

    return _async_supabase_client


def reset_clients() -> None:
    """Drop cached clients (tests, credential rotation)."""
    global _supabase_client, _async_supabase_client
    _supabase_client = None
    _async_supabase_client = None
