"""
Módulo de base de datos.

Provee acceso a Supabase y operaciones CRUD.
"""

from nido.database.supabase_client import get_supabase_client, SupabaseClient
from nido.database.repositories import (
    BrowsingHistoryRepository,
    ListingRepository,
)

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "ListingRepository",
    "BrowsingHistoryRepository",
]
