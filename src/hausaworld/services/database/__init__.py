"""Database connection and query helpers."""

from src.hausaworld.services.database.connection import (
    create_session_client,
    get_supabase_admin_client,
)
from src.hausaworld.services.database.utils import SupabaseQueryBuilder, get_query_builder

__all__ = [
    "create_session_client",
    "get_supabase_admin_client",
    "SupabaseQueryBuilder",
    "get_query_builder",
]
