"""Database utility functions for Supabase interactions."""

import logging
from typing import Any

from supabase import Client

from src.hausaworld.services.database.connection import get_supabase_admin_client

logger = logging.getLogger(__name__)


class SupabaseQueryBuilder:
    """Helper class for building and executing Supabase queries."""

    def __init__(self, client: Client | None = None) -> None:
        """
        Initialize query builder.

        Args:
            client: Supabase client instance (uses the service-role client if None)
        """
        self.client = client or get_supabase_admin_client()

    def upsert_record(
        self,
        table: str,
        record: dict[str, Any],
        conflict_columns: list[str],
        ignore_duplicates: bool = False,
    ) -> dict[str, Any] | None:
        """
        Insert or update a record atomically using PostgreSQL UPSERT.

        Args:
            table: Name of the table
            record: Record data to insert/update
            conflict_columns: Column(s) to check for conflicts (e.g., ["id"])
            ignore_duplicates: Skip conflicting rows instead of updating them

        Returns:
            The inserted or updated record, or None if nothing was returned

        Raises:
            Exception: If the operation fails

        Example:
            >>> builder = SupabaseQueryBuilder()
            >>> builder.upsert_record(
            ...     "profiles",
            ...     {"id": "123", "email": "test@example.com"},
            ...     conflict_columns=["id"]
            ... )
        """
        try:
            result = (
                self.client.table(table)
                .upsert(
                    record,
                    on_conflict=",".join(conflict_columns),
                    ignore_duplicates=ignore_duplicates,
                )
                .execute()
            )
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Failed to upsert record in {table}: {e}")
            raise


def get_query_builder(client: Client | None = None) -> SupabaseQueryBuilder:
    """
    Get instance of SupabaseQueryBuilder.

    Profile writes happen server-side after the code exchange, so the
    default is the service-role client that bypasses RLS.

    Args:
        client: Optional Supabase client (uses the admin client if None)

    Returns:
        SupabaseQueryBuilder instance

    Example:
        >>> db = get_query_builder()
        >>> db.upsert_record("profiles", record, conflict_columns=["id"])
    """
    return SupabaseQueryBuilder(client or get_supabase_admin_client())
