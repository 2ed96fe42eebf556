"""Supabase connection management."""

from functools import lru_cache
from typing import TYPE_CHECKING

from supabase import Client, ClientOptions, create_client

from src.hausaworld.config import settings

if TYPE_CHECKING:
    from src.hausaworld.services.auth.cookies import CookieSessionStorage


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """
    Get Supabase admin client with service role key (singleton pattern).

    This client bypasses Row-Level Security (RLS) policies and should be used
    for server-side operations that have their own authentication/authorization.

    ⚠️ WARNING: This client has full database access. Only use for trusted server-side operations.

    Returns:
        Configured Supabase client with service role key (bypasses RLS)

    Example:
        >>> client = get_supabase_admin_client()
        >>> response = client.table("profiles").upsert(data, on_conflict="id").execute()
    """
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def create_session_client(storage: "CookieSessionStorage") -> Client:
    """
    Create a per-request Supabase client whose auth state lives in cookies.

    Never cached: each request gets its own client so sessions are never
    shared between users. Uses the PKCE flow so the code verifier written
    at sign-in is read back from the cookie at callback time.

    Args:
        storage: Request-scoped cookie storage

    Returns:
        Supabase client bound to the request's session cookies
    """
    options = ClientOptions(
        storage=storage,
        flow_type="pkce",
        auto_refresh_token=False,
        persist_session=True,
    )
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)
