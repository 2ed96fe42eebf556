"""FastAPI dependencies wiring request cookies to the Supabase session backend."""

from collections.abc import Callable
from functools import partial

from fastapi import Depends, Request

from src.hausaworld.services.auth.backend import SessionBackend, SupabaseSessionBackend
from src.hausaworld.services.auth.cookies import CookieSessionStorage
from src.hausaworld.services.database.connection import create_session_client

SessionBackendFactory = Callable[[], SessionBackend]


def build_session_backend(storage: CookieSessionStorage) -> SessionBackend:
    """
    Build a Supabase-backed session backend over request-scoped storage.

    Args:
        storage: Cookie storage for the current request

    Returns:
        SessionBackend bound to that request only
    """
    return SupabaseSessionBackend(create_session_client(storage))


def get_cookie_storage(request: Request) -> CookieSessionStorage:
    """
    Get the cookie storage for the current request.

    Created once per request and kept on ``request.state`` so the backend and
    the handler writing the response share the same buffered cookie writes.
    """
    storage = getattr(request.state, "session_storage", None)
    if storage is None:
        storage = CookieSessionStorage(request.cookies)
        request.state.session_storage = storage
    return storage


def get_session_backend_factory(
    storage: CookieSessionStorage = Depends(get_cookie_storage),
) -> SessionBackendFactory:
    """
    Get a factory for the per-request session backend.

    The backend is built by the sign-in and callback flows inside their own
    error handling, so a client that cannot be created ends in a redirect.
    """
    return partial(build_session_backend, storage)
