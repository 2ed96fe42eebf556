"""Supabase session backend, cookie storage and auth models."""

from src.hausaworld.services.auth.backend import (
    SessionBackend,
    SupabaseSessionBackend,
    extract_auth_code,
)
from src.hausaworld.services.auth.cookies import CookieSessionStorage
from src.hausaworld.services.auth.dependencies import (
    build_session_backend,
    get_cookie_storage,
    SessionBackendFactory,
    get_session_backend_factory,
)
from src.hausaworld.services.auth.exceptions import (
    AdminConfigurationError,
    ProfileWriteError,
    SessionBackendError,
)
from src.hausaworld.services.auth.models import AuthSession, UserIdentity

__all__ = [
    "SessionBackend",
    "SupabaseSessionBackend",
    "extract_auth_code",
    "CookieSessionStorage",
    "build_session_backend",
    "get_cookie_storage",
    "SessionBackendFactory",
    "get_session_backend_factory",
    "AdminConfigurationError",
    "ProfileWriteError",
    "SessionBackendError",
    "AuthSession",
    "UserIdentity",
]
