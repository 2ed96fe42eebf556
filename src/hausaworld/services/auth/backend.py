"""Session backend: the Supabase Auth calls this service depends on."""

import logging
from typing import Any, Protocol

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import URL, QueryParams
from supabase import Client

from src.hausaworld.services.auth.exceptions import SessionBackendError
from src.hausaworld.services.auth.models import AuthSession

logger = logging.getLogger(__name__)


class SessionBackend(Protocol):
    """Auth operations consumed by the sign-in, callback and admin gate flows."""

    async def sign_in_with_oauth(self, provider: str, redirect_to: str) -> str:
        """Start an OAuth flow and return the provider authorization URL."""
        ...

    async def exchange_code_for_session(self, current_url: str) -> AuthSession | None:
        """Exchange the authorization code found in ``current_url`` for a session."""
        ...

    async def get_session(self) -> AuthSession | None:
        """Return the current session, refreshing it if needed."""
        ...


def _error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error) or error.__class__.__name__


def extract_auth_code(current_url: str) -> str:
    """
    Read the OAuth authorization code from a callback URL.

    Args:
        current_url: Full URL of the callback request

    Returns:
        The ``code`` query parameter

    Raises:
        SessionBackendError: If the URL carries no code (including provider errors)
    """
    params = QueryParams(URL(current_url).query)
    code = params.get("code")
    if code:
        return code

    provider_error = params.get("error")
    if provider_error:
        description = params.get("error_description", "")
        logger.warning(
            f"OAuth provider returned an error: {provider_error} {description}".strip(),
            extra={"error_type": "oauth_provider_error", "provider_error": provider_error},
        )
        raise SessionBackendError(f"OAuth provider error: {provider_error}")
    raise SessionBackendError("Missing authorization code in callback URL")


class SupabaseSessionBackend:
    """
    SessionBackend over a per-request Supabase client.

    The synchronous Supabase client runs in the threadpool so each call is
    the only suspension point of the awaiting handler. Every Supabase failure
    is re-raised as SessionBackendError.

    Args:
        client: Supabase client bound to the request's cookie storage
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    async def _call(self, operation: str, func: Any, *args: Any) -> Any:
        try:
            return await run_in_threadpool(func, *args)
        except Exception as e:
            logger.warning(
                f"Supabase auth {operation} failed: {_error_message(e)}",
                extra={"error_type": f"{operation}_failed"},
            )
            raise SessionBackendError(_error_message(e)) from e

    async def sign_in_with_oauth(self, provider: str, redirect_to: str) -> str:
        response = await self._call(
            "sign_in_with_oauth",
            self.client.auth.sign_in_with_oauth,
            {"provider": provider, "options": {"redirect_to": redirect_to}},
        )
        return response.url

    async def exchange_code_for_session(self, current_url: str) -> AuthSession | None:
        code = extract_auth_code(current_url)
        response = await self._call(
            "exchange_code_for_session",
            self.client.auth.exchange_code_for_session,
            {"auth_code": code},
        )
        if response is None or response.session is None:
            return None
        return AuthSession.from_supabase(response.session)

    async def get_session(self) -> AuthSession | None:
        session = await self._call("get_session", self.client.auth.get_session)
        if session is None:
            return None
        return AuthSession.from_supabase(session)
