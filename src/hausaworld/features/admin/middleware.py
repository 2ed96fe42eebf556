"""Admin route gate: session and allow-list checks ahead of any /admin page."""

import logging
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.hausaworld.config import Settings, get_settings, settings
from src.hausaworld.features.auth.redirects import (
    ErrorTag,
    auth_page_url,
    home_page_url,
    redirect_to,
)
from src.hausaworld.services import PostHogService
from src.hausaworld.services.auth.backend import SessionBackend
from src.hausaworld.services.auth.cookies import CookieSessionStorage
from src.hausaworld.services.auth.dependencies import build_session_backend
from src.hausaworld.services.auth.exceptions import AdminConfigurationError, SessionBackendError

logger = logging.getLogger(__name__)


def parse_admin_emails(value: str | None) -> list[str]:
    """
    Parse the comma-separated admin allow-list.

    Entries are trimmed and empty entries dropped. Matching against the
    result is exact and case-sensitive.

    Args:
        value: Raw ADMIN_EMAILS value

    Returns:
        List of admin emails

    Raises:
        AdminConfigurationError: If the value is unset or blank

    Example:
        >>> parse_admin_emails("a@x.com, b@x.com,")
        ['a@x.com', 'b@x.com']
    """
    if value is None or not value.strip():
        raise AdminConfigurationError()
    return [email.strip() for email in value.split(",") if email.strip()]


class AdminGateMiddleware(BaseHTTPMiddleware):
    """
    Gate every request under the admin path prefix.

    Requests outside the prefix pass through untouched. Inside it, the user
    needs a valid session whose email is on the admin allow-list; every other
    outcome, including errors, ends in a redirect. The allow-list is read from
    a fresh Settings on each request.

    Args:
        app: Downstream ASGI app
        path_prefix: Protected path prefix (defaults to settings.admin_path_prefix)
        backend_factory: Builds the session backend over request cookie storage
        settings_provider: Returns the settings to read ADMIN_EMAILS from
    """

    def __init__(
        self,
        app: ASGIApp,
        path_prefix: str | None = None,
        backend_factory: Callable[[CookieSessionStorage], SessionBackend] = build_session_backend,
        settings_provider: Callable[[], Settings] = get_settings,
    ) -> None:
        super().__init__(app)
        self.path_prefix = (path_prefix or settings.admin_path_prefix).rstrip("/")
        self.backend_factory = backend_factory
        self.settings_provider = settings_provider

    def is_protected(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(f"{self.path_prefix}/")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.is_protected(request.url.path):
            return await call_next(request)

        storage = CookieSessionStorage(request.cookies)
        try:
            backend = self.backend_factory(storage)
            try:
                session = await backend.get_session()
            except SessionBackendError as e:
                logger.info(f"Admin access denied: session lookup failed ({e.message})")
                return redirect_to(auth_page_url(), storage)

            if session is None or not session.user.email:
                logger.info("Admin access denied: No valid session")
                return redirect_to(auth_page_url(), storage)

            email = session.user.email
            try:
                allowed = parse_admin_emails(self.settings_provider().admin_emails)
            except AdminConfigurationError as e:
                logger.error(e.message, extra={"error_type": "admin_config"})
                return redirect_to(auth_page_url(ErrorTag.ADMIN_CONFIG), storage)

            if email not in allowed:
                logger.info(f"Admin access denied for email: {email}")
                PostHogService().capture(
                    distinct_id=str(session.user.id),
                    event="admin_access_denied",
                    properties={"path": request.url.path},
                )
                return redirect_to(home_page_url(ErrorTag.ADMIN_ACCESS), storage)

            logger.info(f"Admin access granted for: {email}")
            request.state.user = session.user
        except Exception as e:
            logger.error(f"Middleware error: {e}", exc_info=True, extra={"error_type": "middleware"})
            return redirect_to(auth_page_url(ErrorTag.MIDDLEWARE))

        response = await call_next(request)
        return storage.apply_to(response)
