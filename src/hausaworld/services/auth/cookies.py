"""Cookie-backed storage for the Supabase auth client."""

import logging
from collections.abc import Mapping

from starlette.responses import Response

from src.hausaworld.config import settings

logger = logging.getLogger(__name__)


class CookieSessionStorage:
    """
    Request-scoped storage handed to the Supabase auth client.

    Supabase keeps the session and the PKCE code verifier in its storage.
    Reads come from the incoming request cookies; writes are buffered and
    written onto the outgoing response with ``apply_to``.

    Args:
        cookies: Cookies of the incoming request
        prefix: Cookie name prefix
        secure: Set the ``Secure`` flag on written cookies
        max_age: Lifetime of written cookies in seconds
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        prefix: str | None = None,
        secure: bool | None = None,
        max_age: int | None = None,
    ) -> None:
        self._cookies = dict(cookies)
        self._pending: dict[str, str | None] = {}
        self.prefix = prefix or settings.session_cookie_prefix
        self.secure = settings.session_cookie_secure if secure is None else secure
        self.max_age = max_age or settings.session_cookie_max_age_seconds

    def cookie_name(self, key: str) -> str:
        """Map a Supabase storage key to a cookie name."""
        return f"{self.prefix}-{key.replace('.', '-')}"

    def get_item(self, key: str) -> str | None:
        name = self.cookie_name(key)
        if name in self._pending:
            return self._pending[name]
        return self._cookies.get(name)

    def set_item(self, key: str, value: str) -> None:
        self._pending[self.cookie_name(key)] = value

    def remove_item(self, key: str) -> None:
        self._pending[self.cookie_name(key)] = None

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def apply_to(self, response: Response) -> Response:
        """
        Write buffered cookie changes onto a response.

        Args:
            response: Outgoing response (redirect or page)

        Returns:
            The same response, for chaining
        """
        for name, value in self._pending.items():
            if value is None:
                response.delete_cookie(name, path="/")
            else:
                response.set_cookie(
                    name,
                    value,
                    max_age=self.max_age,
                    path="/",
                    secure=self.secure,
                    httponly=True,
                    samesite="lax",
                )
        if self._pending:
            logger.debug(f"Applied {len(self._pending)} session cookie change(s)")
        return response
